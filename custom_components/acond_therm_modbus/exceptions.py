"""Exceptions raised by the AcondTherm Modbus integration."""


class AcondThermError(Exception):
    """Base exception for AcondTherm integration."""


class AcondConnectionError(AcondThermError):
    """Failed to open the Modbus/TCP connection to the device."""


class AcondReadError(AcondThermError):
    """Batch read of the input registers failed."""


class AcondWriteError(AcondThermError):
    """Writing a setpoint register failed."""
