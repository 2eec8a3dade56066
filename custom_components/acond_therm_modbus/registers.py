"""Register map of the AcondTherm heat pump Modbus/TCP interface.

All temperature registers hold tenths of a degree Celsius.
"""
from __future__ import annotations

from enum import IntEnum


class HoldingRegister(IntEnum):
    """Writable setpoint registers."""

    TARGET_INDOOR_TEMPERATURE = 0
    TARGET_TUV_TEMPERATURE = 4


class InputRegister(IntEnum):
    """Offsets inside the input register block read on every poll."""

    TARGET_INDOOR_TEMPERATURE = 0
    CURRENT_INDOOR_TEMPERATURE = 1
    TARGET_TUV_TEMPERATURE = 4
    CURRENT_TUV_TEMPERATURE = 5
    STATUS = 6
    CURRENT_AIR_TEMPERATURE = 9


class StatusBit(IntEnum):
    """Bit positions inside the status word (higher bits are reserved)."""

    ON = 0
    RUNNING = 1
    FAILURE = 2
    TUV_HEATING = 3


# The whole block is read in a single request
INPUT_REGISTERS_START = 0
INPUT_REGISTERS_COUNT = 24

TEMPERATURE_SCALE = 10
