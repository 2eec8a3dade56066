"""Value objects decoded from the AcondTherm register block."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .registers import HoldingRegister, InputRegister, StatusBit, TEMPERATURE_SCALE


def decode_temperature(raw: int) -> float:
    """Convert a raw register word (i16, tenths of °C) to degrees Celsius."""
    # modbus-tk returns unsigned 16-bit; interpret signed
    if raw >= 0x8000:
        raw = raw - 0x10000
    return raw / TEMPERATURE_SCALE


def encode_temperature(celsius: float) -> int:
    """Convert degrees Celsius to a raw register word, truncating to tenths."""
    return int(celsius * TEMPERATURE_SCALE) & 0xFFFF


def _get_bit(value: int, bit: int) -> bool:
    return bool((value >> bit) & 1)


class SetpointKind(Enum):
    """Which setpoint a write targets."""

    INDOOR = HoldingRegister.TARGET_INDOOR_TEMPERATURE
    TUV = HoldingRegister.TARGET_TUV_TEMPERATURE

    @property
    def register(self) -> HoldingRegister:
        return self.value


@dataclass(frozen=True)
class StatusFlags:
    """Named view of the status word."""

    on: bool = False
    running: bool = False
    failure: bool = False
    tuv_heating: bool = False

    @classmethod
    def from_word(cls, status: int) -> "StatusFlags":
        return cls(
            on=_get_bit(status, StatusBit.ON),
            running=_get_bit(status, StatusBit.RUNNING),
            failure=_get_bit(status, StatusBit.FAILURE),
            tuv_heating=_get_bit(status, StatusBit.TUV_HEATING),
        )

    @property
    def heating(self) -> bool:
        """Whether the unit is heating the space.

        The device only reports a combined "running" bit, so this is also true
        while the unit is preparing to heat TUV.
        """
        return self.running and not self.tuv_heating


@dataclass(frozen=True)
class DeviceState:
    """Snapshot of one successful poll."""

    current_indoor_temperature: float
    target_indoor_temperature: float
    current_tuv_temperature: float
    target_tuv_temperature: float
    status: int
    current_air_temperature: float

    @classmethod
    def from_registers(cls, values: Sequence[int]) -> "DeviceState":
        """Decode the input register block (offset 0 at index 0)."""
        return cls(
            current_indoor_temperature=decode_temperature(
                values[InputRegister.CURRENT_INDOOR_TEMPERATURE]
            ),
            target_indoor_temperature=decode_temperature(
                values[InputRegister.TARGET_INDOOR_TEMPERATURE]
            ),
            current_tuv_temperature=decode_temperature(
                values[InputRegister.CURRENT_TUV_TEMPERATURE]
            ),
            target_tuv_temperature=decode_temperature(
                values[InputRegister.TARGET_TUV_TEMPERATURE]
            ),
            status=values[InputRegister.STATUS],
            current_air_temperature=decode_temperature(
                values[InputRegister.CURRENT_AIR_TEMPERATURE]
            ),
        )

    @property
    def flags(self) -> StatusFlags:
        return StatusFlags.from_word(self.status)
