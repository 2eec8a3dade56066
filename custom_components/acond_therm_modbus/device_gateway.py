"""AcondGateway: maps the heat pump registers to semantic values."""
from __future__ import annotations

import logging
from typing import Optional

from .connection_manager import ConnectionManager
from .exceptions import AcondReadError, AcondWriteError
from .models import DeviceState, SetpointKind, StatusFlags, encode_temperature
from .registers import INPUT_REGISTERS_COUNT, INPUT_REGISTERS_START

_LOGGER = logging.getLogger(__name__)


class AcondGateway:
    """High-level adapter for a single AcondTherm heat pump.

    The gateway holds the last `DeviceState` snapshot populated by
    `synchronize()`. The snapshot and its decoded status flags are replaced
    together, never field by field.
    """

    def __init__(self, connection: ConnectionManager, name: str = "AcondTherm"):
        self.connection = connection
        self.name = name
        self.state: Optional[DeviceState] = None
        self.flags = StatusFlags()

    @property
    def host(self) -> str:
        return self.connection.host

    # ---------- SYNCHRONIZATION ----------

    async def synchronize(self) -> DeviceState:
        """Read the input register block and replace the cached snapshot.

        Raises:
            AcondConnectionError: If the device cannot be reached
            AcondReadError: If the batch read fails
        """
        # Assume the device is back; the connection manager flags it again if not
        self.connection.is_offline = False

        protocol = await self.connection.acquire()

        try:
            values = await protocol.read_input_registers(
                INPUT_REGISTERS_START, INPUT_REGISTERS_COUNT
            )
        except AcondReadError:
            await self.connection.invalidate()
            raise

        state = DeviceState.from_registers(values)
        _LOGGER.debug("Current state of %s: %s", self.host, state)

        self.state, self.flags = state, state.flags
        return state

    async def set_target_temperature(self, kind: SetpointKind, celsius: float) -> None:
        """Write a setpoint. Bounds are validated by the caller.

        Raises:
            AcondConnectionError: If the device cannot be reached
            AcondWriteError: If the register write fails
        """
        protocol = await self.connection.acquire()
        raw = encode_temperature(celsius)
        try:
            await protocol.write_register(kind.register, raw)
        except AcondWriteError:
            await self.connection.invalidate()
            raise
        _LOGGER.info("Set %s target temperature of %s to %s°C (raw=%d)",
                     kind.name, self.host, celsius, raw)

    # ---------- READ ACCESSORS (from snapshot) ----------

    def get_current_heating_temperature(self) -> Optional[float]:
        return self.state.current_indoor_temperature if self.state else None

    def get_target_heating_temperature(self) -> Optional[float]:
        return self.state.target_indoor_temperature if self.state else None

    def get_current_tuv_temperature(self) -> Optional[float]:
        return self.state.current_tuv_temperature if self.state else None

    def get_target_tuv_temperature(self) -> Optional[float]:
        return self.state.target_tuv_temperature if self.state else None

    def get_current_air_temperature(self) -> Optional[float]:
        return self.state.current_air_temperature if self.state else None

    def get_status_word(self) -> Optional[int]:
        return self.state.status if self.state else None

    @property
    def is_heating(self) -> bool:
        return self.flags.heating

    @property
    def is_tuv_heating(self) -> bool:
        return self.flags.tuv_heating

    @property
    def is_offline(self) -> bool:
        return self.connection.is_offline

    def get_device_info(self) -> "DeviceInfo":
        """Return Home Assistant DeviceInfo structure for this gateway."""
        from homeassistant.helpers.device_registry import DeviceInfo
        from .const import DOMAIN, MANUFACTURER, MODEL

        return DeviceInfo(
            identifiers={(DOMAIN, self.host)},
            name=self.name,
            manufacturer=MANUFACTURER,
            model=MODEL,
        )
