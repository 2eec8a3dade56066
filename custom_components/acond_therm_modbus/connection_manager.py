"""ConnectionManager: owns the single Modbus/TCP connection to one device.

The connection is dialed lazily on first use and reused by every poll and
setpoint write until it is invalidated after a failure or closed on unload.

The manager also owns the offline flag. A failed dial starts an offline
episode, which is logged once and lasts until the next successful dial.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .const import DEFAULT_SLAVE_ID, MODBUS_TCP_PORT, MODBUS_TIMEOUT
from .exceptions import AcondConnectionError
from .modbus_protocol import ModbusProtocol

_LOGGER = logging.getLogger(__name__)


class ConnectionManager:
    """Lazily creates and reuses one ModbusProtocol per device."""

    def __init__(
        self,
        host: str,
        port: int = MODBUS_TCP_PORT,
        slave_id: int = DEFAULT_SLAVE_ID,
        timeout: float = MODBUS_TIMEOUT,
    ):
        self.host = host
        self.port = port
        self.slave_id = slave_id
        self.timeout = timeout

        self._protocol: Optional[ModbusProtocol] = None
        self._offline_episode = False
        self.is_offline = False

        self._lock = asyncio.Lock()
        """Serialises dialing so concurrent callers share one connection"""

    @property
    def is_connected(self) -> bool:
        return self._protocol is not None and self._protocol.is_connected

    async def acquire(self) -> ModbusProtocol:
        """Return the connected protocol, dialing it if needed.

        Raises:
            AcondConnectionError: If the device cannot be reached
        """
        if self._protocol is not None:
            return self._protocol

        async with self._lock:
            # Another caller may have dialed while we waited
            if self._protocol is not None:
                return self._protocol

            protocol = ModbusProtocol(
                host=self.host,
                port=self.port,
                slave_id=self.slave_id,
                timeout=self.timeout,
            )
            try:
                await protocol.connect()
            except AcondConnectionError as err:
                self.is_offline = True
                if not self._offline_episode:
                    self._offline_episode = True
                    _LOGGER.warning("Device %s offline? %s", self.host, err)
                raise

            self._protocol = protocol
            self._offline_episode = False
            self.is_offline = False
            _LOGGER.debug("Connected to device %s:%s", self.host, self.port)
            return protocol

    async def invalidate(self) -> None:
        """Close and forget the current connection so the next call redials."""
        protocol, self._protocol = self._protocol, None
        if protocol is not None:
            _LOGGER.debug("Dropping connection to %s after failure", self.host)
            await protocol.disconnect()

    async def close(self) -> None:
        """Close the connection on unload or shutdown."""
        protocol, self._protocol = self._protocol, None
        if protocol is not None:
            _LOGGER.info("Closing connection to %s:%s", self.host, self.port)
            await protocol.disconnect()
