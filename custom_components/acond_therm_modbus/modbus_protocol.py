"""Async-friendly wrapper around modbus-tk TCP master.

Uses run_in_executor to wrap the synchronous `modbus_tk.modbus_tcp.TcpMaster` API.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List

import modbus_tk.defines as cst
import modbus_tk.modbus as modbus
import modbus_tk.modbus_tcp as modbus_tcp

from .const import DEFAULT_SLAVE_ID, MODBUS_TCP_PORT, MODBUS_TIMEOUT
from .exceptions import AcondConnectionError, AcondReadError, AcondWriteError

_LOGGER = logging.getLogger(__name__)

_EXCEPTION_MESSAGES = {
    0x01: "Illegal function",
    0x02: "Illegal data address",
    0x03: "Illegal data value",
    0x04: "Slave device failure",
}


def _describe_error(exc: Exception) -> str:
    """Return a readable description of a modbus-tk or socket error."""
    if isinstance(exc, modbus.ModbusError):
        code = exc.get_exception_code()
        return f"{_EXCEPTION_MESSAGES.get(code, f'Exception code {code}')} - slave responded with error"
    return str(exc) or exc.__class__.__name__


class ModbusProtocol:
    """Async wrapper for modbus-tk TCP master.

    Methods raise `AcondConnectionError`, `AcondReadError` or
    `AcondWriteError` so callers can propagate failures unchanged.
    """

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
        self.client = None
        self._lock = asyncio.Lock()

    def _connect_sync(self):
        master = modbus_tcp.TcpMaster(
            host=self.host, port=self.port, timeout_in_sec=self.timeout
        )
        master.set_timeout(self.timeout)
        master.open()
        return master

    async def connect(self) -> None:
        loop = asyncio.get_event_loop()
        try:
            self.client = await loop.run_in_executor(None, self._connect_sync)
        except Exception as exc:
            self.client = None
            raise AcondConnectionError(
                f"Failed to connect to {self.host}:{self.port}: {_describe_error(exc)}"
            ) from exc
        _LOGGER.debug("Modbus connected to %s:%s", self.host, self.port)

    async def disconnect(self) -> None:
        if not self.client:
            return
        loop = asyncio.get_event_loop()
        try:
            await loop.run_in_executor(None, self.client.close)
        except Exception:
            _LOGGER.debug("Error closing modbus client", exc_info=True)
        finally:
            self.client = None

    @property
    def is_connected(self) -> bool:
        return self.client is not None

    async def read_input_registers(self, start_addr: int, count: int) -> List[int]:
        """Read input registers (function 0x04)."""
        if not self.client:
            raise AcondReadError(f"Modbus client for {self.host} not connected")

        async with self._lock:
            loop = asyncio.get_event_loop()
            try:
                result = await loop.run_in_executor(
                    None,
                    self.client.execute,
                    self.slave_id,
                    cst.READ_INPUT_REGISTERS,
                    start_addr,
                    count,
                )
            except Exception as exc:
                _LOGGER.error(
                    "Error reading input registers from %s:%s - Request: slave_id=%s, start_addr=0x%04X, count=%d - Error: %s",
                    self.host, self.port, self.slave_id, start_addr, count, _describe_error(exc)
                )
                raise AcondReadError(_describe_error(exc)) from exc

        values = list(result)
        if len(values) < count:
            raise AcondReadError(
                f"Short response from {self.host}: expected {count} registers, got {len(values)}"
            )
        return values

    async def write_register(self, addr: int, value: int) -> None:
        """Write a single holding register (function 0x06)."""
        if not self.client:
            raise AcondWriteError(f"Modbus client for {self.host} not connected")

        _LOGGER.debug("write_register called: slave_id=%d addr=0x%04X value=0x%04X",
                      self.slave_id, addr, value)

        async with self._lock:
            loop = asyncio.get_event_loop()
            try:
                await loop.run_in_executor(
                    None,
                    lambda: self.client.execute(
                        self.slave_id,
                        cst.WRITE_SINGLE_REGISTER,
                        addr,
                        output_value=value,
                    ),
                )
            except Exception as exc:
                _LOGGER.error(
                    "Error writing register to %s:%s - Request: slave_id=%s, addr=0x%04X, value=%s - Error: %s",
                    self.host, self.port, self.slave_id, addr, value, _describe_error(exc)
                )
                raise AcondWriteError(_describe_error(exc)) from exc
