"""Pytest configuration and shared fixtures for AcondTherm integration tests."""
from __future__ import annotations

import logging

import pytest

from tests.fakes import FakeDevice

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture
def fake_device(monkeypatch):
    """Route every connection made by ConnectionManager to a FakeDevice.

    Yields:
        FakeDevice instance preloaded with DEFAULT_REGISTERS
    """
    device = FakeDevice()
    monkeypatch.setattr(
        "custom_components.acond_therm_modbus.connection_manager.ModbusProtocol",
        device.protocol_factory,
    )
    return device
