import pytest

from datetime import timedelta

from custom_components.acond_therm_modbus.connection_manager import ConnectionManager
from custom_components.acond_therm_modbus.device_gateway import AcondGateway
from custom_components.acond_therm_modbus.diagnostics import async_get_config_entry_diagnostics
from custom_components.acond_therm_modbus.const import DOMAIN


class FakeCoordinator:
    def __init__(self, name):
        self.name = name
        self.update_interval = timedelta(seconds=20)
        self.last_update_success = True


class FakeEntry:
    def __init__(self, entry_id, title="Test Entry"):
        self.entry_id = entry_id
        self.title = title


class FakeHass:
    def __init__(self, data=None):
        self.data = data or {}


@pytest.mark.asyncio
async def test_diagnostics_entry_found(fake_device):
    connection = ConnectionManager("192.168.1.50", slave_id=2)
    gw = AcondGateway(connection)
    await gw.synchronize()
    coord = FakeCoordinator(name="test_coord")

    hass = FakeHass(
        {
            DOMAIN: {
                "entry1": {"gateway": gw, "connection": connection, "coordinator": coord}
            }
        }
    )

    result = await async_get_config_entry_diagnostics(hass, FakeEntry("entry1"))

    assert result["connection"] == {
        "host": "192.168.1.50",
        "port": 502,
        "slave_id": 2,
        "connected": True,
        "offline": False,
    }
    assert result["coordinator_name"] == "test_coord"
    assert result["polling_interval"] == 20.0
    assert result["state"]["target_indoor_temperature"] == 21.5
    assert result["state"]["status"] == 3
    assert result["flags"] == {"on": True, "running": True, "failure": False, "tuv_heating": False}


@pytest.mark.asyncio
async def test_diagnostics_before_first_poll(fake_device):
    connection = ConnectionManager("192.168.1.50")
    gw = AcondGateway(connection)
    hass = FakeHass({DOMAIN: {"entry1": {"gateway": gw, "connection": connection, "coordinator": None}}})

    result = await async_get_config_entry_diagnostics(hass, FakeEntry("entry1"))

    assert result["state"] is None
    assert result["connection"]["connected"] is False
    assert result["polling_interval"] is None


@pytest.mark.asyncio
async def test_diagnostics_entry_not_setup():
    hass = FakeHass({DOMAIN: {}})
    result = await async_get_config_entry_diagnostics(hass, FakeEntry("missing"))
    assert result == {"error": "entry_not_setup"}
