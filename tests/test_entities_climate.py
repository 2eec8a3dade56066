"""Tests for the HeatingClimate and TUVClimate entities."""
from homeassistant.components.climate import HVACAction, HVACMode
from homeassistant.const import ATTR_TEMPERATURE
from homeassistant.exceptions import HomeAssistantError

from custom_components.acond_therm_modbus.climate import HeatingClimate, TUVClimate
from custom_components.acond_therm_modbus.exceptions import AcondConnectionError
from custom_components.acond_therm_modbus.models import SetpointKind
import pytest


class FakeGateway:
    """Fake gateway for testing."""

    def __init__(self):
        self.host = "192.168.1.50"
        self.writes = []
        self.error = None
        self.is_heating = True
        self.is_tuv_heating = False
        self.is_offline = False

    def get_current_heating_temperature(self):
        return 20.8

    def get_target_heating_temperature(self):
        return 21.5

    def get_current_tuv_temperature(self):
        return 45.2

    def get_target_tuv_temperature(self):
        return 48.0

    def get_device_info(self):
        return {"identifiers": {("acond_therm_modbus", self.host)}}

    async def set_target_temperature(self, kind, celsius):
        if self.error is not None:
            raise self.error
        self.writes.append((kind, celsius))


class DummyCoordinator:
    """Dummy coordinator for testing."""

    def __init__(self, gateway):
        self.gateway = gateway
        self.last_update_success = True
        self.refreshed = False

    async def async_request_refresh(self):
        self.refreshed = True


def test_heating_climate_properties() -> None:
    gw = FakeGateway()
    c = HeatingClimate(DummyCoordinator(gw), min_temp=10, max_temp=30)

    assert c.current_temperature == 20.8
    assert c.target_temperature == 21.5
    assert c.hvac_action == HVACAction.HEATING
    assert c.hvac_mode == HVACMode.AUTO
    assert c.hvac_modes == [HVACMode.AUTO]
    assert c.min_temp == 10.0
    assert c.max_temp == 30.0
    assert c.unique_id == "acond_therm_modbus_192.168.1.50_heating_climate"


def test_heating_climate_idle_when_not_heating() -> None:
    gw = FakeGateway()
    gw.is_heating = False
    c = HeatingClimate(DummyCoordinator(gw))
    assert c.hvac_action == HVACAction.IDLE


def test_heating_target_falls_back_to_min_before_first_poll() -> None:
    gw = FakeGateway()
    gw.get_target_heating_temperature = lambda: None
    c = HeatingClimate(DummyCoordinator(gw), min_temp=12, max_temp=28)
    assert c.target_temperature == 12.0


def test_tuv_climate_properties() -> None:
    gw = FakeGateway()
    gw.is_tuv_heating = True
    c = TUVClimate(DummyCoordinator(gw))

    assert c.current_temperature == 45.2
    assert c.target_temperature == 48.0
    assert c.hvac_action == HVACAction.HEATING
    # default TUV bounds
    assert c.min_temp == 10.0
    assert c.max_temp == 55.0
    assert c.unique_id == "acond_therm_modbus_192.168.1.50_tuv_climate"


def test_tuv_climate_idle_while_heating_space() -> None:
    gw = FakeGateway()
    c = TUVClimate(DummyCoordinator(gw))
    assert c.hvac_action == HVACAction.IDLE


@pytest.mark.asyncio
async def test_set_heating_temperature_writes_and_refreshes() -> None:
    gw = FakeGateway()
    coord = DummyCoordinator(gw)
    c = HeatingClimate(coord)

    await c.async_set_temperature(**{ATTR_TEMPERATURE: 22.5})

    assert gw.writes == [(SetpointKind.INDOOR, 22.5)]
    assert coord.refreshed is True


@pytest.mark.asyncio
async def test_set_tuv_temperature_writes_tuv_setpoint() -> None:
    gw = FakeGateway()
    c = TUVClimate(DummyCoordinator(gw))

    await c.async_set_temperature(**{ATTR_TEMPERATURE: 50})

    assert gw.writes == [(SetpointKind.TUV, 50.0)]


@pytest.mark.asyncio
async def test_set_temperature_clamps_to_bounds() -> None:
    gw = FakeGateway()
    c = HeatingClimate(DummyCoordinator(gw), min_temp=10, max_temp=30)

    await c.async_set_temperature(**{ATTR_TEMPERATURE: 35})
    await c.async_set_temperature(**{ATTR_TEMPERATURE: 4})

    assert gw.writes == [(SetpointKind.INDOOR, 30.0), (SetpointKind.INDOOR, 10.0)]


@pytest.mark.asyncio
async def test_set_temperature_without_value_is_noop() -> None:
    gw = FakeGateway()
    coord = DummyCoordinator(gw)
    c = HeatingClimate(coord)

    await c.async_set_temperature()

    assert gw.writes == []
    assert coord.refreshed is False


@pytest.mark.asyncio
async def test_set_temperature_failure_raises_and_skips_refresh() -> None:
    gw = FakeGateway()
    gw.error = AcondConnectionError("Connection refused")
    coord = DummyCoordinator(gw)
    c = HeatingClimate(coord)

    with pytest.raises(HomeAssistantError):
        await c.async_set_temperature(**{ATTR_TEMPERATURE: 22.0})

    assert coord.refreshed is False


@pytest.mark.asyncio
async def test_set_hvac_mode_is_noop() -> None:
    gw = FakeGateway()
    coord = DummyCoordinator(gw)
    c = HeatingClimate(coord)

    await c.async_set_hvac_mode(HVACMode.HEAT)
    await c.async_set_hvac_mode(HVACMode.AUTO)

    assert c.hvac_mode == HVACMode.AUTO
    assert gw.writes == []


def test_hvac_action_follows_own_circuit_flag() -> None:
    gw = FakeGateway()
    gw.is_heating = False
    gw.is_tuv_heating = True
    coord = DummyCoordinator(gw)

    assert HeatingClimate(coord).hvac_action == HVACAction.IDLE
    assert TUVClimate(coord).hvac_action == HVACAction.HEATING
