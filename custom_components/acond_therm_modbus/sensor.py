"""Sensor platform for AcondTherm Modbus."""
from __future__ import annotations

from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.components.sensor import SensorDeviceClass, SensorEntity, SensorStateClass
from homeassistant.const import UnitOfTemperature
from homeassistant.helpers.update_coordinator import CoordinatorEntity
from homeassistant.helpers.device_registry import DeviceInfo

from .const import DOMAIN, CONF_SENSOR_NAME, DEFAULT_SENSOR_NAME


async def async_setup_entry(hass: HomeAssistant, entry, async_add_entities: AddEntitiesCallback):
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator = data["coordinator"]
    name = data["config"].get(CONF_SENSOR_NAME) or DEFAULT_SENSOR_NAME
    async_add_entities([AirTemperatureSensor(coordinator, name)])


class AirTemperatureSensor(CoordinatorEntity, SensorEntity):
    """Ambient air temperature measured by the heat pump."""

    _attr_has_entity_name = True
    _attr_device_class = SensorDeviceClass.TEMPERATURE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfTemperature.CELSIUS

    def __init__(self, coordinator, name: str):
        super().__init__(coordinator)
        self._attr_name = name

    @property
    def unique_id(self) -> str:
        return f"{DOMAIN}_{self.coordinator.gateway.host}_air_temperature"

    @property
    def device_info(self) -> DeviceInfo:
        """Return device info for entity association."""
        return self.coordinator.gateway.get_device_info()

    @property
    def native_value(self):
        return self.coordinator.gateway.get_current_air_temperature()
