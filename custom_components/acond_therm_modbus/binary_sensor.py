"""Binary sensor platform for AcondTherm Modbus."""
from __future__ import annotations

from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.components.binary_sensor import BinarySensorEntity, BinarySensorDeviceClass
from homeassistant.const import EntityCategory
from homeassistant.helpers.update_coordinator import CoordinatorEntity
from homeassistant.helpers.device_registry import DeviceInfo

from .const import DOMAIN


async def async_setup_entry(hass: HomeAssistant, entry, async_add_entities: AddEntitiesCallback):
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator = data["coordinator"]
    async_add_entities([DeviceConnectionBinarySensor(coordinator)])


class DeviceConnectionBinarySensor(CoordinatorEntity, BinarySensorEntity):
    """Connectivity of the Modbus/TCP link to the heat pump."""

    _attr_has_entity_name = True
    _attr_device_class = BinarySensorDeviceClass.CONNECTIVITY
    _attr_entity_category = EntityCategory.DIAGNOSTIC

    def __init__(self, coordinator):
        super().__init__(coordinator)
        self._attr_name = "Device Connection"

    @property
    def unique_id(self) -> str:
        return f"{DOMAIN}_{self.coordinator.gateway.host}_connection"

    @property
    def device_info(self) -> DeviceInfo:
        """Return device info for entity association."""
        return self.coordinator.gateway.get_device_info()

    @property
    def available(self) -> bool:
        # Must stay available while the device is offline to report it
        return True

    @property
    def is_on(self) -> bool | None:
        # Listeners are not notified again while polls keep failing
        return self.coordinator.last_update_success and not self.coordinator.gateway.is_offline
