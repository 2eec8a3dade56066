"""Climate platform for AcondTherm Modbus."""
from __future__ import annotations

import logging

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.update_coordinator import CoordinatorEntity
from homeassistant.helpers.device_registry import DeviceInfo

from .const import (
    DOMAIN,
    CONF_MIN_HEATING_TEMP,
    CONF_MAX_HEATING_TEMP,
    CONF_MIN_TUV_TEMP,
    CONF_MAX_TUV_TEMP,
    DEFAULT_MIN_HEATING_TEMP,
    DEFAULT_MAX_HEATING_TEMP,
    DEFAULT_MIN_TUV_TEMP,
    DEFAULT_MAX_TUV_TEMP,
)
from .exceptions import AcondThermError
from .models import SetpointKind

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass, entry, async_add_entities):
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator = data["coordinator"]
    config = data["config"]
    async_add_entities([
        HeatingClimate(
            coordinator,
            min_temp=config.get(CONF_MIN_HEATING_TEMP, DEFAULT_MIN_HEATING_TEMP),
            max_temp=config.get(CONF_MAX_HEATING_TEMP, DEFAULT_MAX_HEATING_TEMP),
        ),
        TUVClimate(
            coordinator,
            min_temp=config.get(CONF_MIN_TUV_TEMP, DEFAULT_MIN_TUV_TEMP),
            max_temp=config.get(CONF_MAX_TUV_TEMP, DEFAULT_MAX_TUV_TEMP),
        ),
    ])


class AcondClimate(CoordinatorEntity, ClimateEntity):
    """Thermostat backed by AcondGateway via coordinator.

    The device only runs in automatic mode, so AUTO is the single HVAC mode.
    """

    _attr_has_entity_name = True
    _attr_supported_features = ClimateEntityFeature.TARGET_TEMPERATURE
    _attr_hvac_modes = [HVACMode.AUTO]
    _attr_hvac_mode = HVACMode.AUTO
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = 0.5

    _setpoint_kind: SetpointKind
    _key: str
    # Gateway property that reports whether this circuit is heating
    _active_flag: str

    def __init__(self, coordinator, name: str, min_temp: float, max_temp: float):
        super().__init__(coordinator)
        self._attr_name = name
        self._attr_min_temp = float(min_temp)
        self._attr_max_temp = float(max_temp)

    @property
    def unique_id(self) -> str:
        return f"{DOMAIN}_{self.coordinator.gateway.host}_{self._key}"

    @property
    def device_info(self) -> DeviceInfo:
        """Return device info for entity association."""
        return self.coordinator.gateway.get_device_info()

    @property
    def hvac_action(self) -> HVACAction | None:
        return HVACAction.HEATING if getattr(self.coordinator.gateway, self._active_flag) else HVACAction.IDLE

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        if hvac_mode != HVACMode.AUTO:
            _LOGGER.debug("Ignoring unsupported HVAC mode %s for %s", hvac_mode, self.name)

    async def async_set_temperature(self, **kwargs) -> None:
        if ATTR_TEMPERATURE not in kwargs:
            return
        temp = float(kwargs[ATTR_TEMPERATURE])
        temp = min(max(temp, self.min_temp), self.max_temp)
        try:
            await self.coordinator.gateway.set_target_temperature(self._setpoint_kind, temp)
        except AcondThermError as err:
            raise HomeAssistantError(f"Failed to set {self.name} temperature: {err}") from err
        await self.coordinator.async_request_refresh()


class HeatingClimate(AcondClimate):
    """Space heating thermostat."""

    _setpoint_kind = SetpointKind.INDOOR
    _key = "heating_climate"
    _active_flag = "is_heating"

    def __init__(
        self,
        coordinator,
        min_temp: float = DEFAULT_MIN_HEATING_TEMP,
        max_temp: float = DEFAULT_MAX_HEATING_TEMP,
    ):
        super().__init__(coordinator, "Heating", min_temp, max_temp)

    @property
    def current_temperature(self) -> float | None:
        return self.coordinator.gateway.get_current_heating_temperature()

    @property
    def target_temperature(self) -> float | None:
        value = self.coordinator.gateway.get_target_heating_temperature()
        # Until the first poll succeeds, report the lower bound
        if value is None:
            return self.min_temp
        return value


class TUVClimate(AcondClimate):
    """Domestic hot water (TUV) thermostat."""

    _setpoint_kind = SetpointKind.TUV
    _key = "tuv_climate"
    _active_flag = "is_tuv_heating"

    def __init__(
        self,
        coordinator,
        min_temp: float = DEFAULT_MIN_TUV_TEMP,
        max_temp: float = DEFAULT_MAX_TUV_TEMP,
    ):
        super().__init__(coordinator, "TUV", min_temp, max_temp)

    @property
    def current_temperature(self) -> float | None:
        return self.coordinator.gateway.get_current_tuv_temperature()

    @property
    def target_temperature(self) -> float | None:
        return self.coordinator.gateway.get_target_tuv_temperature()
