"""Config flow for AcondTherm Modbus integration.

One config entry drives exactly one heat pump, identified by its IP address.
"""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant import config_entries

from .const import (
    DOMAIN,
    CONF_HOST,
    CONF_NAME,
    CONF_SENSOR_NAME,
    CONF_SLAVE_ID,
    CONF_POLLING_INTERVAL,
    CONF_MIN_HEATING_TEMP,
    CONF_MAX_HEATING_TEMP,
    CONF_MIN_TUV_TEMP,
    CONF_MAX_TUV_TEMP,
    DEFAULT_NAME,
    DEFAULT_SENSOR_NAME,
    DEFAULT_SLAVE_ID,
    DEFAULT_SCAN_INTERVAL,
    DEFAULT_MIN_HEATING_TEMP,
    DEFAULT_MAX_HEATING_TEMP,
    DEFAULT_MIN_TUV_TEMP,
    DEFAULT_MAX_TUV_TEMP,
)
from .exceptions import AcondThermError
from .modbus_protocol import ModbusProtocol
from .registers import INPUT_REGISTERS_COUNT, INPUT_REGISTERS_START

_LOGGER = logging.getLogger(__name__)

_BOUND_PAIRS = (
    (CONF_MIN_HEATING_TEMP, CONF_MAX_HEATING_TEMP),
    (CONF_MIN_TUV_TEMP, CONF_MAX_TUV_TEMP),
)


def _tuning_schema(defaults: dict[str, Any]) -> dict:
    """Schema fields shared by the user step and the options flow."""
    return {
        vol.Optional(
            CONF_POLLING_INTERVAL,
            default=defaults.get(CONF_POLLING_INTERVAL, DEFAULT_SCAN_INTERVAL.seconds),
        ): vol.All(vol.Coerce(int), vol.Range(min=5, max=3600)),
        vol.Optional(
            CONF_MIN_HEATING_TEMP,
            default=defaults.get(CONF_MIN_HEATING_TEMP, DEFAULT_MIN_HEATING_TEMP),
        ): vol.All(vol.Coerce(float), vol.Range(min=0.0, max=100.0)),
        vol.Optional(
            CONF_MAX_HEATING_TEMP,
            default=defaults.get(CONF_MAX_HEATING_TEMP, DEFAULT_MAX_HEATING_TEMP),
        ): vol.All(vol.Coerce(float), vol.Range(min=0.0, max=100.0)),
        vol.Optional(
            CONF_MIN_TUV_TEMP,
            default=defaults.get(CONF_MIN_TUV_TEMP, DEFAULT_MIN_TUV_TEMP),
        ): vol.All(vol.Coerce(float), vol.Range(min=0.0, max=100.0)),
        vol.Optional(
            CONF_MAX_TUV_TEMP,
            default=defaults.get(CONF_MAX_TUV_TEMP, DEFAULT_MAX_TUV_TEMP),
        ): vol.All(vol.Coerce(float), vol.Range(min=0.0, max=100.0)),
    }


def _validate_bounds(user_input: dict[str, Any], errors: dict[str, str]) -> None:
    for min_key, max_key in _BOUND_PAIRS:
        if min_key in user_input and max_key in user_input:
            if float(user_input[min_key]) >= float(user_input[max_key]):
                errors[max_key] = "invalid_bounds"


async def _test_connection(host: str, slave_id: int) -> None:
    """Read the input register block once; raises AcondThermError on failure."""
    protocol = ModbusProtocol(host, slave_id=slave_id)
    try:
        await protocol.connect()
        await protocol.read_input_registers(INPUT_REGISTERS_START, INPUT_REGISTERS_COUNT)
    finally:
        await protocol.disconnect()


class AcondThermConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for AcondTherm Modbus."""

    VERSION = 1

    @staticmethod
    def async_get_options_flow(config_entry):
        """Create options flow."""
        return AcondThermOptionsFlow(config_entry)

    def _build_schema(self, defaults: dict[str, Any] | None = None) -> vol.Schema:
        if defaults is None:
            defaults = {}
        return vol.Schema({
            vol.Required(CONF_HOST, default=defaults.get(CONF_HOST, "")): str,
            vol.Optional(CONF_NAME, default=defaults.get(CONF_NAME, DEFAULT_NAME)): str,
            vol.Optional(
                CONF_SENSOR_NAME, default=defaults.get(CONF_SENSOR_NAME, DEFAULT_SENSOR_NAME)
            ): str,
            vol.Optional(
                CONF_SLAVE_ID, default=defaults.get(CONF_SLAVE_ID, DEFAULT_SLAVE_ID)
            ): vol.All(vol.Coerce(int), vol.Range(min=1, max=247)),
            **_tuning_schema(defaults),
        })

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Handle the initial step where user provides the device address."""
        if user_input is None:
            return self.async_show_form(
                step_id="user", data_schema=self._build_schema(), errors={}
            )

        errors: dict[str, str] = {}
        host = str(user_input[CONF_HOST]).strip()
        if not host:
            errors[CONF_HOST] = "invalid_host"
        _validate_bounds(user_input, errors)

        # One entry per device
        for entry in self.hass.config_entries.async_entries(DOMAIN):
            if entry.data.get(CONF_HOST) == host:
                errors[CONF_HOST] = "already_configured"

        if errors:
            return self.async_show_form(
                step_id="user",
                data_schema=self._build_schema(user_input),
                errors=errors,
            )

        slave_id = int(user_input.get(CONF_SLAVE_ID, DEFAULT_SLAVE_ID))
        try:
            await _test_connection(host, slave_id)
        except AcondThermError as err:
            _LOGGER.error("Connection test to %s failed: %s", host, err)
            errors["base"] = "cannot_connect"
            return self.async_show_form(
                step_id="user",
                data_schema=self._build_schema(user_input),
                errors=errors,
            )

        name = user_input.get(CONF_NAME) or DEFAULT_NAME
        return self.async_create_entry(
            title=name,
            data={**user_input, CONF_HOST: host, CONF_NAME: name, CONF_SLAVE_ID: slave_id},
        )


class AcondThermOptionsFlow(config_entries.OptionsFlow):
    """Handle options flow for AcondTherm Modbus (polling interval and bounds)."""

    def __init__(self, config_entry: config_entries.ConfigEntry) -> None:
        """Initialize options flow."""
        self._config_entry = config_entry

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        """Handle options flow initial step."""
        errors: dict[str, str] = {}
        current = {**self._config_entry.data, **self._config_entry.options}

        if user_input is not None:
            _validate_bounds(user_input, errors)
            if not errors:
                return self.async_create_entry(title="", data=user_input)
            current = {**current, **user_input}

        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema(_tuning_schema(current)),
            errors=errors,
        )
