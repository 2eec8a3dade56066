"""AcondTherm Modbus integration.

Sets up the per-entry Modbus/TCP connection, gateway and coordinator, and
forwards the climate, sensor and binary sensor platforms.
"""
from __future__ import annotations

import logging
from datetime import timedelta

from homeassistant.const import EVENT_HOMEASSISTANT_STOP
from homeassistant.core import HomeAssistant
from homeassistant.helpers import device_registry as dr

from .const import (
    DOMAIN,
    CONF_HOST,
    CONF_NAME,
    CONF_SLAVE_ID,
    CONF_POLLING_INTERVAL,
    DEFAULT_NAME,
    DEFAULT_SLAVE_ID,
    DEFAULT_SCAN_INTERVAL,
    MANUFACTURER,
    MODEL,
    PLATFORMS,
)
from .connection_manager import ConnectionManager
from .coordinator import AcondDataUpdateCoordinator
from .device_gateway import AcondGateway

_LOGGER = logging.getLogger(__name__)


async def async_setup(hass: HomeAssistant, config: dict) -> bool:
    """Set up the integration from configuration.yaml."""
    hass.data.setdefault(DOMAIN, {})
    return True


async def async_setup_entry(hass: HomeAssistant, entry) -> bool:
    """Set up a config entry: create connection, gateway and coordinator."""
    hass.data.setdefault(DOMAIN, {})

    # Options override the values chosen when the entry was created
    config = {**entry.data, **entry.options}
    host = config[CONF_HOST]
    name = config.get(CONF_NAME) or DEFAULT_NAME
    slave_id = int(config.get(CONF_SLAVE_ID, DEFAULT_SLAVE_ID))
    polling_interval = int(config.get(CONF_POLLING_INTERVAL, DEFAULT_SCAN_INTERVAL.seconds))

    _LOGGER.info("Setting up %s at %s (polling every %d seconds)", name, host, polling_interval)

    connection = ConnectionManager(host, slave_id=slave_id)
    gateway = AcondGateway(connection, name=name)
    coordinator = AcondDataUpdateCoordinator(
        hass,
        gateway,
        name=f"{DOMAIN}_{host}",
        update_interval=timedelta(seconds=polling_interval),
        config_entry=entry,
    )

    # Get initial state; raises ConfigEntryNotReady so Home Assistant retries setup
    try:
        await coordinator.async_config_entry_first_refresh()
    except Exception:
        await connection.close()
        raise

    hass.data[DOMAIN][entry.entry_id] = {
        "config": config,
        "connection": connection,
        "gateway": gateway,
        "coordinator": coordinator,
    }

    device_registry = dr.async_get(hass)
    device_entry = device_registry.async_get_or_create(
        config_entry_id=entry.entry_id,
        identifiers={(DOMAIN, host)},
        name=name,
        manufacturer=MANUFACTURER,
        model=MODEL,
    )
    hass.data[DOMAIN][entry.entry_id]["device_id"] = device_entry.id

    async def _close_on_shutdown(_event):
        await connection.close()

    entry.async_on_unload(
        hass.bus.async_listen_once(EVENT_HOMEASSISTANT_STOP, _close_on_shutdown)
    )
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def _async_update_listener(hass: HomeAssistant, entry) -> None:
    """Reload the entry so new options take effect."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry) -> bool:
    """Unload a config entry and close its connection."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if not unload_ok:
        return False

    entry_data = hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
    if entry_data:
        await entry_data["connection"].close()
        _LOGGER.debug("Closed connection for %s", entry_data["connection"].host)

    return True
