"""Diagnostics support for AcondTherm Modbus integration."""
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from homeassistant.core import HomeAssistant

from .const import DOMAIN

_LOGGER = logging.getLogger(__name__)


async def async_get_config_entry_diagnostics(hass: HomeAssistant, entry) -> dict[str, Any]:
    """Return diagnostics for the config entry (last snapshot and connection info)."""
    _LOGGER.debug("Fetching diagnostics for config entry: %s", entry.entry_id)

    store = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    if not store:
        return {"error": "entry_not_setup"}

    gateway = store.get("gateway")
    connection = store.get("connection")
    coordinator = store.get("coordinator")

    state = getattr(gateway, "state", None)
    flags = getattr(gateway, "flags", None)
    update_interval = getattr(coordinator, "update_interval", None)

    return {
        "connection": {
            "host": getattr(connection, "host", None),
            "port": getattr(connection, "port", None),
            "slave_id": getattr(connection, "slave_id", None),
            "connected": getattr(connection, "is_connected", False),
            "offline": getattr(connection, "is_offline", False),
        },
        "coordinator_name": getattr(coordinator, "name", None),
        "polling_interval": update_interval.total_seconds() if update_interval else None,
        "last_update_success": getattr(coordinator, "last_update_success", None),
        "state": asdict(state) if state is not None else None,
        "flags": asdict(flags) if flags is not None else None,
    }
