"""DataUpdateCoordinator for polling the heat pump registers."""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Optional

from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .const import DEFAULT_SCAN_INTERVAL
from .exceptions import AcondThermError
from .models import DeviceState

_LOGGER = logging.getLogger(__name__)


class AcondDataUpdateCoordinator(DataUpdateCoordinator[DeviceState]):
    """Coordinator that synchronizes the `AcondGateway` snapshot.

    Listeners (the climate, sensor and binary sensor entities) are notified
    after every poll, so entities never read the device directly.
    """

    def __init__(
        self,
        hass,
        gateway,
        name: str,
        update_interval: timedelta = DEFAULT_SCAN_INTERVAL,
        config_entry: Optional[Any] = None,
    ):
        self.gateway = gateway
        self.name = name
        super().__init__(
            hass,
            _LOGGER,
            name=name,
            update_interval=update_interval,
            config_entry=config_entry,
        )

    async def _async_update_data(self) -> DeviceState:
        """Fetch the register block once; failures are not retried."""
        try:
            return await self.gateway.synchronize()
        except AcondThermError as err:
            raise UpdateFailed(f"Error communicating with {self.gateway.host}: {err}") from err
