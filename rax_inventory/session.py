"""Authenticated session bundling the monitoring and compute clients."""
from __future__ import annotations

import logging
from typing import Optional

from raxcloud.api_client import ApiClient
from raxcloud.auth import KeystoneAuthenticator
from raxcloud.monitoring import MonitoringClient
from raxcloud.servers import RegionClient, make_regional_client
from raxcloud.transport import AiohttpTransport

from .config import InventorySettings

logger = logging.getLogger(__name__)

COMPUTE_SERVICE_TYPE = "compute"
MONITORING_SERVICE_TYPE = "rax:monitor"


class CloudSession:
    def __init__(self, settings: InventorySettings, transport=None):
        self.settings = settings
        self.transport = transport
        self._owns_transport = transport is None
        self.authenticator: Optional[KeystoneAuthenticator] = None
        self.monitoring: Optional[MonitoringClient] = None
        self.region: Optional[RegionClient] = None

    async def __aenter__(self):
        config_loader = self.settings.config_loader
        account = self.settings.account
        if self.transport is None:
            self.transport = AiohttpTransport.from_config(config_loader.get("http", {}))
            await self.transport.__aenter__()

        try:
            self.authenticator = KeystoneAuthenticator(config_loader.get_auth_url(), self.transport)
            self.authenticator.set_credentials(account.credentials)
            await self.authenticator.authenticate()

            monitoring_url = account.monitoring_url
            if not monitoring_url:
                monitoring_url = (await self.authenticator.endpoint_for(MONITORING_SERVICE_TYPE)).public_url
            self.monitoring = MonitoringClient(
                ApiClient.from_config(monitoring_url, self.transport, self.authenticator, config_loader)
            )

            compute_endpoint = await self.authenticator.endpoint_for(COMPUTE_SERVICE_TYPE, account.region)
            http_config = config_loader.get("http", {})
            self.region = await make_regional_client(
                self.authenticator,
                compute_endpoint,
                self.transport,
                max_retries=http_config.get("max_retries", 0),
                retry_delay=http_config.get("retry_delay", 10),
                backoff_multiplier=http_config.get("backoff_multiplier", 1.5),
                max_retry_delay=http_config.get("max_retry_delay", 300),
                max_pages=config_loader.get_max_pages(),
            )
        except Exception:
            await self._close_transport()
            raise

        debug = config_loader.is_debug_mode()
        self.monitoring.set_debug(debug)
        self.region.set_debug(debug)
        logger.info("Session ready for %s in %s", account.username, account.region)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._close_transport()

    async def _close_transport(self):
        if self._owns_transport and self.transport is not None:
            await self.transport.close()
