"""Client for the Rackspace Cloud Monitoring API."""
from __future__ import annotations

import logging
from typing import List, Union

from ..api_client import ApiClient
from ..auth import KeystoneAuthenticator
from ..endpoints import monitoring_path
from ..exceptions import InvalidArgument
from ..pagination import values_page
from .models import (
    HOST_INFO_SHAPES,
    AgentTarget,
    Check,
    Entity,
    HostInfoType,
)

logger = logging.getLogger(__name__)


class MonitoringClient:
    """One client per monitoring account; listings follow markers for you."""

    def __init__(self, api_client: ApiClient):
        self.client = api_client

    def set_debug(self, debug: bool):
        self.client.set_debug(debug)

    async def list_entities(self) -> List[Entity]:
        return await self.client.fetch_paginated(
            monitoring_path("entities", "list"),
            values_page(Entity.from_dict),
        )

    async def get_entity(self, entity_id: str) -> Entity:
        return await self.client.get_json(
            monitoring_path("entities", "detail", entity_id=entity_id),
            Entity.from_dict,
        )

    async def delete_entity(self, entity_id: str) -> None:
        await self.client.request(
            "DELETE",
            monitoring_path("entities", "detail", entity_id=entity_id),
            expected_status_codes=(200, 204),
        )
        logger.info("Deleted entity %s", entity_id)

    async def list_checks(self, entity_id: str) -> List[Check]:
        """All checks configured on one entity, across every page."""
        return await self.client.fetch_paginated(
            monitoring_path("checks", "list", entity_id=entity_id),
            values_page(Check.from_dict),
        )

    async def host_info(self, entity_id: str, info_type: Union[HostInfoType, str]):
        """Fetch agent host info; the returned shape depends on info_type.

        Unknown types raise InvalidArgument without touching the network.
        """
        try:
            tag = HostInfoType(info_type)
        except ValueError:
            raise InvalidArgument(
                "info_type", info_type, f"expected one of {', '.join(t.value for t in HostInfoType)}"
            ) from None
        shape = HOST_INFO_SHAPES[tag]
        return await self.client.get_json(
            monitoring_path("host_info", "detail", entity_id=entity_id, info_type=tag.value),
            shape.from_dict,
        )

    async def agent_targets(self, entity_id: str, check_type: str) -> List[str]:
        targets = await self.client.get_json(
            monitoring_path("agent_targets", "list", entity_id=entity_id, check_type=check_type),
            lambda payload: [AgentTarget.from_dict(raw) for raw in payload["values"]],
        )
        return [name for target in targets for name in target.targets]


def _make_monitoring_client(url: str, authenticator: KeystoneAuthenticator, transport) -> MonitoringClient:
    return MonitoringClient(ApiClient(url, transport, authenticator=authenticator))


def make_password_monitoring_client(url: str, auth_url: str, username: str, password: str, transport) -> MonitoringClient:
    """Monitoring client authenticating with username/password."""
    authenticator = KeystoneAuthenticator(auth_url, transport)
    authenticator.set_password_credentials(username, password)
    return _make_monitoring_client(url, authenticator, transport)


def make_api_key_monitoring_client(url: str, auth_url: str, username: str, api_key: str, transport) -> MonitoringClient:
    """Monitoring client authenticating with username/API key."""
    authenticator = KeystoneAuthenticator(auth_url, transport)
    authenticator.set_api_key_credentials(username, api_key)
    return _make_monitoring_client(url, authenticator, transport)
