"""Regional client for the next-gen compute API (servers, images, flavors)."""
from __future__ import annotations

import logging
from typing import List

from ..api_client import ApiClient
from ..auth import EntryEndpoint, StaticTokenAuthenticator
from ..endpoints import endpoint_by_name, get_compute_endpoints
from ..pagination import collection_page
from .models import Flavor, Image, NewServer, Server

logger = logging.getLogger(__name__)

# Single-server requests and responses are wrapped in this key
SERVER_ENVELOPE = get_compute_endpoints()["servers"]["envelope"]


class RegionClient:
    """Compute operations for one region, using the token it was built with.

    Rotating the token with set_token() while requests are in flight is not
    synchronised.
    """

    def __init__(self, identity, entry_endpoint: EntryEndpoint, transport, token: str, **client_options):
        self.identity = identity
        self.entry_endpoint = entry_endpoint
        self._auth = StaticTokenAuthenticator(token)
        self.client = ApiClient(entry_endpoint.public_url, transport, authenticator=self._auth, **client_options)

    @property
    def token(self) -> str:
        return self._auth.token

    def set_token(self, token: str):
        self._auth.set_token(token)

    def use_transport(self, transport):
        """Route this region's requests through a different transport."""
        self.client.transport = transport

    def set_debug(self, debug: bool):
        self.client.set_debug(debug)

    def endpoint_by_name(self, name: str) -> str:
        return endpoint_by_name(self.entry_endpoint.public_url, name)

    async def _list(self, name: str, item_decoder) -> List:
        list_key = get_compute_endpoints()[name]["list_key"]
        return await self.client.fetch_paginated(self.endpoint_by_name(name), collection_page(list_key, item_decoder))

    async def flavors(self) -> List[Flavor]:
        """Every machine configuration offered in the region."""
        return await self._list("flavors", Flavor.from_dict)

    async def images(self) -> List[Image]:
        return await self._list("images", Image.from_dict)

    async def servers(self) -> List[Server]:
        return await self._list("servers", Server.from_dict)

    async def server_info_by_id(self, server_id: str) -> Server:
        url = f"{self.endpoint_by_name('servers')}/{server_id}"
        return await self.client.get_json(url, lambda payload: Server.from_dict(payload[SERVER_ENVELOPE]))

    async def create_server(self, new_server: NewServer) -> NewServer:
        """Ask for a server to be built; provisioning continues asynchronously.

        If new_server has no admin_pass, the result carries the generated
        one. No other API call will ever return it again.
        """
        response = await self.client.request(
            "POST",
            self.endpoint_by_name("servers"),
            expected_status_codes=(202,),
            body={SERVER_ENVELOPE: new_server.to_dict()},
        )
        created = self.client.decode(response, lambda payload: NewServer.from_dict(payload[SERVER_ENVELOPE]))
        logger.info("Requested server %s (%s)", created.id, new_server.name)
        return created

    async def delete_server(self, server_id: str) -> None:
        await self.client.request(
            "DELETE",
            f"{self.endpoint_by_name('servers')}/{server_id}",
            expected_status_codes=(204,),
        )
        logger.info("Deleted server %s", server_id)


async def make_regional_client(identity, entry_endpoint: EntryEndpoint, transport, **client_options) -> RegionClient:
    """Fetch a token from identity and bind it to a region client."""
    token = await identity.token()
    return RegionClient(identity, entry_endpoint, transport, token, **client_options)
