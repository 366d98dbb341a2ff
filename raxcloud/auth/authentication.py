"""
Authentication handling for Rackspace cloud APIs.
Supports keystone v2.0 password and API-key credentials, plus fixed tokens.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from ..exceptions import AuthError, DecodeError, UnsupportedEndpoint

logger = logging.getLogger(__name__)

# Refresh tokens this long before the identity service says they expire
TOKEN_EXPIRY_MARGIN = timedelta(minutes=5)


@dataclass(frozen=True)
class PasswordCredentials:
    username: str
    password: str

    def to_payload(self) -> Dict[str, Any]:
        return {"auth": {"passwordCredentials": {"username": self.username, "password": self.password}}}


@dataclass(frozen=True)
class ApiKeyCredentials:
    username: str
    api_key: str

    def to_payload(self) -> Dict[str, Any]:
        return {"auth": {"RAX-KSKEY:apiKeyCredentials": {"username": self.username, "apiKey": self.api_key}}}


Credentials = Union[PasswordCredentials, ApiKeyCredentials]


@dataclass(frozen=True)
class EntryEndpoint:
    region: str
    public_url: str
    tenant_id: str = ""


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    type: str
    endpoints: List[EntryEndpoint] = field(default_factory=list)


@dataclass(frozen=True)
class AccessInfo:
    token: str
    expires: Optional[datetime]
    tenant_id: str
    service_catalog: List[CatalogEntry]

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AccessInfo":
        access = payload["access"]
        token = access["token"]
        catalog = [
            CatalogEntry(
                name=service.get("name", ""),
                type=service.get("type", ""),
                endpoints=[
                    EntryEndpoint(
                        region=ep.get("region", ""),
                        public_url=ep["publicURL"],
                        tenant_id=ep.get("tenantId", ""),
                    )
                    for ep in service.get("endpoints", [])
                ],
            )
            for service in access.get("serviceCatalog", [])
        ]
        return cls(
            token=token["id"],
            expires=_parse_expiry(token.get("expires")),
            tenant_id=(token.get("tenant") or {}).get("id", ""),
            service_catalog=catalog,
        )


def _parse_expiry(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        expires = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unparseable token expiry %r; token will not be refreshed early", value)
        return None
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=timezone.utc)
    return expires


class KeystoneAuthenticator:
    """Handles token acquisition against a keystone v2.0 identity service."""

    def __init__(self, auth_url: str, transport):
        self.auth_url = auth_url.rstrip("/")
        self.transport = transport

        self.credentials: Optional[Credentials] = None
        self.access: Optional[AccessInfo] = None
        self._token_lock = asyncio.Lock()

    def set_password_credentials(self, username: str, password: str):
        self.credentials = PasswordCredentials(username, password)

    def set_api_key_credentials(self, username: str, api_key: str):
        self.credentials = ApiKeyCredentials(username, api_key)

    def set_credentials(self, credentials: Credentials):
        self.credentials = credentials

    async def authenticate(self) -> AccessInfo:
        """POST the credentials to /tokens and keep the access document."""
        if self.credentials is None:
            raise AuthError("No credentials configured (neither password nor API key)")

        url = f"{self.auth_url}/tokens"
        response = await self.transport.request(
            "POST",
            url,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            body=self.credentials.to_payload(),
        )
        logger.debug("POST %s -> Status: %s", url, response.status)

        if response.status not in (200, 203):
            raise AuthError(
                f"Identity service rejected {self.credentials.username}: {response.status}",
                status=response.status,
            )

        try:
            self.access = AccessInfo.from_dict(response.json())
        except (KeyError, TypeError, AttributeError, DecodeError) as exc:
            raise AuthError(f"Malformed access document from {url}: {exc}", status=response.status) from exc

        logger.info("Authenticated %s, token expires %s", self.credentials.username, self.access.expires)
        return self.access

    async def authenticate_with(self, credentials: Credentials) -> Tuple[str, List[CatalogEntry]]:
        self.set_credentials(credentials)
        access = await self.authenticate()
        return access.token, access.service_catalog

    def _token_valid(self) -> bool:
        if self.access is None:
            return False
        if self.access.expires is None:
            return True
        return datetime.now(timezone.utc) < self.access.expires - TOKEN_EXPIRY_MARGIN

    async def token(self) -> str:
        """Current token, re-authenticating when missing or about to expire."""
        async with self._token_lock:
            if not self._token_valid():
                await self.authenticate()
            return self.access.token

    async def get_headers(self) -> Dict[str, str]:
        return {"X-Auth-Token": await self.token()}

    async def endpoint_for(self, service_type: str, region: Optional[str] = None) -> EntryEndpoint:
        """Find the public endpoint of a service type, optionally in one region."""
        if self.access is None:
            await self.token()
        for entry in self.access.service_catalog:
            if entry.type != service_type:
                continue
            for endpoint in entry.endpoints:
                # Global services (monitoring) publish endpoints without a region
                if region is None or not endpoint.region or endpoint.region.upper() == region.upper():
                    return endpoint
        raise UnsupportedEndpoint(f"{service_type}@{region}" if region else service_type)


class StaticTokenAuthenticator:
    """Authenticator holding a token obtained elsewhere."""

    def __init__(self, token: str):
        self._token = token

    @property
    def token(self) -> str:
        return self._token

    def set_token(self, token: str):
        self._token = token

    async def get_headers(self) -> Dict[str, str]:
        return {"X-Auth-Token": self._token}
