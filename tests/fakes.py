"""Scripted transport standing in for aiohttp in tests."""
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from raxcloud.transport import RestResponse


@dataclass
class Call:
    method: str
    url: str
    headers: Dict[str, str]
    body: Any
    params: Optional[Dict[str, str]]


class FakeTransport:
    """Replays canned responses keyed by method, url and query params.

    When several responses are queued for one key they are served in order,
    and the last one repeats.
    """

    def __init__(self):
        self.routes: Dict[tuple, List[Any]] = {}
        self.calls: List[Call] = []

    @staticmethod
    def _key(method, url, params):
        return method, url, tuple(sorted((params or {}).items()))

    def add(self, method, url, status=200, payload=None, body=None, params=None, headers=None):
        if body is None:
            body = json.dumps(payload) if payload is not None else ""
        response = RestResponse(status=status, url=url, body=body, headers=headers or {})
        self.routes.setdefault(self._key(method, url, params), []).append(response)
        return self

    def fail(self, method, url, exc, params=None):
        self.routes.setdefault(self._key(method, url, params), []).append(exc)
        return self

    async def request(self, method, url, headers=None, body=None, params=None):
        self.calls.append(Call(method, url, dict(headers or {}), body, params))
        queue = self.routes.get(self._key(method, url, params))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {url} {params}")
        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def identity_payload(token="tok-1", expires="2099-01-01T00:00:00.000-06:00", region="DFW"):
    return {
        "access": {
            "token": {"id": token, "expires": expires, "tenant": {"id": "123456"}},
            "serviceCatalog": [
                {
                    "name": "cloudServersOpenStack",
                    "type": "compute",
                    "endpoints": [
                        {"region": "ORD", "publicURL": "https://ord.servers.api.rackspacecloud.com/v2/123456", "tenantId": "123456"},
                        {"region": region, "publicURL": f"https://{region.lower()}.servers.api.rackspacecloud.com/v2/123456", "tenantId": "123456"},
                    ],
                },
                {
                    "name": "cloudMonitoring",
                    "type": "rax:monitor",
                    "endpoints": [
                        {"publicURL": "https://monitoring.api.rackspacecloud.com/v1.0/123456", "tenantId": "123456"},
                    ],
                },
            ],
        }
    }
