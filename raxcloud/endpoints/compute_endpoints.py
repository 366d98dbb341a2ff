"""
Compute endpoint definitions for the Rackspace next-gen servers API.
Only these names may be resolved against a region's public URL.
"""

from typing import Dict, Any

from ..exceptions import UnsupportedEndpoint


def get_compute_endpoints() -> Dict[str, Any]:
    """Get compute endpoints configuration."""
    return {
        "servers": {
            "envelope": "server",
            "list_key": "servers",
        },
        "images": {
            "list_key": "images",
        },
        "flavors": {
            "list_key": "flavors",
        },
    }


def endpoint_by_name(base_url: str, name: str) -> str:
    """Compute a resource URL from a region base URL and an allowed name."""
    if name not in get_compute_endpoints():
        raise UnsupportedEndpoint(name)
    return f"{base_url.rstrip('/')}/{name}"
