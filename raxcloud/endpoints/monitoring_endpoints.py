"""
Monitoring endpoint definitions for the Rackspace Cloud Monitoring API.
Paths are relative to the account's monitoring base URL.
"""

from typing import Dict, Any


def get_monitoring_endpoints() -> Dict[str, Any]:
    """Get monitoring endpoints configuration."""
    return {
        # Entities
        "entities": {
            "list": "/entities",
            "detail": "/entities/{entity_id}",
        },

        # Checks attached to one entity
        "checks": {
            "list": "/entities/{entity_id}/checks",
        },

        # Agent host information, one shape per info type
        "host_info": {
            "detail": "/entities/{entity_id}/agent/host_info/{info_type}",
        },

        # Targets an agent check type can be pointed at
        "agent_targets": {
            "list": "/entities/{entity_id}/agent/check_types/{check_type}/targets",
        },
    }


def monitoring_path(name: str, kind: str, **kwargs) -> str:
    return get_monitoring_endpoints()[name][kind].format(**kwargs)
