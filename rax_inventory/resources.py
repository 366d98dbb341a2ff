"""Resource blueprints for normalized parsing."""
from __future__ import annotations

from typing import Callable, Dict


ResourceDefinition = Dict[str, Callable]


RESOURCE_DEFINITIONS: Dict[str, ResourceDefinition] = {
    "entities": {
        "external_id": lambda obj: obj.get("id", ""),
        "display_name": lambda obj: obj.get("label", ""),
    },
    "checks": {
        "external_id": lambda obj: obj.get("id", ""),
        "display_name": lambda obj: f"{obj.get('label', '')} ({obj.get('type', '')})",
    },
    "servers": {
        "external_id": lambda obj: obj.get("id", ""),
        "display_name": lambda obj: obj.get("name", ""),
    },
    "images": {
        "external_id": lambda obj: obj.get("id", ""),
        "display_name": lambda obj: obj.get("name", ""),
    },
    "flavors": {
        "external_id": lambda obj: obj.get("id", ""),
        "display_name": lambda obj: f"{obj.get('name', '')} ({obj.get('ram', 0)} MB)",
    },
}
