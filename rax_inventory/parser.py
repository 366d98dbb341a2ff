"""Parser to normalize client value objects into snapshot records."""
from __future__ import annotations

import dataclasses
from typing import Any, Dict, List

from .resources import RESOURCE_DEFINITIONS


class Parser:
    def __init__(self):
        self.definitions = RESOURCE_DEFINITIONS

    def parse_object(self, resource: str, obj: Any) -> Dict:
        raw = dataclasses.asdict(obj) if dataclasses.is_dataclass(obj) else dict(obj)
        definition = self.definitions.get(resource, {})
        external_fn = definition.get("external_id", lambda item: item.get("id", ""))
        display_fn = definition.get("display_name", lambda item: item.get("name", ""))
        return {
            "object_type": resource,
            "external_id": external_fn(raw),
            "display_name": display_fn(raw),
            "data": raw,
        }

    def parse_many(self, resource: str, items: List[Any]) -> List[Dict]:
        return [self.parse_object(resource, item) for item in items]
