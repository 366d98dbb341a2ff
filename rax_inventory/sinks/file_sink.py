"""Sinks for inventory snapshots."""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Dict, List

logger = logging.getLogger(__name__)


class FileSink:
    def __init__(
        self,
        root: str,
        environment: str,
        account_id: int,
        timestamp: str | None = None,
    ):
        self.timestamp = timestamp or datetime.now().strftime("%Y%m%d_%H%M%S")
        self.base_path = os.path.join(root, environment, f"account_{account_id}", f"snapshot_{self.timestamp}")
        os.makedirs(self.base_path, exist_ok=True)

    def write(self, resource: str, records: List[Dict]):
        path = os.path.join(self.base_path, f"{resource}.json")
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(records, fh, indent=2, ensure_ascii=False)
        logger.info("Wrote %d %s to %s", len(records), resource, path)
        return path


class LoggingSink:
    def write(self, resource: str, records: List[Dict]):
        logger.info("%s: %d records", resource, len(records))
        if records:
            preview = records[0]
            logger.info("  sample external_id=%s display_name=%s", preview.get("external_id"), preview.get("display_name"))
        return None
