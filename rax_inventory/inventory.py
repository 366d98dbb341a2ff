"""High-level inventory orchestration built on the raxcloud clients."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from raxcloud.exceptions import RaxCloudError

from .config import InventorySettings, load_inventory_settings
from .parser import Parser
from .session import CloudSession
from .sinks.file_sink import FileSink, LoggingSink

logger = logging.getLogger(__name__)

SessionFactory = Callable[[InventorySettings], Any]


def _default_session_factory(settings: InventorySettings):
    return CloudSession(settings)


async def _list_collection(session, name: str, entities: List[Any]) -> List[Any]:
    if name == "entities":
        return entities
    if name == "checks":
        checks: List[Any] = []
        for entity in entities:
            checks.extend(await session.monitoring.list_checks(entity.id))
        return checks
    if name == "servers":
        return await session.region.servers()
    if name == "images":
        return await session.region.images()
    if name == "flavors":
        return await session.region.flavors()
    raise ValueError(f"Unknown inventory collection: {name}")


async def _run_inventory_async(
    settings: InventorySettings,
    output_mode: str = "file",
    session_factory: SessionFactory = _default_session_factory,
    output_root_override: Optional[str] = None,
) -> Dict[str, Any]:
    parser = Parser()
    sink = LoggingSink() if output_mode == "log" else FileSink(
        output_root_override or settings.output_root,
        settings.environment,
        settings.account.account_id,
    )

    collections = settings.collections
    summary: Dict[str, Any] = {"written": {}}

    async with session_factory(settings) as session:
        entities: List[Any] = []
        if "entities" in collections or "checks" in collections:
            try:
                entities = await session.monitoring.list_entities()
            except RaxCloudError as exc:
                logger.error("Listing entities failed: %s", exc)
                for name in ("entities", "checks"):
                    if name in collections:
                        summary["written"][name] = f"error: {exc}"

        for name in collections:
            if name in summary["written"]:
                continue
            try:
                items = await _list_collection(session, name, entities)
            except RaxCloudError as exc:
                logger.error("Listing %s failed: %s", name, exc)
                summary["written"][name] = f"error: {exc}"
                continue
            parsed = parser.parse_many(name, items)
            sink.write(name, parsed)
            summary["written"][name] = len(parsed)

    return summary


def run_inventory(
    output_mode: str = "file",
    account_id: int = 1,
    config_file: str = "configs/config.json",
    credentials_file: str = "configs/credentials.json",
    environment: Optional[str] = None,
    session_factory: SessionFactory = _default_session_factory,
    output_root_override: Optional[str] = None,
    debug: bool = False,
) -> Dict[str, Any]:
    settings = load_inventory_settings(
        account_id=account_id,
        config_file=config_file,
        credentials_file=credentials_file,
        environment=environment,
    )
    if debug:
        settings.config_loader.set("environment.debug", True)
    settings.config_loader.setup_logging()
    return asyncio.run(
        _run_inventory_async(
            settings,
            output_mode=output_mode,
            session_factory=session_factory,
            output_root_override=output_root_override,
        )
    )
