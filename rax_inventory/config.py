"""Configuration helpers for the inventory runner."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

from raxcloud.auth import CredentialProvider, JsonCredentialProvider, credentials_from_record
from raxcloud.auth.credential_provider import Credentials
from raxcloud.config import ConfigLoader

DEFAULT_COLLECTIONS = ["entities", "checks", "servers", "images", "flavors"]

# Environment variables that win over the credentials file
ENV_OVERRIDES = {
    "username": "RAX_USERNAME",
    "api_key": "RAX_API_KEY",
    "password": "RAX_PASSWORD",
    "region": "RAX_REGION",
}


@dataclass
class AccountConfig:
    account_id: int
    credentials: Credentials
    region: str
    monitoring_url: str = ""

    @property
    def username(self) -> str:
        return self.credentials.username


@dataclass
class InventorySettings:
    config_loader: ConfigLoader
    account: AccountConfig

    @property
    def environment(self) -> str:
        return self.config_loader.environment

    @property
    def output_root(self) -> str:
        return self.config_loader.get_output_directory()

    @property
    def collections(self) -> List[str]:
        return list(self.config_loader.get("inventory.collections", DEFAULT_COLLECTIONS))


def load_inventory_settings(
    account_id: int,
    config_file: str = "configs/config.json",
    credentials_file: str = "configs/credentials.json",
    environment: Optional[str] = None,
    credential_provider: Optional[CredentialProvider] = None,
) -> InventorySettings:
    """Load inventory settings with env-var overrides."""

    config_loader = ConfigLoader(config_file=config_file, environment=environment)
    provider = credential_provider or JsonCredentialProvider(credentials_file)
    record = provider.get_account(account_id)
    for field_name, env_name in ENV_OVERRIDES.items():
        if os.getenv(env_name):
            record[field_name] = os.environ[env_name]

    account = AccountConfig(
        account_id=account_id,
        credentials=credentials_from_record(record),
        region=record.get("region") or config_loader.environment,
        monitoring_url=record.get("monitoring_url", ""),
    )
    return InventorySettings(config_loader=config_loader, account=account)
