import json
import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rax_inventory.config import load_inventory_settings
from raxcloud.auth import ApiKeyCredentials, PasswordCredentials
from raxcloud.config import ConfigLoader

BASE_CONFIG = {
    "environment": {"log_level": "INFO", "debug": False},
    "identity": {"auth_url": "https://identity.example.com/v2.0"},
    "http": {"max_retries": 2, "read_timeout": 5},
    "pagination": {"max_pages": 50},
}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("RAX_ENVIRONMENT", "RAX_USERNAME", "RAX_API_KEY", "RAX_PASSWORD", "RAX_REGION"):
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return str(path)


def test_dot_notation_lookup(tmp_path):
    loader = ConfigLoader(_write(tmp_path, "config.json", BASE_CONFIG), base_path=tmp_path)

    assert loader.get("http.max_retries") == 2
    assert loader.get("http.missing", "fallback") == "fallback"
    assert loader.get("http.read_timeout.deeper") is None
    assert loader.get_max_pages() == 50
    assert loader.get_auth_url() == "https://identity.example.com/v2.0"
    assert loader.environment == "dfw"


def test_missing_section_is_rejected(tmp_path):
    config = dict(BASE_CONFIG)
    del config["pagination"]

    with pytest.raises(ValueError):
        ConfigLoader(_write(tmp_path, "config.json", config), base_path=tmp_path)


def test_missing_file_is_rejected(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(str(tmp_path / "absent.json"), base_path=tmp_path)


def test_environment_file_selected_by_variable(tmp_path, monkeypatch):
    envs = tmp_path / "envs"
    envs.mkdir()
    (envs / ".env.lon").write_text("RAX_REGION=LON\n")
    monkeypatch.setenv("RAX_ENVIRONMENT", "lon")
    monkeypatch.setenv("RAX_REGION", "DFW")

    loader = ConfigLoader(_write(tmp_path, "config.json", BASE_CONFIG), base_path=tmp_path)

    assert loader.environment == "lon"
    assert os.environ["RAX_REGION"] == "LON"


def test_settings_prefer_api_key(tmp_path):
    config_file = _write(tmp_path, "config.json", BASE_CONFIG)
    creds_file = _write(tmp_path, "credentials.json", {
        "accounts": [{"id": 3, "username": "jdoe", "api_key": "k", "password": "p", "region": "ORD"}]
    })

    settings = load_inventory_settings(3, config_file=config_file, credentials_file=creds_file)

    assert settings.account.region == "ORD"
    assert settings.account.credentials == ApiKeyCredentials("jdoe", "k")
    assert settings.collections == ["entities", "checks", "servers", "images", "flavors"]


def test_settings_env_overrides(tmp_path, monkeypatch):
    config_file = _write(tmp_path, "config.json", BASE_CONFIG)
    creds_file = _write(tmp_path, "credentials.json", {"accounts": [{"id": 3, "username": "jdoe"}]})
    monkeypatch.setenv("RAX_PASSWORD", "from-env")
    monkeypatch.setenv("RAX_REGION", "HKG")

    settings = load_inventory_settings(3, config_file=config_file, credentials_file=creds_file)

    assert settings.account.credentials == PasswordCredentials("jdoe", "from-env")
    assert settings.account.region == "HKG"


def test_settings_require_a_secret(tmp_path):
    config_file = _write(tmp_path, "config.json", BASE_CONFIG)
    creds_file = _write(tmp_path, "credentials.json", {"accounts": [{"id": 3, "username": "jdoe"}]})

    with pytest.raises(ValueError):
        load_inventory_settings(3, config_file=config_file, credentials_file=creds_file)


class DictCredentialProvider:
    def __init__(self, accounts):
        self.accounts = accounts

    def get_account(self, account_id):
        return dict(self.accounts[account_id])


def test_settings_accept_injected_provider(tmp_path, monkeypatch):
    config_file = _write(tmp_path, "config.json", BASE_CONFIG)
    provider = DictCredentialProvider({5: {"username": "svc", "api_key": "k", "monitoring_url": "https://mon"}})
    monkeypatch.setenv("RAX_USERNAME", "override")

    settings = load_inventory_settings(5, config_file=config_file, credential_provider=provider)

    assert settings.account.credentials == ApiKeyCredentials("override", "k")
    assert settings.account.username == "override"
    assert settings.account.monitoring_url == "https://mon"
    assert settings.account.region == settings.environment


def test_set_overrides_with_dot_notation(tmp_path):
    loader = ConfigLoader(_write(tmp_path, "config.json", BASE_CONFIG), base_path=tmp_path)

    loader.set("environment.debug", True)
    loader.set("inventory.output_directory", "snapshots")

    assert loader.is_debug_mode() is True
    assert loader.get_output_directory() == "snapshots"
    assert loader.get("http.max_retries") == 2
