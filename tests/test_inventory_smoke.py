import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fakes import FakeTransport, identity_payload
from rax_inventory.inventory import run_inventory
from rax_inventory.session import CloudSession
from raxcloud.monitoring.models import Entity
from raxcloud.servers.models import Flavor

AUTH_URL = "https://identity.example.com/v2.0"
MONITORING = "https://monitoring.api.rackspacecloud.com/v1.0/123456"
COMPUTE = "https://dfw.servers.api.rackspacecloud.com/v2/123456"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("RAX_ENVIRONMENT", "RAX_USERNAME", "RAX_API_KEY", "RAX_PASSWORD", "RAX_REGION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_files(tmp_path):
    config = {
        "environment": {"log_level": "WARNING", "debug": False},
        "identity": {"auth_url": AUTH_URL},
        "http": {},
        "pagination": {"max_pages": 10},
        "inventory": {"collections": ["entities", "checks", "servers", "flavors"]},
    }
    creds = {"accounts": [{"id": 42, "username": "jdoe", "api_key": "key", "region": "DFW"}]}
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(config))
    creds_file = tmp_path / "credentials.json"
    creds_file.write_text(json.dumps(creds))
    return str(config_file), str(creds_file)


def _fake_cloud():
    transport = FakeTransport()
    transport.add("POST", f"{AUTH_URL}/tokens", payload=identity_payload(token="tok"))
    transport.add("GET", f"{MONITORING}/entities", payload={
        "values": [{"id": "enA", "label": "web01"}], "metadata": {"next_marker": "enB"},
    })
    transport.add("GET", f"{MONITORING}/entities", params={"marker": "enB"}, payload={
        "values": [{"id": "enB", "label": "db01"}], "metadata": {},
    })
    transport.add("GET", f"{MONITORING}/entities/enA/checks", payload={
        "values": [{"id": "chA", "label": "ping", "type": "remote.ping"}], "metadata": {},
    })
    transport.add("GET", f"{MONITORING}/entities/enB/checks", payload={"values": [], "metadata": {}})
    transport.add("GET", f"{COMPUTE}/servers", payload={"servers": [{"id": "srv-1", "name": "web01"}]})
    transport.add("GET", f"{COMPUTE}/flavors", status=500, body="flavor service down")
    return transport


def test_inventory_writes_snapshots(tmp_path, config_files):
    config_file, creds_file = config_files
    transport = _fake_cloud()
    output_root = tmp_path / "out"

    summary = run_inventory(
        output_mode="file",
        account_id=42,
        config_file=config_file,
        credentials_file=creds_file,
        session_factory=lambda settings: CloudSession(settings, transport=transport),
        output_root_override=str(output_root),
    )

    assert summary["written"]["entities"] == 2
    assert summary["written"]["checks"] == 1
    assert summary["written"]["servers"] == 1
    assert summary["written"]["flavors"].startswith("error:")

    snapshots = {p.name: p for p in (output_root / "dfw").rglob("*.json")}
    assert {"entities.json", "checks.json", "servers.json"} == set(snapshots)
    entities = json.loads(snapshots["entities.json"].read_text())
    assert [e["display_name"] for e in entities] == ["web01", "db01"]
    assert entities[0]["object_type"] == "entities"
    checks = json.loads(snapshots["checks.json"].read_text())
    assert checks[0]["display_name"] == "ping (remote.ping)"

    token_headers = {c.headers.get("X-Auth-Token") for c in transport.calls if c.method == "GET"}
    assert token_headers == {"tok"}


class FakeMonitoring:
    async def list_entities(self):
        return [Entity(id="enA", label="web01")]

    async def list_checks(self, entity_id):
        return []


class FakeRegion:
    async def servers(self):
        return []

    async def flavors(self):
        return [Flavor(id="2", name="512MB Standard Instance", ram=512)]


class FakeSession:
    def __init__(self):
        self.monitoring = FakeMonitoring()
        self.region = FakeRegion()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


def test_inventory_log_mode_with_fake_session(config_files):
    config_file, creds_file = config_files

    summary = run_inventory(
        output_mode="log",
        account_id=42,
        config_file=config_file,
        credentials_file=creds_file,
        session_factory=lambda settings: FakeSession(),
    )

    assert summary["written"] == {"entities": 1, "checks": 0, "servers": 0, "flavors": 1}


def test_runner_reports_missing_credentials(tmp_path, capsys):
    from run_inventory import main

    code = main(["--credentials-file", str(tmp_path / "absent.json"), "--output-mode", "log"])

    assert code == 1
    assert "Credentials file not found" in capsys.readouterr().err


def test_debug_flag_turns_on_request_logging(config_files):
    from run_inventory import build_parser

    config_file, creds_file = config_files
    seen = []

    def factory(settings):
        seen.append(settings)
        return FakeSession()

    assert build_parser().parse_args(["--debug"]).debug is True
    assert build_parser().parse_args([]).debug is False

    run_inventory(
        output_mode="log",
        account_id=42,
        config_file=config_file,
        credentials_file=creds_file,
        session_factory=factory,
        debug=True,
    )

    assert seen[0].config_loader.is_debug_mode() is True
