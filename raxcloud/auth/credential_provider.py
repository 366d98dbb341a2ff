from typing import Protocol, Dict, Any, Union
import json
import os

from .authentication import ApiKeyCredentials, PasswordCredentials

Credentials = Union[PasswordCredentials, ApiKeyCredentials]


class CredentialProvider(Protocol):
    """Abstraction for looking up an account's identity credentials."""

    def get_account(self, account_id: int) -> Dict[str, Any]:
        ...

    def get_credentials(self, account_id: int) -> Credentials:
        ...


def credentials_from_record(record: Dict[str, Any]) -> Credentials:
    """Build identity credentials from an account record; the API key wins over a password."""
    username = record.get("username") or ""
    if not username:
        raise ValueError("username is required via credentials file or RAX_USERNAME env var")
    if record.get("api_key"):
        return ApiKeyCredentials(username, record["api_key"])
    if record.get("password"):
        return PasswordCredentials(username, record["password"])
    raise ValueError(
        f"api_key or password is required for {username} via credentials file "
        "or RAX_API_KEY/RAX_PASSWORD env vars"
    )


class JsonCredentialProvider:
    """
    Reads Rackspace accounts from a JSON file shaped like
    configs/credentials.example.json: {"accounts": [{"id", "username",
    "api_key" | "password", "region", "monitoring_url"}]}.
    """

    def __init__(self, credentials_file: str = "configs/credentials.json"):
        self.credentials_file = credentials_file

    def get_account(self, account_id: int) -> Dict[str, Any]:
        if not os.path.exists(self.credentials_file):
            raise FileNotFoundError(f"Credentials file not found: {self.credentials_file}")

        with open(self.credentials_file, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in credentials file {self.credentials_file}: {e}")

        for account in data.get("accounts", []):
            if account.get("id") == account_id:
                return dict(account)

        raise ValueError(f"Account {account_id} not found in {self.credentials_file}")

    def get_credentials(self, account_id: int) -> Credentials:
        return credentials_from_record(self.get_account(account_id))
