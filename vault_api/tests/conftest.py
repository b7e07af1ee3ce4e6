"""Shared pytest fixtures."""

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load environment variables before importing app modules
load_dotenv()

# Set test defaults if not provided
if not os.environ.get("VAULT_PATH"):
    os.environ["VAULT_PATH"] = "/tmp/test-vault"

from fastapi.testclient import TestClient  # noqa: E402

from vault_api.dependencies import VaultClient, get_vault_client  # noqa: E402
from vault_api.main import app  # noqa: E402

WriteFile = Callable[[str, str], Path]


@pytest.fixture
def mock_vault_path(tmp_path: Path) -> Path:
    """Create an empty temporary vault directory."""
    vault = tmp_path / "vault"
    vault.mkdir()
    return vault


@pytest.fixture
def mock_vault_client(mock_vault_path: Path) -> VaultClient:
    """Create a VaultClient with temporary vault path."""
    return VaultClient(vault_path=mock_vault_path)


@pytest.fixture
def write_file(mock_vault_path: Path) -> WriteFile:
    """Factory writing a file into the temporary vault.

    Usage:
        write_file("Projects/plan.md", "---\\ntags: [work]\\n---\\n# Plan")
    """

    def _write(path: str, content: str) -> Path:
        full_path = mock_vault_path / path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        return full_path

    return _write


@pytest.fixture
def client(mock_vault_client: VaultClient) -> Iterator[TestClient]:
    """Create a FastAPI test client bound to the temporary vault."""

    async def _override() -> VaultClient:
        return mock_vault_client

    app.dependency_overrides[get_vault_client] = _override
    yield TestClient(app)
    app.dependency_overrides.clear()
