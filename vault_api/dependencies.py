"""Shared dependencies: VaultClient and structured logger."""

import json
import logging
import shutil
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vault_api.config import get_settings

# Attributes every LogRecord carries; anything else arrived through ``extra=``
_RECORD_ATTRS = set(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }
        if extra := {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}:
            data.update(extra)
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def setup_logging() -> logging.Logger:
    """Configure and return the application logger."""
    settings = get_settings()
    logger = logging.getLogger("vault_api")
    logger.setLevel(getattr(logging, settings.log_level.upper()))
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


logger = setup_logging()


class VaultError(Exception):
    """Base exception for vault operations."""

    pass


class VaultNotFoundError(VaultError):
    """Raised when a file, note or directory is not found in the vault."""

    pass


class VaultSecurityError(VaultError):
    """Raised when a security violation is detected."""

    pass


class VaultConflictError(VaultError):
    """Raised when creating something that already exists."""

    pass


@dataclass
class VaultClient:
    """Client for interacting with the vault on disk.

    All paths are vault-relative and forward-slash separated. Every
    method resolves its path inside the vault root first, so callers
    never touch the filesystem directly.
    """

    vault_path: Path

    @property
    def root(self) -> Path:
        """Resolved vault root."""
        return self.vault_path.resolve()

    def _validate_path(self, relative_path: str) -> Path:
        """Validate and resolve a path within the vault.

        Args:
            relative_path: Relative path within the vault

        Returns:
            Resolved absolute path

        Raises:
            VaultSecurityError: If path traversal is detected
        """
        full_path = (self.root / relative_path).resolve()
        if not full_path.is_relative_to(self.root):
            raise VaultSecurityError(f"Path traversal detected: {relative_path}")
        return full_path

    def _relative(self, full_path: Path) -> str:
        return full_path.relative_to(self.root).as_posix()

    async def read_file(self, path: str) -> str:
        """Read a file from the vault.

        Args:
            path: Relative path to file

        Returns:
            File content as string

        Raises:
            VaultNotFoundError: If file does not exist or is a directory
        """
        full_path = self._validate_path(path)
        if not full_path.is_file():
            raise VaultNotFoundError(f"File not found: {path}")
        return full_path.read_text(encoding="utf-8")

    async def write_file(self, path: str, content: str) -> None:
        """Write content to a file in the vault.

        Args:
            path: Relative path to file
            content: Content to write
        """
        full_path = self._validate_path(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")

    async def delete_file(self, path: str) -> None:
        """Delete a file from the vault.

        Args:
            path: Relative path to file

        Raises:
            VaultNotFoundError: If file does not exist
            VaultSecurityError: If path traversal detected
        """
        full_path = self._validate_path(path)
        if not full_path.is_file():
            raise VaultNotFoundError(f"File not found: {path}")
        full_path.unlink()

    async def make_directory(self, path: str) -> None:
        """Create a directory (and its parents) in the vault."""
        self._validate_path(path).mkdir(parents=True, exist_ok=True)

    async def delete_directory(self, path: str) -> None:
        """Delete a directory and everything below it.

        Raises:
            VaultNotFoundError: If the directory does not exist
            VaultSecurityError: If the path is the vault root or escapes it
        """
        full_path = self._validate_path(path)
        if full_path == self.root:
            raise VaultSecurityError("Refusing to delete the vault root")
        if not full_path.is_dir():
            raise VaultNotFoundError(f"Directory not found: {path}")
        shutil.rmtree(full_path)

    async def file_exists(self, path: str) -> bool:
        """Check if a file or directory exists in the vault.

        Args:
            path: Relative path to file

        Returns:
            True if the path exists, False otherwise
        """
        try:
            full_path = self._validate_path(path)
            return full_path.exists()
        except VaultSecurityError:
            return False

    async def is_directory(self, path: str) -> bool:
        """Check if a path is a directory in the vault."""
        try:
            return self._validate_path(path).is_dir()
        except VaultSecurityError:
            return False

    async def file_size(self, path: str) -> int:
        """Size of a file in bytes."""
        full_path = self._validate_path(path)
        if not full_path.is_file():
            raise VaultNotFoundError(f"File not found: {path}")
        return full_path.stat().st_size

    async def last_modified(self, path: str) -> int:
        """Last modification time as a UNIX timestamp."""
        full_path = self._validate_path(path)
        if not full_path.exists():
            raise VaultNotFoundError(f"File not found: {path}")
        return int(full_path.stat().st_mtime)

    async def list_files(
        self, folder: str = "", pattern: str = "*.md", recursive: bool = True
    ) -> list[str]:
        """List files in the vault matching a pattern.

        Args:
            folder: Folder to search in (empty for root)
            pattern: Glob pattern for files
            recursive: Descend into sub-folders

        Returns:
            Sorted list of relative file paths

        Raises:
            VaultNotFoundError: If the folder does not exist
        """
        base = self._validate_path(folder) if folder else self.root
        if not base.is_dir():
            raise VaultNotFoundError(f"Directory not found: {folder}")
        found = base.rglob(pattern) if recursive else base.glob(pattern)
        return sorted(self._relative(f) for f in found if f.is_file())

    async def list_entries(self, folder: str = "", recursive: bool = False) -> list[str]:
        """List files and directories below a folder.

        Raises:
            VaultNotFoundError: If the folder does not exist
        """
        base = self._validate_path(folder) if folder and folder != "." else self.root
        if not base.is_dir():
            raise VaultNotFoundError(f"Directory not found: {folder}")
        found = base.rglob("*") if recursive else base.iterdir()
        return sorted(self._relative(f) for f in found)


async def get_vault_client() -> AsyncIterator[VaultClient]:
    """FastAPI dependency provider for VaultClient."""
    yield VaultClient(vault_path=get_settings().vault_path)
