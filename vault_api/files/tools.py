"""Raw file and directory operations.

Unlike note operations these work on any file type and use paths
verbatim: no ``.md`` is appended and no front matter is parsed.
"""

from datetime import UTC, datetime

from vault_api.dependencies import VaultClient, VaultConflictError, VaultNotFoundError, logger
from vault_api.files.models import (
    DirectoryEntry,
    DirectoryListing,
    FileContent,
    FileInfo,
    FileOperationResult,
    FileStoreRequest,
    FileWriteRequest,
    FileWriteResult,
)

# =============================================================================
# Helper Functions
# =============================================================================


def iso_timestamp(timestamp: int) -> str:
    """Format a UNIX timestamp as ISO 8601 (UTC).

    Examples:
        >>> iso_timestamp(0)
        '1970-01-01T00:00:00+00:00'
    """
    return datetime.fromtimestamp(timestamp, UTC).isoformat()


async def _require_file(vault: VaultClient, path: str) -> None:
    if not await vault.file_exists(path) or await vault.is_directory(path):
        raise VaultNotFoundError(f"File not found: {path}")


# =============================================================================
# Operations
# =============================================================================


async def list_files(vault: VaultClient) -> list[FileInfo]:
    """List every file in the vault with its size and modification time."""
    files: list[FileInfo] = []
    for file_path in await vault.list_files(pattern="*"):
        try:
            files.append(
                FileInfo(
                    path=file_path,
                    size=await vault.file_size(file_path),
                    last_modified=iso_timestamp(await vault.last_modified(file_path)),
                )
            )
        except Exception as e:
            logger.debug("list_files_file_error", extra={"path": file_path, "error": str(e)})
    return files


async def read_file(vault: VaultClient, path: str) -> FileContent:
    """Read a file's raw text.

    Raises:
        VaultNotFoundError: If the file does not exist or is a directory
    """
    await _require_file(vault, path)
    return FileContent(path=path, content=await vault.read_file(path))


async def create_file(vault: VaultClient, request: FileStoreRequest) -> FileOperationResult:
    """Create a new file or directory.

    Raises:
        VaultConflictError: If something already exists at the path
    """
    if request.type == "directory":
        if await vault.file_exists(request.path):
            raise VaultConflictError("Directory already exists")
        await vault.make_directory(request.path)
        logger.info("directory_created", extra={"path": request.path})
        return FileOperationResult(message="Directory created successfully", path=request.path)

    if await vault.file_exists(request.path):
        raise VaultConflictError("File already exists")
    await vault.write_file(request.path, request.content)
    logger.info("file_created", extra={"path": request.path})
    return FileOperationResult(message="File created successfully", path=request.path)


async def write_file(vault: VaultClient, request: FileWriteRequest) -> FileWriteResult:
    """Write a file in overwrite, append or prepend mode.

    A missing file is created with the given content whatever the mode.
    """
    exists = await vault.file_exists(request.path)
    if exists and await vault.is_directory(request.path):
        raise VaultConflictError(f"A directory exists at {request.path}")

    content = request.content
    if exists and request.mode != "overwrite":
        existing = await vault.read_file(request.path)
        content = existing + content if request.mode == "append" else content + existing

    await vault.write_file(request.path, content)
    message = (
        f"File updated successfully ({request.mode})" if exists else "File created successfully"
    )

    logger.info(
        "file_written",
        extra={"path": request.path, "mode": request.mode, "created": not exists},
    )

    return FileWriteResult(
        message=message,
        path=request.path,
        mode=request.mode,
        size=await vault.file_size(request.path),
    )


async def update_file(vault: VaultClient, path: str, content: str) -> FileOperationResult:
    """Replace the content of an existing file.

    Raises:
        VaultNotFoundError: If the file does not exist
    """
    await _require_file(vault, path)
    await vault.write_file(path, content)
    logger.info("file_updated", extra={"path": path})
    return FileOperationResult(message="File updated successfully", path=path)


async def delete_path(vault: VaultClient, path: str) -> FileOperationResult:
    """Delete a file, or a directory with everything below it.

    Raises:
        VaultNotFoundError: If nothing exists at the path
    """
    if not await vault.file_exists(path):
        raise VaultNotFoundError(f"File not found: {path}")

    if await vault.is_directory(path):
        await vault.delete_directory(path)
        logger.info("directory_deleted", extra={"path": path})
        return FileOperationResult(message="Directory deleted successfully", path=path)

    await vault.delete_file(path)
    logger.info("file_deleted", extra={"path": path})
    return FileOperationResult(message="File deleted successfully", path=path)


async def list_directory(
    vault: VaultClient,
    path: str = ".",
    recursive: bool = False,
    limit: int = 50,
    offset: int = 0,
) -> DirectoryListing:
    """List one page of a directory's files and sub-directories.

    Raises:
        VaultNotFoundError: If the directory does not exist
    """
    entries = await vault.list_entries(path, recursive)

    items: list[DirectoryEntry] = []
    for entry in entries[offset : offset + limit]:
        is_dir = await vault.is_directory(entry)
        items.append(
            DirectoryEntry(
                path=entry,
                type="directory" if is_dir else "file",
                size=None if is_dir else await vault.file_size(entry),
                modified=await vault.last_modified(entry),
            )
        )

    return DirectoryListing(
        items=items,
        total_items=len(entries),
        path=path,
        offset=offset,
        limit=limit,
        has_more=offset + limit < len(entries),
    )
