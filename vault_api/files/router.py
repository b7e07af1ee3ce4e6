"""FastAPI router for raw file and directory endpoints.

File paths are used verbatim; no extension is added.
"""

from fastapi import APIRouter, Depends, Query, status

from vault_api.dependencies import VaultClient, get_vault_client
from vault_api.files import tools
from vault_api.files.models import (
    DirectoryListing,
    FileContent,
    FileInfo,
    FileOperationResult,
    FileStoreRequest,
    FileUpdateRequest,
    FileWriteRequest,
    FileWriteResult,
)

router = APIRouter(tags=["files"])


@router.get("/files")
async def list_files(vault: VaultClient = Depends(get_vault_client)) -> list[FileInfo]:
    return await tools.list_files(vault)


@router.post("/files", status_code=status.HTTP_201_CREATED)
async def create_file(
    request: FileStoreRequest,
    vault: VaultClient = Depends(get_vault_client),
) -> FileOperationResult:
    """Create a file or a directory; 409 when the path is taken."""
    return await tools.create_file(vault, request)


@router.post("/files/write")
async def write_file(
    request: FileWriteRequest,
    vault: VaultClient = Depends(get_vault_client),
) -> FileWriteResult:
    """Write a file in overwrite, append or prepend mode."""
    return await tools.write_file(vault, request)


@router.get("/files/{path:path}")
async def read_file(path: str, vault: VaultClient = Depends(get_vault_client)) -> FileContent:
    return await tools.read_file(vault, path)


@router.put("/files/{path:path}")
async def update_file(
    path: str,
    request: FileUpdateRequest,
    vault: VaultClient = Depends(get_vault_client),
) -> FileOperationResult:
    return await tools.update_file(vault, path, request.content)


@router.delete("/files/{path:path}")
async def delete_file(
    path: str,
    vault: VaultClient = Depends(get_vault_client),
) -> FileOperationResult:
    """Delete a file, or a directory with its contents."""
    return await tools.delete_path(vault, path)


@router.get("/vault/directory")
async def list_directory(
    path: str = ".",
    recursive: bool = False,
    limit: int = Query(default=50, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    vault: VaultClient = Depends(get_vault_client),
) -> DirectoryListing:
    """Paginated listing of a directory's files and sub-directories."""
    return await tools.list_directory(vault, path, recursive, limit, offset)
