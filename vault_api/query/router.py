"""FastAPI router for front matter queries and metadata listings."""

from typing import Any

from fastapi import APIRouter, Depends

from vault_api.dependencies import VaultClient, get_vault_client
from vault_api.query.models import FrontmatterQuery, QueryResult
from vault_api.query.tools import list_metadata_keys, list_metadata_values, query_frontmatter

router = APIRouter(tags=["query"])


@router.post("/agent/query-frontmatter")
async def query(
    request: FrontmatterQuery,
    vault: VaultClient = Depends(get_vault_client),
) -> QueryResult:
    """Filter, project and sort note front matter."""
    return await query_frontmatter(vault, request)


@router.get("/metadata/keys")
async def metadata_keys(vault: VaultClient = Depends(get_vault_client)) -> list[str]:
    """Every front matter key used in the vault."""
    return await list_metadata_keys(vault)


@router.get("/metadata/values/{key}")
async def metadata_values(key: str, vault: VaultClient = Depends(get_vault_client)) -> list[Any]:
    """Distinct values of one front matter key."""
    return await list_metadata_values(vault, key)
