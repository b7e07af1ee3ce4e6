"""FastAPI router for tag listings."""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from vault_api.dependencies import VaultClient, get_vault_client
from vault_api.tags.models import TagListing
from vault_api.tags.tools import list_tags

router = APIRouter(tags=["tags"])


@router.get("/agent/tags")
async def tags(
    min_count: int = Query(default=1, ge=1),
    include_nested: bool = True,
    format: Literal["flat", "hierarchical"] = "flat",
    vault: VaultClient = Depends(get_vault_client),
) -> TagListing:
    """All tags with the number of notes using each."""
    return await list_tags(vault, min_count, include_nested, format)
