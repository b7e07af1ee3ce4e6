"""FastAPI router for vault statistics."""

from fastapi import APIRouter, Depends

from vault_api.analytics.models import VaultStats
from vault_api.analytics.tools import get_vault_stats
from vault_api.dependencies import VaultClient, get_vault_client

router = APIRouter(tags=["analytics"])


@router.get("/agent/stats")
async def stats(vault: VaultClient = Depends(get_vault_client)) -> VaultStats:
    """Corpus statistics and health score."""
    return await get_vault_stats(vault)
