"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from food_score.services.cache import CacheError

if TYPE_CHECKING:
    from food_score.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])
_logger = logging.getLogger(__name__)


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health(request: Request) -> dict[str, object]:
    """Admin health check with reference data sizes."""
    container: AppContainer = request.app.state.container
    return {
        "status": "ok",
        "environment": container.settings.environment,
        "additives": len(container.registry),
        "explanations": container.explanations.counts().total,
    }


@router.get("/cache/{code}", dependencies=[Depends(require_admin)])
async def cache_entry(code: str, request: Request) -> dict[str, object]:
    """Show where a code resolves from and any cached taxonomy entry."""
    container: AppContainer = request.app.state.container
    try:
        source = container.resolver.source_of(code)
        entry = container.taxonomy.cached_entry(code)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return {"code": code, "source": source, "cached": entry}


@router.post("/cache/clear", dependencies=[Depends(require_admin)])
async def clear_cache(request: Request) -> dict[str, str]:
    """Drop every cached taxonomy entry."""
    container: AppContainer = request.app.state.container
    try:
        container.cache.clear()
    except CacheError as exc:
        _logger.exception("Additive cache clear failed")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Cache unavailable"
        ) from exc
    _logger.info("Additive cache cleared via admin API")
    return {"status": "cleared"}
