"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, status

from food_score.api.admin import router as admin_router
from food_score.api.schemas import AnalysisRequest
from food_score.app_logging import configure_logging
from food_score.containers import AppContainer
from food_score.domain.additives import normalize_code
from food_score.services.additive_load import level_info, summary
from food_score.services.interactions import summarize


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting food score API with %s curated additives",
            len(app.state.container.registry),
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/analysis")
    async def analyze_product(
        payload: AnalysisRequest, request: Request
    ) -> dict[str, object]:
        """Score a product and annotate its additives."""
        state_container: AppContainer = request.app.state.container
        try:
            analysis = await state_container.analyzer.analyze(
                payload.to_product_input(),
                user_id=payload.user_id,
                allow_network=payload.allow_network,
            )
        except ValueError as exc:
            raise _unprocessable(exc) from exc
        load = analysis.additive_load
        return {
            "analysis": analysis,
            "additive_load_summary": summary(load),
            "processing_level": level_info(load.processing_level),
        }

    @app.get("/additives/{code}")
    async def additive_detail(
        code: str,
        request: Request,
        allow_network: bool = True,
        user_id: str | None = None,
    ) -> dict[str, object]:
        """Resolve one additive with its regulatory flags."""
        state_container: AppContainer = request.app.state.container
        try:
            additive = await state_container.resolver.resolve(
                code, allow_network=allow_network
            )
        except ValueError as exc:
            raise _unprocessable(exc) from exc
        regulatory = state_container.regulatory
        body: dict[str, object] = {
            "additive": additive,
            "banned_in": regulatory.banned_jurisdictions(additive.code),
            "restricted_in": regulatory.restricted_jurisdictions(additive.code),
            "requires_warning": regulatory.requires_warning_anywhere(additive.code),
            "has_explanation": state_container.explanations.has(additive.code),
        }
        profile = state_container.profiles.get_profile(user_id) if user_id else None
        if profile is not None:
            body["personalized_risk"] = state_container.personalization.personalized_risk(
                additive.code, profile
            )
        return body

    @app.get("/additives/{code}/regulations")
    async def additive_regulations(code: str, request: Request) -> dict[str, object]:
        """Compare an additive's status across jurisdictions."""
        state_container: AppContainer = request.app.state.container
        normalized = _normalized_or_422(code)
        regulatory = state_container.regulatory
        return {
            "code": normalized,
            "has_data": regulatory.has_data(normalized),
            "banned_anywhere": regulatory.is_banned_anywhere(normalized),
            "rows": regulatory.compare(normalized),
        }

    @app.get("/additives/{code}/explanation")
    async def additive_explanation(code: str, request: Request) -> dict[str, object]:
        """Return the long-form rating explanation for an additive."""
        state_container: AppContainer = request.app.state.container
        explanation = state_container.explanations.get(_normalized_or_422(code))
        if explanation is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"explanation": explanation}

    @app.get("/additives/{code}/interactions")
    async def additive_interactions(
        code: str,
        request: Request,
        with_codes: list[str] | None = Query(default=None, alias="with"),
    ) -> dict[str, object]:
        """Check an additive against other additives for known interactions."""
        state_container: AppContainer = request.app.state.container
        try:
            codes = [normalize_code(item) for item in [code, *(with_codes or [])]]
        except ValueError as exc:
            raise _unprocessable(exc) from exc
        warnings = state_container.interactions.detect(codes)
        return {"warnings": warnings, "summary": summarize(warnings)}

    return app


def _normalized_or_422(code: str) -> str:
    try:
        return normalize_code(code)
    except ValueError as exc:
        raise _unprocessable(exc) from exc


def _unprocessable(exc: ValueError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
    )
