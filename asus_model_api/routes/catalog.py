from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from asus_model_api.catalog import resolve_model
from asus_model_api.config import Settings, get_settings
from asus_model_api.schemas import ErrorResponse, ImagesResponse, MarketingResponse, SpecResponse
from asus_model_api.services import assembly, fetcher

logger = logging.getLogger("asus-model-api")

router = APIRouter(prefix="/api", tags=["catalog"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing ?model="},
    500: {"model": ErrorResponse, "description": "Internal error"},
    501: {"model": ErrorResponse, "description": "Model not supported yet"},
}


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def _internal_error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": "Internal error", "detail": str(exc)})


@router.get("/spec", response_model=SpecResponse, responses=_ERROR_RESPONSES)
async def get_spec(request: Request, model: str | None = Query(None)) -> JSONResponse:
    profile = resolve_model(model)
    try:
        pages = await fetcher.fetch_pages([profile.pages.techspec], config=_settings(request).fetch)
        payload = assembly.build_spec_response(profile, pages[0] if pages else None)
    except Exception as exc:
        logger.exception("spec request failed", extra={"model": profile.key})
        return _internal_error(exc)
    return JSONResponse(payload.model_dump())


@router.get("/images", response_model=ImagesResponse, responses=_ERROR_RESPONSES)
async def get_images(request: Request, model: str | None = Query(None)) -> JSONResponse:
    profile = resolve_model(model)
    try:
        pages = await fetcher.fetch_pages(profile.pages.as_list(), config=_settings(request).fetch)
        payload = assembly.build_images_response(profile, pages)
    except Exception as exc:
        logger.exception("images request failed", extra={"model": profile.key})
        return _internal_error(exc)
    return JSONResponse(payload.model_dump())


@router.get("/marketing", response_model=MarketingResponse, responses=_ERROR_RESPONSES)
async def get_marketing(
    model: str | None = Query(None),
    lang: str | None = Query(None, description="he (default) or en"),
) -> JSONResponse:
    profile = resolve_model(model)
    try:
        payload = assembly.build_marketing_response(profile, lang)
    except Exception as exc:
        logger.exception("marketing request failed", extra={"model": profile.key})
        return _internal_error(exc)
    return JSONResponse(payload.model_dump())


__all__ = ["router"]
