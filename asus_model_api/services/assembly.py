"""Merge live extraction results over a model's static fallback data."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional, Sequence

from asus_model_api.catalog import ModelProfile
from asus_model_api.schemas import (
    ImageEntry,
    ImagesResponse,
    MarketingResponse,
    SpecRecord,
    SpecResponse,
)
from asus_model_api.services.fetcher import FetchResult
from asus_model_api.services.image_extractor import dedupe_images, extract_images
from asus_model_api.services.spec_extractor import extract_specs

logger = logging.getLogger("asus-model-api")

# Identity fields are never overridden and carry no provenance.
_STATIC_FIELDS = {"model", "sources"}


def utc_timestamp(now: dt.datetime | None = None) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""

    moment = now or dt.datetime.now(dt.timezone.utc)
    return moment.astimezone(dt.timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_live_specs(profile: ModelProfile, page: Optional[FetchResult]) -> Optional[dict[str, Any]]:
    if page is None or not page.ok:
        return None
    try:
        return extract_specs(page.html or "", profile.rules)
    except Exception:
        logger.exception("spec extraction failed", extra={"url": page.url, "model": profile.key})
        return None


def merge_spec(
    fallback: SpecRecord, parsed: Optional[dict[str, Any]]
) -> tuple[dict[str, Any], Dict[str, str]]:
    """Overlay ``parsed`` on ``fallback`` field by field.

    Nested records are overlaid key by key so sub-fields without a live value keep
    their fallback text.
    """

    merged = fallback.model_dump()
    parsed = parsed or {}
    provenance: Dict[str, str] = {}
    for name in merged:
        if name in _STATIC_FIELDS:
            continue
        live = parsed.get(name)
        if live is None:
            provenance[name] = "fallback"
            continue
        if isinstance(live, dict) and isinstance(merged[name], dict):
            merged[name] = {**merged[name], **{k: v for k, v in live.items() if v is not None}}
        else:
            merged[name] = live
        provenance[name] = "live"
    return merged, provenance


def build_spec_response(profile: ModelProfile, page: Optional[FetchResult]) -> SpecResponse:
    parsed = parse_live_specs(profile, page)
    merged, provenance = merge_spec(profile.fallback, parsed)
    logger.info(
        "spec assembled",
        extra={
            "model": profile.key,
            "gate_passed": parsed is not None,
            "live_fields": sorted(k for k, v in provenance.items() if v == "live"),
        },
    )
    return SpecResponse(**merged, fetched_at=utc_timestamp(), provenance=provenance)


def collect_images(profile: ModelProfile, pages: Sequence[FetchResult]) -> List[ImageEntry]:
    """Images from every successful page, in page order, without duplicate URLs."""

    entries: List[ImageEntry] = []
    for page in pages:
        if not page.ok:
            continue
        try:
            entries.extend(
                extract_images(page.html or "", page.url, allowed_hosts=profile.allowed_image_hosts)
            )
        except Exception:
            logger.exception("image extraction failed", extra={"url": page.url, "model": profile.key})
    return dedupe_images(entries)


def build_images_response(profile: ModelProfile, pages: Sequence[FetchResult]) -> ImagesResponse:
    images = collect_images(profile, pages)
    logger.info(
        "images assembled",
        extra={
            "model": profile.key,
            "pages_ok": sum(1 for page in pages if page.ok),
            "image_count": len(images),
        },
    )
    return ImagesResponse(
        model=profile.key,
        source_pages=profile.pages.as_list(),
        images=images,
        note=profile.image_note,
        fetched_at=utc_timestamp(),
    )


def normalise_lang(raw: str | None, default: str = "he") -> str:
    return (raw or default).lower()


def build_marketing_response(profile: ModelProfile, lang: str | None) -> MarketingResponse:
    requested = normalise_lang(lang, profile.default_lang)
    copy = profile.marketing_copy(requested)
    return MarketingResponse(
        model=profile.key,
        lang=requested,
        **copy.model_dump(),
        sources=list(profile.fallback.sources),
        fetched_at=utc_timestamp(),
    )


__all__ = [
    "build_images_response",
    "build_marketing_response",
    "build_spec_response",
    "collect_images",
    "merge_spec",
    "normalise_lang",
    "parse_live_specs",
    "utc_timestamp",
]
