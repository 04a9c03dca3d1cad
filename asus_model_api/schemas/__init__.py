"""Pydantic models describing the records and envelopes served by the API."""

from __future__ import annotations

from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field

ImageRole = Literal[
    "hero",
    "mode-dual-screen",
    "mode-laptop",
    "desktop-mode",
    "kickstand",
    "ports",
    "pen",
    "lifestyle",
]

Provenance = Literal["live", "fallback"]


class _Model(BaseModel):
    model_config = ConfigDict(extra="ignore")


class DisplaySpec(_Model):
    panels: int = Field(..., ge=1, description="Number of display panels")
    sizes_inches: str = Field(..., description="Panel diagonal sizes")
    options: List[str] = Field(default_factory=list, description="Panel resolution / refresh options")
    hdr: str = Field("", description="HDR, gamut and touch capabilities")


class DimensionsWeight(_Model):
    dimensions: str
    weight_approx: str


class SpecRecord(_Model):
    """Flat tech-spec record for one model; every field can be overridden independently."""

    model: str
    family: str
    variants: List[str] = Field(default_factory=list)
    display: DisplaySpec
    cpu_options: List[str] = Field(default_factory=list)
    ai_npu: str
    gpu: str
    memory: str
    storage: str
    io_ports: List[str] = Field(default_factory=list)
    camera: str
    wireless: str
    battery: str
    dimensions_weight: DimensionsWeight
    sources: List[str] = Field(default_factory=list)


class SpecResponse(SpecRecord):
    fetched_at: str = Field(..., description="ISO-8601 UTC time the response was assembled")
    provenance: Dict[str, Provenance] = Field(
        default_factory=dict,
        description="Per-field origin: live when a trigger keyword fired on the vendor page",
    )


class ImageEntry(_Model):
    url: str = Field(..., description="Absolute image URL on the vendor domain")
    alt: str = Field("", description="Alt text from the page, may be empty")
    role: ImageRole = Field("lifestyle", description="Semantic category derived from the URL")


class ImagesResponse(_Model):
    model: str
    source_pages: List[str]
    images: List[ImageEntry] = Field(default_factory=list)
    note: str
    fetched_at: str


class MarketingCopy(_Model):
    headline: str
    subheadline: str
    key_benefits: List[str] = Field(default_factory=list)
    short_description: str


class MarketingResponse(MarketingCopy):
    model: str
    lang: str = Field(..., description="Requested language, echoed as received (lowercased)")
    sources: List[str] = Field(default_factory=list)
    fetched_at: str


class HealthResponse(_Model):
    ok: bool = True
    service: str
    time: str


class ErrorResponse(_Model):
    error: str
    detail: str | None = None
    supported: List[str] | None = None


__all__ = [
    "DimensionsWeight",
    "DisplaySpec",
    "ErrorResponse",
    "HealthResponse",
    "ImageEntry",
    "ImageRole",
    "ImagesResponse",
    "MarketingCopy",
    "MarketingResponse",
    "Provenance",
    "SpecRecord",
    "SpecResponse",
]
