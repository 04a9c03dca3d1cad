"""Registry of supported laptop models and the lookup used by every data endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from asus_model_api.schemas import MarketingCopy, SpecRecord
from asus_model_api.services.image_extractor import DEFAULT_ALLOWED_HOSTS
from asus_model_api.services.spec_extractor import ExtractionRules


class ModelLookupError(ValueError):
    """Base error for model query problems; carries the HTTP status and JSON body."""

    status_code = 400

    def __init__(self, message: str, *, payload: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.payload = payload or {"error": message}


class ModelNotSpecified(ModelLookupError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Missing ?model=")


class ModelNotSupported(ModelLookupError):
    status_code = 501

    def __init__(self, model: str, supported: List[str]) -> None:
        super().__init__(
            "Model not supported yet",
            payload={"error": "Model not supported yet", "supported": list(supported)},
        )
        self.model = model


@dataclass(frozen=True)
class VendorPages:
    product: str
    techspec: str

    def as_list(self) -> List[str]:
        return [self.product, self.techspec]


@dataclass(frozen=True)
class ModelProfile:
    key: str
    pages: VendorPages
    fallback: SpecRecord
    rules: ExtractionRules
    marketing: Mapping[str, MarketingCopy]
    default_lang: str = "he"
    image_note: str = ""
    allowed_image_hosts: Tuple[str, ...] = field(default=DEFAULT_ALLOWED_HOSTS)

    def marketing_copy(self, lang: str) -> MarketingCopy:
        return self.marketing.get(lang) or self.marketing[self.default_lang]


_REGISTRY: Dict[str, ModelProfile] = {}


def register(profile: ModelProfile) -> ModelProfile:
    _REGISTRY[profile.key.upper()] = profile
    return profile


def supported_models() -> List[str]:
    return list(_REGISTRY)


def normalise_model(raw: str | None) -> str:
    return (raw or "").strip().upper()


def resolve_model(raw: str | None) -> ModelProfile:
    """Map a free-text ``model`` query value to its registered profile.

    Any value starting with a registered key matches, so variant codes such as
    ``UX8406MA`` resolve to ``UX8406``.
    """

    model = normalise_model(raw)
    if not model:
        raise ModelNotSpecified()
    # Longest key first so a more specific registration wins over its prefix.
    for key in sorted(_REGISTRY, key=len, reverse=True):
        if model.startswith(key):
            return _REGISTRY[key]
    raise ModelNotSupported(model, supported_models())


from asus_model_api.catalog import ux8406  # noqa: E402,F401  (registers itself)


__all__ = [
    "ModelLookupError",
    "ModelNotSpecified",
    "ModelNotSupported",
    "ModelProfile",
    "VendorPages",
    "normalise_model",
    "register",
    "resolve_model",
    "supported_models",
]
