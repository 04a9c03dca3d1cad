"""Collect and classify product imagery from vendor markup."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from asus_model_api.schemas import ImageEntry

IMAGE_EXT_RE = re.compile(r"\.(png|jpe?g|webp)(\?|$)", re.IGNORECASE)
DEFAULT_ALLOWED_HOSTS = ("asus.com", "dlcdnwebimgs.asus.com")

# Evaluated in order; the first rule with a matching substring wins.
ROLE_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("hero", ("hero", "kv", "keyvisual")),
    ("mode-dual-screen", ("dual", "duo")),
    ("mode-laptop", ("laptop",)),
    ("desktop-mode", ("desktop",)),
    ("kickstand", ("kickstand",)),
    ("ports", ("port", "io")),
    ("pen", ("pen",)),
)
DEFAULT_ROLE = "lifestyle"


def classify_role(url: str) -> str:
    lowered = url.lower()
    for role, needles in ROLE_RULES:
        if any(needle in lowered for needle in needles):
            return role
    return DEFAULT_ROLE


def _srcset_urls(srcset: str) -> List[str]:
    urls = []
    for candidate in srcset.split(","):
        parts = candidate.strip().split()
        if parts:
            urls.append(parts[0])
    return urls


def _img_source(tag) -> Optional[str]:
    # Lazy-loaded images often carry a placeholder in src and the real asset in data-src.
    for attr in ("src", "data-src"):
        value = (tag.get(attr) or "").strip()
        if value and IMAGE_EXT_RE.search(value):
            return value
    return None


def _resolve(src: str, base_url: str) -> Optional[str]:
    absolute = urljoin(base_url, src)
    parsed = urlparse(absolute)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return None
    return absolute


def _host_allowed(url: str, allowed_hosts: Sequence[str]) -> bool:
    host = (urlparse(url).hostname or "").lower()
    return any(pattern.lower() in host for pattern in allowed_hosts)


def _raw_candidates(soup: BeautifulSoup) -> Iterable[Tuple[str, str]]:
    for img in soup.find_all("img"):
        src = _img_source(img)
        if src:
            yield src, (img.get("alt") or "").strip()
    for source in soup.select("picture source"):
        for src in _srcset_urls(source.get("srcset") or ""):
            if IMAGE_EXT_RE.search(src):
                yield src, ""


def dedupe_images(entries: Iterable[ImageEntry]) -> List[ImageEntry]:
    seen: set[str] = set()
    out: List[ImageEntry] = []
    for entry in entries:
        if entry.url in seen:
            continue
        seen.add(entry.url)
        out.append(entry)
    return out


def extract_images(
    html: str,
    base_url: str,
    *,
    allowed_hosts: Sequence[str] = DEFAULT_ALLOWED_HOSTS,
) -> List[ImageEntry]:
    """Return vendor-hosted images found in ``html``, in document order, without duplicates."""

    if not html:
        return []
    soup = BeautifulSoup(html, "lxml")
    entries: List[ImageEntry] = []
    for src, alt in _raw_candidates(soup):
        url = _resolve(src, base_url)
        if url is None or not _host_allowed(url, allowed_hosts):
            continue
        entries.append(ImageEntry(url=url, alt=alt, role=classify_role(url)))
    return dedupe_images(entries)


__all__ = [
    "DEFAULT_ALLOWED_HOSTS",
    "IMAGE_EXT_RE",
    "ROLE_RULES",
    "classify_role",
    "dedupe_images",
    "extract_images",
]
