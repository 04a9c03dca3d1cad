"""Best-effort retrieval of vendor pages.

``fetch_html`` raises on any transport or HTTP failure. ``fetch_page`` and
``fetch_pages`` turn those failures into :class:`FetchResult` values so callers can
treat a missing page as absent data instead of an error.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

import httpx

from asus_model_api.config import FetchConfig, get_settings

logger = logging.getLogger("asus-model-api.fetch")


@dataclass(frozen=True)
class FetchResult:
    url: str
    html: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.html is not None


def _make_client(
    config: FetchConfig, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers=config.headers,
        timeout=httpx.Timeout(config.timeout_seconds),
        follow_redirects=True,
        transport=transport,
    )


async def fetch_html(url: str, client: httpx.AsyncClient) -> str:
    response = await client.get(url)
    response.raise_for_status()
    return response.text


async def fetch_page(
    url: str, client: httpx.AsyncClient, *, timeout: float | None = None
) -> FetchResult:
    """Fetch ``url``; failures become a failed :class:`FetchResult`.

    ``timeout`` bounds the whole request including a slowly streamed body. The client
    timeout only bounds each individual connect, read or write.
    """

    start = time.monotonic()
    try:
        if timeout is None:
            html = await fetch_html(url, client)
        else:
            html = await asyncio.wait_for(fetch_html(url, client), timeout)
    except httpx.HTTPStatusError as exc:
        error = f"HTTP {exc.response.status_code}"
    except httpx.HTTPError as exc:
        error = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
    except asyncio.TimeoutError:
        error = f"Timeout: no complete response within {timeout}s"
    else:
        logger.debug(
            "[fetch] url=%s bytes=%s dur_ms=%s",
            url,
            len(html),
            int((time.monotonic() - start) * 1000),
        )
        return FetchResult(url=url, html=html)

    logger.warning(
        "[fetch] url=%s failed error=%s dur_ms=%s",
        url,
        error,
        int((time.monotonic() - start) * 1000),
    )
    return FetchResult(url=url, error=error)


async def fetch_pages(
    urls: Sequence[str],
    *,
    config: FetchConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> List[FetchResult]:
    """Fetch every URL concurrently on one client; results keep the input order."""

    config = config or get_settings().fetch
    async with _make_client(config, transport) as client:
        results = await asyncio.gather(
            *(fetch_page(url, client, timeout=config.timeout_seconds) for url in urls)
        )
    return list(results)


__all__ = ["FetchResult", "fetch_html", "fetch_page", "fetch_pages"]
