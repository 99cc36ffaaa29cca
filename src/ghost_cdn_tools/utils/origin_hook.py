"""Origin response hook: purge Bunny's cache when Ghost asks for it."""
from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ConfigDict

from ghost_cdn_tools.models.purge_result import PurgeResult
from ghost_cdn_tools.models.settings import EnvSettings, load_settings
from ghost_cdn_tools.utils.bunny_cache import cache_purge
from ghost_cdn_tools.utils.patterns import parse_invalidation_pattern

log = logging.getLogger(__name__)

INVALIDATE_HEADER = "x-cache-invalidate"


class OriginContext(BaseModel):
    """What the edge hands to the hook for each origin response."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    request: httpx.Request | None = None
    response: httpx.Response


async def invalidate_from_headers(
    headers: httpx.Headers,
    settings: EnvSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[PurgeResult]:
    """Run the purge pass for a set of origin response headers."""
    header = headers.get(INVALIDATE_HEADER)
    if not header:
        return []

    log.info("Detected %s header: %s", INVALIDATE_HEADER, header)

    settings = settings or load_settings()
    if not settings.has_credentials:
        log.error("BUNNY_API_KEY is not set. Cannot trigger purge.")
        return []

    invalidation = parse_invalidation_pattern(header, settings.ghost_public_url)
    log.info("Parsed invalidation URLs: %s", list(invalidation.urls))

    return await cache_purge(
        invalidation.urls,
        settings.bunny_api_key,
        client=client,
        api_root=settings.bunny_api_root,
    )


async def on_origin_response(
    context: OriginContext,
    settings: EnvSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> httpx.Response:
    """Purge as requested by the origin, then hand back the untouched response."""
    try:
        await invalidate_from_headers(context.response.headers, settings, client)
    except Exception:
        log.exception("Error processing invalidation or calling purge API")

    return context.response


class OriginResponseHook:
    """
    httpx response event hook running the purge pass on every response.

    last_results holds the results of whichever response finished last; when
    one client handles responses concurrently they overwrite each other.

    Usage:
        hook = OriginResponseHook()
        httpx.AsyncClient(event_hooks={"response": [hook]})
    """

    def __init__(self, settings: EnvSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings
        self.client = client
        self.last_results: list[PurgeResult] = []

    async def __call__(self, response: httpx.Response) -> None:
        self.last_results = []
        try:
            self.last_results = await invalidate_from_headers(response.headers, self.settings, self.client)
        except Exception:
            log.exception("Error processing invalidation or calling purge API")


def origin_response_hook(
    settings: EnvSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> OriginResponseHook:
    return OriginResponseHook(settings, client)
