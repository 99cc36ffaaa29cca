"""Bunny.net cache purging."""
from __future__ import annotations

import logging
from collections.abc import Iterable

import httpx

from ghost_cdn_tools.models.purge_result import PurgeOutcome, PurgeResult
from ghost_cdn_tools.utils import uris

log = logging.getLogger(__name__)

DEFAULT_API_ROOT = "https://api.bunny.net"


def purge_api_url(target: str, api_root: str = DEFAULT_API_ROOT) -> str:
    """Purge endpoint for one target; async=false makes Bunny purge before replying."""
    return uris.with_query(uris.join(api_root, "purge"), {"url": target, "async": "false"})


async def purge_url(
    client: httpx.AsyncClient,
    target: str,
    api_key: str,
    api_root: str = DEFAULT_API_ROOT,
) -> PurgeResult:
    """Purge a single URL from Bunny's cache. Never raises for request or HTTP errors."""
    if not target:
        log.warning("Skipping empty purge target")
        return PurgeResult(url=target, outcome=PurgeOutcome.SKIPPED, error="empty target")
    if not uris.is_absolute(target):
        log.warning("Purge target %r is not an absolute URL, sending as-is", target)

    api_url = purge_api_url(target, api_root)
    log.info("Sending purge request for: %s", target)
    log.debug("API URL: %s", api_url)

    try:
        res = await client.post(api_url, headers={"AccessKey": api_key})
    except httpx.RequestError as e:
        log.error("Network error during purge request for %s: %s", target, e)
        return PurgeResult(url=target, outcome=PurgeOutcome.NETWORK_ERROR, error=str(e))

    if not res.is_success:
        log.error(
            "Purge API request failed for %s: %s %s - %s",
            target, res.status_code, res.reason_phrase, res.text,
        )
        return PurgeResult(
            url=target,
            outcome=PurgeOutcome.HTTP_ERROR,
            status_code=res.status_code,
            body=res.text,
            error=res.reason_phrase,
        )

    try:
        body = res.json()
    except ValueError:
        log.info("Purge API request successful for %s: %s (non-JSON response)", target, res.status_code)
        body = None
    else:
        log.info("Purge API request successful for %s: %s %s", target, res.status_code, body)

    return PurgeResult(url=target, outcome=PurgeOutcome.SUCCESS, status_code=res.status_code, body=body)


async def cache_purge(
    urls: Iterable[str],
    api_key: str,
    client: httpx.AsyncClient | None = None,
    api_root: str = DEFAULT_API_ROOT,
) -> list[PurgeResult]:
    """Purge URLs one after another. A failure for one URL does not stop the rest."""
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await cache_purge(urls, api_key, own_client, api_root)

    results = []
    for target in urls:
        results.append(await purge_url(client, target, api_key, api_root))
    return results
