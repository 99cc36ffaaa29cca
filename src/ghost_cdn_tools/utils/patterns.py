"""Ghost x-cache-invalidate pattern parsing."""
from __future__ import annotations

from ghost_cdn_tools.models.invalidation import ResolvedInvalidation
from ghost_cdn_tools.utils import uris

__all__ = ["PURGE_ALL_PATTERNS", "is_purge_all", "resolve_target", "parse_invalidation_pattern"]

# Ghost sends "/$/" when the whole site changed
PURGE_ALL_PATTERNS = ("/$/", "/*")
WILDCARD = "/*"


def is_purge_all(pattern: str) -> bool:
    return pattern in PURGE_ALL_PATTERNS


def resolve_target(fragment: str, public_url: str | None = None) -> str:
    """Resolve one pattern fragment against the public url."""
    if fragment == WILDCARD:
        return f"{public_url}{WILDCARD}" if public_url else WILDCARD
    if uris.is_absolute(fragment):
        return fragment
    return f"{public_url}{fragment}" if public_url else fragment


def parse_invalidation_pattern(pattern: str, public_url: str | None = None) -> ResolvedInvalidation:
    """
    Parse a x-cache-invalidate header value into purge targets.

    A full purge yields a single wildcard target. Anything else is split on
    commas; fragments are stripped but empty ones are kept, so the number of
    urls always equals the number of fragments.
    """
    purge_all = is_purge_all(pattern)
    fragments = [WILDCARD] if purge_all else [part.strip() for part in pattern.split(",")]

    return ResolvedInvalidation(
        urls=tuple(resolve_target(fragment, public_url) for fragment in fragments),
        purge_all=purge_all,
        pattern=pattern,
    )
