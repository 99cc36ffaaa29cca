"""Uri helpers"""
from urllib import parse

__all__ = ["join", "is_absolute", "with_query"]


def join(*parts: str) -> str:
    """Join uri parts with single slashes."""
    if not parts:
        return ""

    base = parts[0] if parts[0].endswith("/") else parts[0] + "/"
    return parse.urljoin(base, "/".join(part.strip("/") for part in parts[1:]))


def is_absolute(url: str) -> bool:
    """Whether a purge target already carries a scheme."""
    return url.startswith("http")


def with_query(url: str, params: dict[str, str]) -> str:
    """Append url-encoded query parameters, keeping their order."""
    query = parse.urlencode(params, quote_via=parse.quote, safe="!*'()")
    return f"{url}?{query}"
