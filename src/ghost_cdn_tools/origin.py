"""Origin server tools."""
import asyncio

import httpx
import typer
from rich import print as cp

from ghost_cdn_tools.bunny import VerboseType, results_table
from ghost_cdn_tools.models.settings import load_settings
from ghost_cdn_tools.utils.logs import setup_logging
from ghost_cdn_tools.utils.origin_hook import INVALIDATE_HEADER, OriginResponseHook

app = typer.Typer(no_args_is_help=True)


async def fetch_with_hook(
    url: str, hook: OriginResponseHook, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.Response:
    async with httpx.AsyncClient(transport=transport, event_hooks={"response": [hook]}) as client:
        return await client.get(url)


@app.command()
def fetch(url: str, verbose: VerboseType = False):
    """Fetch a URL from the origin, purging whatever its response asks for."""
    settings = load_settings()
    setup_logging(verbose or settings.verbose)

    hook = OriginResponseHook(settings)
    res = asyncio.run(fetch_with_hook(url, hook))

    cp(f"Origin responded {res.status_code} {res.reason_phrase}")
    header = res.headers.get(INVALIDATE_HEADER)
    if header is None:
        cp(f"No {INVALIDATE_HEADER} header, nothing to purge.")
        return

    cp(f"{INVALIDATE_HEADER}: {header!r}")
    if hook.last_results:
        cp(results_table(hook.last_results))
