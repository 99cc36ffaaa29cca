"""Bunny.net cache tools."""
import asyncio
from typing import Optional

from typing_extensions import Annotated

from ghost_cdn_tools.models.keyring_config import ConfigKey, KeyringConfig
from ghost_cdn_tools.models.purge_result import PurgeResult
from ghost_cdn_tools.models.settings import load_settings
from ghost_cdn_tools.utils.bunny_cache import cache_purge
from ghost_cdn_tools.utils.logs import setup_logging
from ghost_cdn_tools.utils.patterns import parse_invalidation_pattern

import typer
from rich import print as cp, print_json
from rich.table import Table

app = typer.Typer(no_args_is_help=True)

PublicUrlType = Annotated[
    Optional[str], typer.Option("--public-url", help="Base URL for relative paths")
]
VerboseType = Annotated[bool, typer.Option("--verbose", help="Log debug output")]


def resolve_public_url(public_url: str | None) -> str | None:
    """Option, then environment, then keyring."""
    return (
        public_url
        or load_settings().ghost_public_url
        or KeyringConfig.load_from_keyring().get(ConfigKey.GHOST_PUBLIC_URL)
    )


def results_table(results: list[PurgeResult]) -> Table:
    table = Table("URL", "Outcome", "Status", "Detail")
    for result in results:
        color = "green" if result.ok else "red"
        detail = result.error or ("" if result.body is None else str(result.body))
        table.add_row(
            result.url,
            f"[{color}]{result.outcome.value}[/{color}]",
            "" if result.status_code is None else str(result.status_code),
            detail,
        )
    return table


@app.command()
def resolve(pattern: str, public_url: PublicUrlType = None):
    """Show the purge targets for a x-cache-invalidate value."""
    invalidation = parse_invalidation_pattern(pattern, resolve_public_url(public_url))
    print_json(invalidation.model_dump_json(by_alias=True))


@app.command()
def purge(
    pattern: str,
    public_url: PublicUrlType = None,
    confirm: Annotated[bool, typer.Option("--yes", "-y")] = False,
    verbose: VerboseType = False,
):
    """Purge a x-cache-invalidate pattern from Bunny's cache."""
    settings = load_settings()
    setup_logging(verbose or settings.verbose)

    api_key = settings.bunny_api_key or KeyringConfig.load_from_keyring().get_with_prompt(
        ConfigKey.BUNNY_API_KEY
    )
    invalidation = parse_invalidation_pattern(pattern, resolve_public_url(public_url))

    cp(f"Purging {len(invalidation.urls)} URL(s) from Bunny's cache:")
    for url in invalidation.urls:
        cp(f"  {url!r}")

    if not confirm and not typer.confirm("Purge?"):
        raise typer.Abort()

    results = asyncio.run(
        cache_purge(invalidation.urls, api_key, api_root=settings.bunny_api_root)
    )
    cp(results_table(results))

    if not all(result.ok for result in results):
        cp("❌  Some purges failed.")
        raise typer.Exit(1)
    cp("✅  Purged.")
