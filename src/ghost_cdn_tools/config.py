"""Stored credentials for the CLI. Environment variables take precedence."""
from __future__ import annotations

from typing import Optional

import pyperclip
import rich
import typer
from pydantic import ValidationError
from rich.markup import escape
from typing_extensions import Annotated

from ghost_cdn_tools.models.keyring_config import ConfigKey, KeyringConfig
from ghost_cdn_tools.models.settings import load_settings

app = typer.Typer(no_args_is_help=True)
cp = rich.print


def store(key: ConfigKey, value: str) -> None:
    """Validate and save a value, warning about anything that changes its effect."""
    try:
        key.validate_value(value)
    except (ValueError, ValidationError) as e:
        cp(f"❌  Invalid value for {key.value}: {escape(str(e))}")
        raise typer.Exit(1)

    if key is ConfigKey.GHOST_PUBLIC_URL and value.endswith("/"):
        cp("[yellow]Warning:[/yellow] paths are appended verbatim, "
           f"so '/post' becomes {value + '/post'!r}. Drop the trailing slash?")

    with KeyringConfig.load_from_keyring() as config:
        config[key] = value

    if getattr(load_settings(), key.settings_field):
        cp(f"[yellow]Warning:[/yellow] {key.value} is set in the environment, "
           "which overrides the keyring.")


@app.command(name="set")
def set_config(
        key: ConfigKey,
        value: Annotated[Optional[str], typer.Argument()] = None
):
    """Set a configuration value. Omit the value to clear it."""
    if value is None:
        with KeyringConfig.load_from_keyring() as config:
            config.pop(key, None)
        cp(f"Cleared key {key.value!r}")
        return

    store(key, value)
    cp(f"Saved key {key.value!r}")


@app.command(name="set-cp")
def set_cp_config(key: ConfigKey):
    """Set a configuration value from clipboard."""
    value = pyperclip.paste().strip()
    store(key, value)
    cp(f"Saved key {key.value!r} from clipboard ({len(value)} chars)")


@app.command()
def show():
    """Show stored and environment values, and which one is used."""
    config = KeyringConfig.load_from_keyring()
    rich.print_json(data=config.describe(load_settings()))
