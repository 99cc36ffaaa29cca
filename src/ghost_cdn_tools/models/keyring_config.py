from __future__ import annotations

import enum
import json
from typing import Any

import keyring
from pydantic import AnyHttpUrl, TypeAdapter

from ghost_cdn_tools.models.settings import EnvSettings

_http_url = TypeAdapter(AnyHttpUrl)


class ConfigKey(enum.StrEnum):
    BUNNY_API_KEY = "BUNNY_API_KEY"
    GHOST_PUBLIC_URL = "GHOST_PUBLIC_URL"

    @property
    def secret(self) -> bool:
        return self is ConfigKey.BUNNY_API_KEY

    @property
    def settings_field(self) -> str:
        """Matching EnvSettings attribute, which takes precedence over the keyring."""
        return self.value.lower()

    def validate_value(self, value: str) -> str:
        """Raise ValueError if value can't be used for this key. Returns it unchanged."""
        if not value:
            raise ValueError(f"{self.value} can't be empty")
        if self is ConfigKey.GHOST_PUBLIC_URL:
            # Validated only; pydantic's normalized form would add a trailing slash
            _http_url.validate_python(value)
        return value

    def display(self, value: str | None) -> str:
        if value is None:
            return "(not set)"
        if self.secret and value:
            return "********"
        return value


class KeyringConfig(dict[ConfigKey, str]):
    KR_SERVICE_NAME: str = "ghost-cdn-tools"
    KR_USERNAME: str = "config"

    def __enter__(self) -> KeyringConfig:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.save()

    @classmethod
    def load_from_keyring(cls) -> KeyringConfig:
        """Load the configuration from the keyring, ignoring keys this version doesn't know."""
        json_str = keyring.get_password(cls.KR_SERVICE_NAME, cls.KR_USERNAME)
        if json_str is None:
            return cls()
        known = {key.value for key in ConfigKey}
        return cls({ConfigKey(k): v for k, v in json.loads(json_str).items() if k in known})

    def get_with_prompt(self, key: ConfigKey, fallback: str | None = None) -> str:
        """Return fallback if set, else the stored key, else exit with a hint."""
        if fallback:
            return fallback
        if self.get(key):
            return self[key]

        import rich
        import typer

        rich.print(f"[red]Error:[/red] Required config key '{key.value}' not set. "
                   f"Set the {key.value} environment variable or run "
                   f"'ghost-cdn config set {key.value} {{value}}'.")

        raise typer.Exit(1)

    def save(self):
        """Save the configuration to the keyring."""
        json_str = json.dumps(self)
        keyring.set_password(self.KR_SERVICE_NAME, self.KR_USERNAME, json_str)

    def describe(self, settings: EnvSettings) -> dict[str, dict[str, Any]]:
        """Per key: keyring value, environment value and which one is in effect."""
        result = {}
        for key in ConfigKey:
            env_value = getattr(settings, key.settings_field)
            kr_value = self.get(key)
            if env_value:
                source = "env"
            elif kr_value:
                source = "keyring"
            else:
                source = None
            result[key.value] = {
                "keyring": key.display(kr_value),
                "env": key.display(env_value),
                "source": source,
            }
        return result
