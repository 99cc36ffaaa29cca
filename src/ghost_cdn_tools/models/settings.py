import dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=dotenv.find_dotenv(usecwd=True) or None,
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ghost
    ghost_public_url: str | None = None

    # bunny
    bunny_api_key: str | None = None
    bunny_api_root: str = "https://api.bunny.net"

    # debug
    verbose: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.bunny_api_key)


def load_settings(**overrides) -> EnvSettings:
    """Read settings from the environment (and .env) at call time."""
    return EnvSettings(**overrides)
