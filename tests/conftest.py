import logging

import httpx
import keyring
import pytest

from ghost_cdn_tools.models.keyring_config import KeyringConfig


class PurgeApi:
    """Records purge calls and answers per target url."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        target = request.url.params["url"]
        answer = self.responses.get(target, httpx.Response(200, json={"ok": True}))
        if isinstance(answer, Exception):
            raise answer
        return answer

    @property
    def targets(self) -> list[str]:
        return [r.url.params["url"] for r in self.requests]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ("GHOST_PUBLIC_URL", "BUNNY_API_KEY", "BUNNY_API_ROOT", "VERBOSE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def memory_keyring(monkeypatch: pytest.MonkeyPatch) -> dict:
    store = {}

    def get_password(service, username):
        return store.get((service, username))

    def set_password(service, username, password):
        store[(service, username)] = password

    monkeypatch.setattr(keyring, "get_password", get_password)
    monkeypatch.setattr(keyring, "set_password", set_password)
    return store


@pytest.fixture
def keyring_config(memory_keyring) -> KeyringConfig:
    return KeyringConfig.load_from_keyring()


@pytest.fixture
def purge_api():
    """Factory for a fake Bunny purge API."""
    return PurgeApi


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """CLI commands attach a rich handler and stop propagation; undo that."""
    logger = logging.getLogger("ghost_cdn_tools")
    yield
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
