"""Configuração do pytest para o gateway DealMaker."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.bootstrap.dependencies import get_token_provider  # noqa: E402
from config.settings import get_base_settings, get_dealmaker_settings  # noqa: E402

DEALMAKER_ENV = {
    "DEALMAKER_TOKEN_URL": "https://auth.example.test/oauth/token",
    "DEALMAKER_CLIENT_ID": "client-id",
    "DEALMAKER_CLIENT_SECRET": "client-secret",
    "DEALMAKER_SCOPE": "deals.investors.write",
    "DEALMAKER_BASE_URL": "https://api.example.test",
    "DEALMAKER_DEAL_ID": "4127",
    "DEALMAKER_WEBHOOK_SECRET": "whsec",
}


@pytest.fixture(autouse=True)
def _clear_cached_singletons():
    """Settings e TokenProvider são cacheados por processo; isola cada teste."""
    get_base_settings.cache_clear()
    get_dealmaker_settings.cache_clear()
    get_token_provider.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_dealmaker_settings.cache_clear()
    get_token_provider.cache_clear()


@pytest.fixture
def dealmaker_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Ambiente completo da integração DealMaker."""
    for name, value in DEALMAKER_ENV.items():
        monkeypatch.setenv(name, value)
    return dict(DEALMAKER_ENV)
