import pytest

from metlink_cot.data.config import get_metlink_config

_CONFIG_ENV_VARS = (
    "METLINK_API_KEY",
    "DEBUG",
    "SHOW_BUSES",
    "SHOW_TRAINS",
    "SHOW_SHIPS",
    "METLINK_CLASSIFICATION_POLICY",
    "METLINK_NETWORK",
)


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep the host environment from leaking into MetlinkConfig."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_metlink_config.cache_clear()
    yield
    get_metlink_config.cache_clear()
