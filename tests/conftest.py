import pytest

from cmdspaces.config import CONFIG_ENV_VAR, Config


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Every test starts from the built-in defaults, whatever the environment says."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    Config.reset()
    yield Config.instance()
    Config.reset()
