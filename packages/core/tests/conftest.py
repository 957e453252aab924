import pytest

_CONFIG_ENV_VARS = (
    "INCLUDE_PATTERNS",
    "IGNORE_PATTERNS",
    "LOG_LEVEL",
    "GITHUB_TOKEN",
    "OPENAI_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep the developer's or CI runner's environment out of config tests."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
