import pytest

from reseller_sdk.config import DEFAULT_BASE_URL, ClientSettings
from reseller_sdk.engine.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BASE_URL", "TIMEOUT", "BEARER_TOKEN", "USER_SECRET"):
        monkeypatch.delenv(f"RESELLER_{name}", raising=False)


def test_defaults():
    settings = ClientSettings.from_env()
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout == 60.0
    assert settings.bearer_token == ""


def test_env_variables(monkeypatch):
    monkeypatch.setenv("RESELLER_BASE_URL", "https://sandbox.test/api")
    monkeypatch.setenv("RESELLER_TIMEOUT", "15")
    monkeypatch.setenv("RESELLER_BEARER_TOKEN", "tok")
    settings = ClientSettings.from_env()
    assert settings.base_url == "https://sandbox.test/api/"
    assert settings.timeout == 15.0
    assert settings.bearer_token == "tok"


def test_env_file(tmp_path):
    env_file = tmp_path / ".env.reseller"
    env_file.write_text("RESELLER_USER_SECRET=from-file\n", encoding="utf-8")
    assert ClientSettings.from_env(env_file).user_secret == "from-file"


def test_missing_env_file(tmp_path):
    with pytest.raises(ConfigurationError):
        ClientSettings.from_env(tmp_path / "nope.env")


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("RESELLER_TIMEOUT", "0")
    with pytest.raises(ConfigurationError):
        ClientSettings.from_env()
