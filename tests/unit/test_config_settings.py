import pytest

from odoo_await.config import settings
from odoo_await.config.settings import OdooConfig, load_settings

ODOO_VARS = [
    "ODOO_BASE_URL",
    "ODOO_PORT",
    "ODOO_DB",
    "ODOO_USER",
    "ODOO_PW",
    "ODOO_BASIC_AUTH_USER",
    "ODOO_BASIC_AUTH_PASSWORD",
    "ODOO_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Start from an empty environment and an empty /run/secrets."""
    for var in ODOO_VARS:
        monkeypatch.delenv(var, raising=False)

    real_path = settings.Path

    def fake_path(target):
        if str(target) == "/run/secrets":
            return tmp_path
        return real_path(target)

    monkeypatch.setattr(settings, "Path", fake_path)
    return tmp_path


def test_defaults():
    cfg = load_settings()
    assert cfg == OdooConfig()
    assert cfg.base_url == "http://localhost"
    assert cfg.port is None
    assert cfg.db == "odoo_db"
    assert cfg.username == "admin"
    assert cfg.password == "admin"
    assert cfg.basic_auth is None
    assert cfg.timeout == 30


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("ODOO_BASE_URL", "https://erp.example.com")
    monkeypatch.setenv("ODOO_PORT", "8443")
    monkeypatch.setenv("ODOO_DB", "prod")
    monkeypatch.setenv("ODOO_USER", "bot")
    monkeypatch.setenv("ODOO_PW", "env-secret")
    monkeypatch.setenv("ODOO_TIMEOUT", "2.5")

    cfg = load_settings()

    assert cfg.base_url == "https://erp.example.com"
    assert cfg.port == 8443
    assert cfg.db == "prod"
    assert cfg.username == "bot"
    assert cfg.password == "env-secret"
    assert cfg.timeout == 2.5


def test_password_prefers_run_secrets(monkeypatch, clean_env):
    (clean_env / "odoo_password").write_text("file-secret\n")
    monkeypatch.setenv("ODOO_PW", "env-secret")

    assert load_settings().password == "file-secret"


def test_empty_secret_file_falls_back_to_env(monkeypatch, clean_env):
    (clean_env / "odoo_password").write_text("   ")
    monkeypatch.setenv("ODOO_PW", "env-secret")

    assert load_settings().password == "env-secret"


def test_basic_auth(monkeypatch, clean_env):
    monkeypatch.setenv("ODOO_BASIC_AUTH_USER", "proxy")
    (clean_env / "odoo_basic_auth_password").write_text("proxy-pw")

    assert load_settings().basic_auth == ("proxy", "proxy-pw")


@pytest.mark.parametrize("var, value", [("ODOO_PORT", "eighty"), ("ODOO_TIMEOUT", "soon")])
def test_invalid_numbers_raise(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(RuntimeError, match=var):
        load_settings()


def test_warns_on_default_password(caplog):
    with caplog.at_level("WARNING", logger="odoo_await.config.settings"):
        load_settings()
    assert "Default Odoo password" in caplog.text
