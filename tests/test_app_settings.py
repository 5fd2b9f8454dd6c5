import logging
import os

from core.settings import BASE_DIR, AppSettings, configure_logging, load_settings


def test_defaults(monkeypatch, tmp_path):
    for var in ("DATABASE_URL", "STATUS_TIMEZONE", "LOG_LEVEL", "PAGE_TITLE"):
        monkeypatch.delenv(var, raising=False)
    settings = load_settings(tmp_path / "missing.env")
    assert isinstance(settings, AppSettings)
    assert settings.db.url.startswith("sqlite:///")
    assert settings.db.url.endswith("students.db")
    assert settings.status_timezone == "local"
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///elsewhere.db")
    monkeypatch.setenv("STATUS_TIMEZONE", "UTC")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings(tmp_path / "missing.env")
    assert settings.db.url == "sqlite:///elsewhere.db"
    assert settings.status_timezone == "UTC"
    assert settings.log_level == "DEBUG"


def test_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.delenv("STATUS_TIMEZONE", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("STATUS_TIMEZONE=Asia/Kolkata\n")
    settings = load_settings(env_file)
    assert settings.status_timezone == "Asia/Kolkata"
    os.environ.pop("STATUS_TIMEZONE", None)


def test_configure_logging_sets_root_level():
    configure_logging("WARNING")
    assert logging.getLogger().level == logging.WARNING
    configure_logging("INFO")


def test_default_database_sits_next_to_app(monkeypatch, tmp_path):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.chdir(tmp_path)
    settings = load_settings(tmp_path / "missing.env")
    assert settings.db.url == f"sqlite:///{BASE_DIR / 'students.db'}"
    assert (BASE_DIR / "app.py").exists()
