from __future__ import annotations

from todo_app.config import TodoAppConfig, TodoServerConfig


def test_app_config_defaults(monkeypatch):
    for name in (
        "TODO_API_URL",
        "TODO_API_TIMEOUT_SECONDS",
        "TODO_CELEBRATION",
        "TODO_DEFAULT_THEME",
        "TODO_LOG_LEVEL",
        "TODO_LOG_DIR",
        "TODO_COLLATION_LOCALE",
    ):
        monkeypatch.delenv(name, raising=False)
    cfg = TodoAppConfig.from_env()
    assert cfg.api_url == "http://127.0.0.1:8000"
    assert cfg.api_timeout_seconds == 10
    assert cfg.celebration == "balloons"
    assert cfg.default_theme == "system"
    assert cfg.log_level == "INFO"
    assert cfg.log_dir is None
    assert cfg.collation_locale == ""


def test_app_config_from_env(monkeypatch):
    monkeypatch.setenv("TODO_API_URL", "http://tasks:9000/")
    monkeypatch.setenv("TODO_API_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("TODO_CELEBRATION", "SNOW")
    monkeypatch.setenv("TODO_DEFAULT_THEME", "neon")
    monkeypatch.setenv("TODO_LOG_LEVEL", "debug")
    monkeypatch.setenv("TODO_COLLATION_LOCALE", "de_DE.UTF-8")
    cfg = TodoAppConfig.from_env()
    assert cfg.api_url == "http://tasks:9000"
    assert cfg.api_timeout_seconds == 1
    assert cfg.celebration == "snow"
    assert cfg.default_theme == "system"
    assert cfg.log_level == "DEBUG"
    assert cfg.collation_locale == "de_DE.UTF-8"


def test_server_config_prefers_specific_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///generic.db")
    monkeypatch.setenv("TODO_DATABASE_URL", "sqlite:///todo-only.db")
    monkeypatch.setenv("TODO_SERVER_PORT", "not-a-port")
    cfg = TodoServerConfig.from_env()
    assert cfg.database_url == "sqlite:///todo-only.db"
    assert cfg.port == 8000


def test_server_config_falls_back_to_database_url(monkeypatch):
    monkeypatch.delenv("TODO_DATABASE_URL", raising=False)
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg2://u:p@db/todo")
    assert TodoServerConfig.from_env().database_url == "postgresql+psycopg2://u:p@db/todo"
