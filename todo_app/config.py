from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from todo_app.config_utils import env_choice, env_int, env_optional_str, env_str

THEMES = ("system", "light", "dark")
CELEBRATIONS = ("balloons", "snow")


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


@dataclass(frozen=True)
class TodoAppConfig:
    """Runtime configuration for the Streamlit client.

    Environment variables:
    - TODO_API_URL: base URL of the task service (default: http://127.0.0.1:8000)
    - TODO_API_TIMEOUT_SECONDS: per-request timeout (default: 10)
    - TODO_CELEBRATION: balloons|snow (default: balloons)
    - TODO_DEFAULT_THEME: system|light|dark (default: system)
    - TODO_LOG_LEVEL: root log level for the console (default: INFO)
    - TODO_LOG_DIR: if set, also write todo.log there
    - TODO_COLLATION_LOCALE: locale used to sort titles (default: the environment's)
    """

    api_url: str
    api_timeout_seconds: int
    celebration: str
    default_theme: str
    log_level: str
    log_dir: Optional[str]
    collation_locale: str

    @classmethod
    def from_env(cls) -> "TodoAppConfig":
        return cls(
            api_url=env_str("TODO_API_URL", "http://127.0.0.1:8000").rstrip("/"),
            api_timeout_seconds=env_int("TODO_API_TIMEOUT_SECONDS", 10, minimum=1),
            celebration=env_choice("TODO_CELEBRATION", "balloons", CELEBRATIONS),
            default_theme=env_choice("TODO_DEFAULT_THEME", "system", THEMES),
            log_level=env_str("TODO_LOG_LEVEL", "INFO").upper(),
            log_dir=env_optional_str("TODO_LOG_DIR"),
            collation_locale=env_str("TODO_COLLATION_LOCALE", ""),
        )


@dataclass(frozen=True)
class TodoServerConfig:
    """Runtime configuration for the task service.

    DB selection, first match wins:
    - TODO_DATABASE_URL
    - DATABASE_URL
    - local SQLite at data/todo.db
    """

    database_url: str
    host: str
    port: int
    log_level: str

    @classmethod
    def from_env(cls) -> "TodoServerConfig":
        db_url = env_optional_str("TODO_DATABASE_URL") or env_optional_str("DATABASE_URL")
        if not db_url:
            data_dir = _repo_root() / "data"
            data_dir.mkdir(parents=True, exist_ok=True)
            db_url = f"sqlite:///{(data_dir / 'todo.db').as_posix()}"

        return cls(
            database_url=db_url,
            host=env_str("TODO_SERVER_HOST", "127.0.0.1"),
            port=env_int("TODO_SERVER_PORT", 8000, minimum=1),
            log_level=env_str("TODO_LOG_LEVEL", "INFO").upper(),
        )
