"""Application configuration primitives."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _load_env(dotenv_path: Optional[Path] = None) -> None:
    """Load the .env file once for the process."""

    if getattr(_load_env, "_loaded", False):  # type: ignore[attr-defined]
        return

    load_dotenv(dotenv_path)
    setattr(_load_env, "_loaded", True)  # type: ignore[attr-defined]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection details for the transaction store."""

    driver: str = "mysql+pymysql"
    user: str = "cashflow"
    password: str = "cashflow"
    host: str = "127.0.0.1"
    port: int = 3306
    name: str = "cashflow"
    url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Instantiate settings using environment overrides when present."""

        defaults = cls()
        return cls(
            driver=os.getenv("DB_DRIVER", defaults.driver),
            user=os.getenv("DB_USER", defaults.user),
            password=os.getenv("DB_PASSWORD", defaults.password),
            host=os.getenv("DB_HOST", defaults.host),
            port=_env_int("DB_PORT", defaults.port),
            name=os.getenv("DB_NAME", defaults.name),
            url=os.getenv("DATABASE_URL") or None,
        )

    @property
    def sqlalchemy_url(self) -> str:
        """Return a SQLAlchemy compatible URL."""

        if self.url:
            return self.url
        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"

    @property
    def masked_url(self) -> str:
        """URL safe for log output."""

        if self.url:
            scheme, _, rest = self.url.partition("://")
            host_part = rest.rpartition("@")[2]
            return f"{scheme}://{host_part}" if rest else self.url
        pwd = "***" if self.password else ""
        return f"{self.driver}://{self.user}:{pwd}@{self.host}:{self.port}/{self.name}"


@dataclass(frozen=True)
class LoggingSettings:
    """Log level and optional directory for daily log files."""

    level: str = "INFO"
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        log_dir = os.getenv("LOG_DIR")
        return cls(
            level=os.getenv("LOG_LEVEL", cls.level).upper(),
            log_dir=Path(log_dir) if log_dir else None,
        )


@dataclass(frozen=True)
class AnalyticsSettings:
    """Defaults applied when a caller omits the period of a request."""

    default_period: str = "last_90_days"
    trend_period: str = "last_6_months"
    dashboard_period: str = "last_90_days"
    recent_transactions_limit: int = 50

    @classmethod
    def from_env(cls) -> "AnalyticsSettings":
        defaults = cls()
        limit = _env_int("RECENT_TRANSACTIONS_LIMIT", defaults.recent_transactions_limit)
        if limit < 1:
            raise ValueError("RECENT_TRANSACTIONS_LIMIT must be positive")
        return cls(
            default_period=os.getenv("DEFAULT_PERIOD", defaults.default_period),
            trend_period=os.getenv("TREND_PERIOD", defaults.trend_period),
            dashboard_period=os.getenv("DASHBOARD_PERIOD", defaults.dashboard_period),
            recent_transactions_limit=limit,
        )


@dataclass(frozen=True)
class Settings:
    """Container for application configuration."""

    database: DatabaseSettings
    logging: LoggingSettings
    analytics: AnalyticsSettings
    sqlalchemy_echo: bool = False

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "Settings":
        """Build ``Settings`` using environment variables (optionally from ``.env``)."""

        _load_env(dotenv_path)

        return cls(
            database=DatabaseSettings.from_env(),
            logging=LoggingSettings.from_env(),
            analytics=AnalyticsSettings.from_env(),
            sqlalchemy_echo=_env_flag("SQLALCHEMY_ECHO"),
        )


@lru_cache()
def get_settings(dotenv_path: Optional[Path] = None) -> Settings:
    """Return a cached settings instance."""

    return Settings.from_env(dotenv_path=dotenv_path)
