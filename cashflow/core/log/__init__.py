"""Application-wide logging with rich console output and optional daily files."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from threading import RLock
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .context import ContextFilter, log_context
from .timing import timeit

__all__ = [
    "init_logging",
    "get_logger",
    "set_level",
    "shutdown_logging",
    "log_context",
    "timeit",
]


@dataclass
class LoggingConfig:
    """Runtime configuration for the logging subsystem."""

    app_name: str = "cashflow"
    level: str | int = "INFO"
    log_dir: Optional[Path] = None
    console: bool = True


_config_lock = RLock()
_config: LoggingConfig | None = None
_handlers: list[logging.Handler] = []
_context_filter = ContextFilter()


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


class DailyFileHandler(logging.FileHandler):
    """Write to ``<directory>/YYYY_MM_DD.log``, switching files at midnight."""

    def __init__(self, directory: Path, *, encoding: str = "utf-8") -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._current_date: date = datetime.now().date()
        super().__init__(self._path_for(self._current_date), mode="a", encoding=encoding)

    def _path_for(self, target: date) -> Path:
        return self.directory / f"{target.strftime('%Y_%m_%d')}.log"

    def emit(self, record: logging.LogRecord) -> None:
        record_date = datetime.fromtimestamp(record.created).date()
        if record_date != self._current_date:
            self._current_date = record_date
            if self.stream:
                self.stream.close()
            self.baseFilename = os.fspath(self._path_for(record_date))
            self.stream = self._open()
        super().emit(record)


def _build_handlers(cfg: LoggingConfig, level: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if cfg.console:
        rich_handler = RichHandler(
            console=Console(stderr=True),
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        rich_handler.setFormatter(logging.Formatter("%(context)s%(message)s"))
        handlers.append(rich_handler)

    if cfg.log_dir:
        file_handler = DailyFileHandler(Path(cfg.log_dir))
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(_context_filter)
    return handlers


def init_logging(**kwargs: object) -> None:
    """Initialise the shared logging configuration.

    Repeated calls with the same options are no-ops; different options
    replace the installed handlers.
    """

    with _config_lock:
        global _config

        cfg = LoggingConfig()
        for key, value in kwargs.items():
            if hasattr(cfg, key) and value is not None:
                setattr(cfg, key, value)

        if _config is not None:
            if _config == cfg:
                return
            _teardown_locked()

        root = logging.getLogger()
        root.setLevel(logging.NOTSET)
        for handler in _build_handlers(cfg, _parse_level(cfg.level)):
            root.addHandler(handler)
            _handlers.append(handler)
        _config = cfg


def _teardown_locked() -> None:
    global _config
    root = logging.getLogger()
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()
    _config = None


def shutdown_logging() -> None:
    """Remove installed handlers, intended for tests."""

    with _config_lock:
        _teardown_locked()


def get_logger(name: str | None = None) -> logging.Logger:
    with _config_lock:
        if _config is None:
            from cashflow.core.config import get_settings

            settings = get_settings().logging
            init_logging(level=settings.level, log_dir=settings.log_dir)
    cfg = _config or LoggingConfig()
    return logging.getLogger(name or cfg.app_name)


def set_level(level: str | int) -> None:
    new_level = _parse_level(level)
    for handler in _handlers:
        handler.setLevel(new_level)
