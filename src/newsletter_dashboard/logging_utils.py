"""Logging setup for the dashboard pipeline and CLI.

Emits system-readable records to the console and to ``<logs_dir>/system.log``.
If the file handler cannot be attached, logging continues on the console.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .common.config_validator import DashboardConfig

SYSTEM_FMT = "[%(asctime)s] [%(levelname)s] %(message)s"
ROOT_LOGGER = "newsletter_dashboard"


def _ensure_logs_dir(config: DashboardConfig) -> Path:
    logs_dir = Path(config.paths.logs_dir).expanduser().resolve()
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def _safe_add_file_handler(logger: logging.Logger, path: Path, fmt: str, level: int) -> None:
    try:
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(fmt))
        logger.addHandler(fh)
    except OSError as exc:  # pragma: no cover - depends on filesystem permissions
        logger.warning("[WARNING] Failed to attach file handler %s (%s)", str(path), exc)


def get_logger(name: str = ROOT_LOGGER, config: Optional[DashboardConfig] = None) -> logging.Logger:
    """Return a logger with console + file handlers at the configured level.

    Handlers are reset on every call so repeated CLI runs in one process do
    not duplicate output. Core modules log under ``newsletter_dashboard.core``
    and propagate here.
    """
    config = config or DashboardConfig()
    level = getattr(logging, config.logging.level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = []

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(SYSTEM_FMT))
    logger.addHandler(sh)

    try:
        logs_dir = _ensure_logs_dir(config)
    except OSError as exc:  # pragma: no cover - depends on filesystem permissions
        logger.warning("[WARNING] Cannot create logs directory %s (%s)", config.paths.logs_dir, exc)
        return logger
    _safe_add_file_handler(logger, logs_dir / "system.log", SYSTEM_FMT, level)
    return logger


def log_system_event(logger: logging.Logger, message: str):
    logger.info("[SYSTEM] %s", message)


def log_warning(logger: logging.Logger, message: str):
    logger.warning("[WARNING] %s", message)


def log_error(logger: logging.Logger, message: str):
    logger.error("[ERROR] %s", message)
