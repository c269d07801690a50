"""Logging helpers for the delivery harness."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping, Optional, Union

DEFAULT_LOG_PATH = Path("logs/harness.log")
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(level: Union[int, str, None], default: int = logging.INFO) -> int:
    """Turn ``"debug"``/``"WARNING"``/``10`` into a numeric logging level."""

    if isinstance(level, int):
        return level
    if not level:
        return default
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else default


def logging_options(
    config: Mapping[str, Any], level_override: Optional[str] = None
) -> tuple[int, Optional[Path]]:
    """Read ``logging: {level, file}`` from a loaded config mapping."""

    section = config.get("logging")
    logging_cfg: Mapping[str, Any] = section if isinstance(section, Mapping) else {}
    level = resolve_level(level_override or logging_cfg.get("level"))
    file_value = logging_cfg.get("file")
    log_file = Path(file_value) if isinstance(file_value, (str, Path)) else None
    return level, log_file


def setup_logging(
    log_level: Union[int, str] = logging.INFO, log_file: Optional[Path] = None
) -> None:
    """Configure console and rotating file handlers on the root logger.

    Args:
        log_level: Numeric level or level name.
        log_file: Optional path to a log file. Defaults to ``logs/harness.log``.
    """

    logger = logging.getLogger()
    if logger.handlers:
        # Avoid adding duplicate handlers when called multiple times.
        return

    logger.setLevel(resolve_level(log_level))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_path = log_file or DEFAULT_LOG_PATH
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(file_path, maxBytes=2_000_000, backupCount=5)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger.debug("Logging configured", extra={"log_file": str(file_path)})


__all__ = ["logging_options", "resolve_level", "setup_logging"]
