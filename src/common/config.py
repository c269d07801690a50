"""Configuration helpers for loading YAML files with environment expansion."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


def load_config(path: str | os.PathLike[str] | None) -> dict[str, Any]:
    """Load the harness YAML configuration, expanding ``${VAR}`` references.

    Recognised top-level keys, all optional:

    * ``logging``: ``level`` and ``file`` for ``setup_logging``.
    * ``wait``: ``interval_ms`` and ``max_iterations`` for the poll loop.
    * ``bus``: ``max_subscriptions`` across all channels.
    * ``loopback``: ``enabled`` and ``period_ms`` for the in-process publisher.
    * ``scenarios``: list of ``{channel, schema, expected, wait}`` rows that
      replace the built-in channel table.

    Args:
        path: Path to the YAML configuration file, or ``None`` to run with the
            built-in defaults.

    Returns:
        Parsed configuration dictionary. Returns an empty dict if the file is
        empty or no path was given.
    """

    if path is None:
        return {}

    config_path = Path(path)
    raw_text = config_path.read_text()
    expanded = os.path.expandvars(raw_text)
    data = yaml.safe_load(expanded) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"Config root must be a mapping, got {type(data)!r}")
    return dict(data)


def as_mapping(value: object) -> MutableMapping[str, Any]:
    if isinstance(value, MutableMapping):
        return value
    return {}


def as_list(value: object) -> list[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping)):
        return list(value)
    if value is None:
        return []
    return [value]


def as_float(value: object, default: float) -> float:
    try:
        if value is None:
            return default
        return float(value)
    except (TypeError, ValueError):
        return default


def as_int(value: object, default: int) -> int:
    try:
        if value is None or isinstance(value, bool):
            return default
        return int(value)
    except (TypeError, ValueError):
        return default


__all__ = ["as_float", "as_int", "as_list", "as_mapping", "load_config"]
