"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_ENDPOINT = "https://fakestoreapi.com/products"


@dataclass(frozen=True, slots=True)
class Settings:
    endpoint: str = DEFAULT_ENDPOINT
    method: str = "GET"
    timeout_s: float = 30.0
    highlight_theme: str = "monokai"
    highlight_cache_size: int = 32


def _env_float(env: Mapping[str, str], key: str, fallback: float) -> float:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_method(env: Mapping[str, str], fallback: str) -> str:
    # state imports this module, so the enum is looked up on use.
    from reqtui.state.navigation import RequestMethod

    value = env.get(f"{ENV_PREFIX}METHOD", fallback).strip().upper()
    if value not in {method.value for method in RequestMethod}:
        return fallback
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Read ``REQTUI_*`` variables, falling back to defaults on bad values."""

    source = os.environ if env is None else env
    return Settings(
        endpoint=source.get(f"{ENV_PREFIX}ENDPOINT", DEFAULT_ENDPOINT),
        method=_env_method(source, "GET"),
        timeout_s=_env_float(source, "TIMEOUT", 30.0),
        highlight_theme=source.get(f"{ENV_PREFIX}THEME", "monokai"),
        highlight_cache_size=max(1, _env_int(source, "HIGHLIGHT_CACHE", 32)),
    )


__all__ = ["Settings", "load_settings", "DEFAULT_ENDPOINT"]
