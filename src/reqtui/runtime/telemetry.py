"""Logging for reqtui, on top of telelog.

The terminal belongs to Textual while the app runs, so the default ``tui``
preset never writes to the console; set ``REQTUI_LOG_FILE`` to keep a log.
``REQTUI_LOG_PRESET=console`` prints to stderr instead, which is what tests
and scripts driving the engine without a UI usually want.

Besides the generic ``record_event`` and ``span``, the request lifecycle and
mode changes have named helpers so every layer reports them the same way.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "REQTUI_"
ROOT_LOGGER = "reqtui"
TRANSPORT_LOGGER = "reqtui.transport"
PRESETS = ("tui", "console")

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    return value or None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _pairs(payload: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in payload.items()]


def build_config(preset: str) -> Any:
    """Return a ``telelog.Config`` for ``"tui"`` or ``"console"``.

    ``REQTUI_LOG_LEVEL`` (default ``WARNING``), ``REQTUI_LOG_FILE`` and
    ``REQTUI_LOG_JSON`` apply to both.
    """

    if preset not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}', expected one of {PRESETS}.")

    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())
    config.with_console_output(preset == "console")
    if preset == "console":
        config.with_colored_output(True)
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if (_env("LOG_JSON") or "").lower() in {"1", "true", "yes", "on"}:
        config.with_json_format(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install ``config``, or build one from ``preset``.

    With neither, the preset comes from ``REQTUI_LOG_PRESET`` and defaults to
    ``"tui"``. Loggers handed out earlier are dropped from the cache.
    """

    global _config
    if config is not None and preset is not None:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if config is None:
        config = build_config(preset or _env("LOG_PRESET") or "tui")
    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` called ``name`` (default ``reqtui``)."""

    if _config is None:
        configure()
    logger_name = name or ROOT_LOGGER
    if logger_name not in _loggers:
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _emitter(log: Any, level: str) -> Callable[[str, Dict[str, Any]], None]:
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        return lambda message, payload: structured(message, _pairs(payload))
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return lambda message, payload: plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    emit = _emitter(get_logger(logger_name), level)
    emit(f"event::{name}", {"event": name, **(data or {})})


# -- named events ------------------------------------------------------------


def request_submitted(method: str, url: str) -> None:
    record_event(
        "request.submitted",
        data={"method": method, "url": url},
        logger_name=TRANSPORT_LOGGER,
    )


def request_completed(status_code: int, error: Optional[str] = None) -> None:
    record_event(
        "request.completed",
        data={"status": status_code, "error": error or ""},
        logger_name=TRANSPORT_LOGGER,
    )


def request_failed(url: str, reason: str) -> None:
    record_event(
        "request.failed",
        level="warning",
        data={"url": url, "error": reason},
        logger_name=TRANSPORT_LOGGER,
    )


def mode_switched(previous: Optional[str], current: str) -> None:
    record_event(
        "mode.switch",
        level="debug",
        data={"from": previous or "", "mode": current},
        logger_name="reqtui.modes",
    )


# -- spans -------------------------------------------------------------------


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here is logged if the block fails."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload["reason"] = reason
        _emitter(self.logger, "error")("span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, attaching ``metadata`` as logger context meanwhile.

    ``component=True`` tracks the block as a component called ``name``; a
    string names the component explicitly. An exception escaping the block
    is logged through ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else None
    if isinstance(component, str):
        component_name = component
    handle = SpanHandle(logger=log, name=name, component=component_name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if handle.component:
            stack.enter_context(log.track_component(handle.component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "mode_switched",
    "record_event",
    "request_completed",
    "request_failed",
    "request_submitted",
    "span",
]
