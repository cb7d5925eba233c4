from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Tuple

import pytest

from reqtui.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, List[Tuple[str, str]]]] = []
        self.context: Dict[str, str] = {}
        self.components: List[str] = []
        self.profiled: List[str] = []

    def __getattr__(self, name: str) -> Any:
        if not name.endswith("_with"):
            raise AttributeError(name)
        level = name[: -len("_with")]
        return lambda message, pairs: self.records.append((level, message, pairs))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        del self.context[key]

    @contextmanager
    def track_component(self, name: str):
        self.components.append(name)
        yield

    @contextmanager
    def profile(self, name: str):
        self.profiled.append(name)
        yield


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    log = RecordingLogger()
    monkeypatch.setattr(telemetry, "_config", object())
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: log)
    return log


def test_build_config_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.build_config("development")


def test_configure_refuses_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="tui")


def test_request_events_carry_their_fields(recorder: RecordingLogger) -> None:
    telemetry.request_submitted("POST", "http://api.test")
    telemetry.request_completed(201)
    telemetry.request_failed("http://down.test", "refused")

    assert recorder.records == [
        (
            "info",
            "event::request.submitted",
            [
                ("event", "request.submitted"),
                ("method", "POST"),
                ("url", "http://api.test"),
            ],
        ),
        (
            "info",
            "event::request.completed",
            [("event", "request.completed"), ("status", "201"), ("error", "")],
        ),
        (
            "warning",
            "event::request.failed",
            [
                ("event", "request.failed"),
                ("url", "http://down.test"),
                ("error", "refused"),
            ],
        ),
    ]


def test_mode_switch_is_logged_at_debug(recorder: RecordingLogger) -> None:
    telemetry.mode_switched(None, "normal")

    level, message, pairs = recorder.records[0]
    assert (level, message) == ("debug", "event::mode.switch")
    assert ("from", "") in pairs and ("mode", "normal") in pairs


def test_span_logs_failure_and_clears_context(recorder: RecordingLogger) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span(
            "send", component=True, metadata={"url": "http://x"}
        ) as handle:
            assert recorder.context == {"url": "http://x"}
            handle.add_metadata("attempt", 2)
            raise RuntimeError("boom")

    assert recorder.context == {}
    assert recorder.components == ["send"]
    assert recorder.profiled == ["send"]
    level, message, pairs = recorder.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert ("attempt", "2") in pairs and ("reason", "boom") in pairs
