"""Values exchanged between the application state and the HTTP worker."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True, slots=True)
class RequestSpec:
    """A finished request description; every field is a plain value."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query_params: tuple[tuple[str, str], ...] = ()
    body: str = ""
    form: tuple[tuple[str, str], ...] = ()
    send_form: bool = False


@dataclass(frozen=True, slots=True)
class Response:
    status_code: int
    text: str
    content_type: str = "text/plain"
    elapsed_ms: float = 0.0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status_code < 400

    @property
    def status_line(self) -> str:
        if self.error is not None:
            return f"ERROR {self.error}"
        return f"{self.status_code} ({self.elapsed_ms:.0f} ms)"


__all__ = ["RequestSpec", "Response"]
