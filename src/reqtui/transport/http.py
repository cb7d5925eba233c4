"""Blocking HTTP transport built on ``requests``."""

from __future__ import annotations

import json
import time
from typing import Optional

import requests

from reqtui.runtime import telemetry

from .models import RequestSpec, Response

JSON_MEDIA_TYPES = {"application/json", "text/json"}


def media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def format_body(text: str, content_type: str) -> str:
    """Pretty-print JSON payloads, pass everything else through."""

    kind = media_type(content_type)
    if kind not in JSON_MEDIA_TYPES and not kind.endswith("+json"):
        return text
    try:
        data = json.loads(text)
    except ValueError:
        return text
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


class HttpTransport:
    """Sends ``RequestSpec`` values and folds the outcome into ``Response``."""

    def __init__(
        self,
        *,
        timeout_s: float = 30.0,
        session: Optional[requests.Session] = None,
        logger_name: str | None = "reqtui.transport",
    ) -> None:
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._logger_name = logger_name

    def close(self) -> None:
        self._session.close()

    def send(self, spec: RequestSpec) -> Response:
        with telemetry.span(
            "transport::send",
            logger_name=self._logger_name,
            component="transport",
            metadata={"method": spec.method, "url": spec.url},
        ) as handle:
            headers = dict(spec.headers)
            if spec.send_form:
                # requests sets the urlencoded content type itself.
                headers = {
                    k: v for k, v in headers.items() if k.lower() != "content-type"
                }
            started = time.perf_counter()
            try:
                raw = self._session.request(
                    spec.method,
                    spec.url,
                    headers=headers,
                    params=list(spec.query_params) or None,
                    data=self._payload(spec),
                    timeout=self.timeout_s,
                )
            except requests.RequestException as exc:
                elapsed_ms = (time.perf_counter() - started) * 1000
                reason = str(exc) or type(exc).__name__
                handle.add_metadata("error", type(exc).__name__)
                telemetry.request_failed(spec.url, reason)
                return Response(
                    status_code=0,
                    text=reason,
                    elapsed_ms=elapsed_ms,
                    error=reason,
                )

            elapsed_ms = (time.perf_counter() - started) * 1000
            content_type = raw.headers.get("Content-Type", "text/plain")
            handle.add_metadata("status", raw.status_code)
            return Response(
                status_code=raw.status_code,
                text=format_body(raw.text, content_type),
                content_type=media_type(content_type) or "text/plain",
                elapsed_ms=elapsed_ms,
            )

    @staticmethod
    def _payload(spec: RequestSpec) -> object:
        if spec.send_form:
            return list(spec.form) or None
        if spec.body:
            return spec.body.encode("utf-8")
        return None


__all__ = ["HttpTransport", "format_body", "media_type"]
