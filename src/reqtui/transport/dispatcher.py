"""Background worker that runs one request at a time off the UI thread."""

from __future__ import annotations

import queue
import threading
from typing import Optional, Protocol

from reqtui.runtime import telemetry

from .models import RequestSpec, Response


class Transport(Protocol):
    def send(self, spec: RequestSpec) -> Response: ...


class DispatcherBusyError(RuntimeError):
    """Raised when a request is submitted while another is in flight."""

    def __init__(self, spec: RequestSpec) -> None:
        super().__init__(f"A request is already in flight; dropped {spec.url!r}")
        self.spec = spec


class RequestDispatcher:
    """Feeds a worker thread through a bounded queue.

    ``submit`` hands a request to the worker, ``poll`` collects the finished
    response without blocking. Only one request may be outstanding; it stays
    outstanding until its response has been collected.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._requests: queue.Queue[Optional[RequestSpec]] = queue.Queue(maxsize=1)
        self._responses: queue.Queue[Response] = queue.Queue(maxsize=1)
        self._in_flight = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def busy(self) -> bool:
        return self._in_flight.is_set()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._thread = threading.Thread(
            target=self._run, name="reqtui-transport", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        if self._thread is None:
            return
        try:
            self._requests.put(None, timeout=timeout)
        except queue.Full:
            pass
        self._thread.join(timeout)
        self._thread = None

    def submit(self, spec: RequestSpec) -> None:
        if self._in_flight.is_set():
            raise DispatcherBusyError(spec)
        self.start()
        self._in_flight.set()
        self._requests.put_nowait(spec)
        telemetry.request_submitted(spec.method, spec.url)

    def poll(self) -> Optional[Response]:
        try:
            response = self._responses.get_nowait()
        except queue.Empty:
            return None
        return self._collected(response)

    def wait(self, timeout: float | None = None) -> Optional[Response]:
        """Block until the outstanding response arrives or ``timeout`` passes."""

        try:
            response = self._responses.get(timeout=timeout)
        except queue.Empty:
            return None
        return self._collected(response)

    def _collected(self, response: Response) -> Response:
        self._in_flight.clear()
        telemetry.request_completed(response.status_code, response.error)
        return response

    def _run(self) -> None:
        while True:
            spec = self._requests.get()
            if spec is None:
                break
            self._responses.put(self._send(spec))

    def _send(self, spec: RequestSpec) -> Response:
        """Run the transport; anything it raises becomes an error response."""

        try:
            return self._transport.send(spec)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            telemetry.request_failed(spec.url, reason)
            return Response(status_code=0, text=reason, error=reason)

    def __enter__(self) -> "RequestDispatcher":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.stop()
        return False


__all__ = ["DispatcherBusyError", "RequestDispatcher", "Transport"]
