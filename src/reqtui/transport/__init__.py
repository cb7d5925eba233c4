"""HTTP transport: request/response values, the sender, and its worker."""

from .dispatcher import DispatcherBusyError, RequestDispatcher, Transport
from .http import HttpTransport, format_body, media_type
from .models import RequestSpec, Response

__all__ = [
    "DispatcherBusyError",
    "HttpTransport",
    "RequestDispatcher",
    "RequestSpec",
    "Response",
    "Transport",
    "format_body",
    "media_type",
]
