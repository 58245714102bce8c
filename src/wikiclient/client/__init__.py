from .transport import AsyncTransport, RequestsTransport, Transport
from .async_transport import HttpxAsyncTransport
from .mwclient_transport import MwclientTransport, build_site

__all__ = [
    "AsyncTransport",
    "HttpxAsyncTransport",
    "MwclientTransport",
    "RequestsTransport",
    "Transport",
    "build_site",
]
