"""Publish messages and signals to channels of a hosted pub/sub service."""

__version__ = "0.1.0"

from signalpost.client import Client  # noqa: E402
from signalpost.config import Configuration, load_configuration  # noqa: E402
from signalpost.errors import (  # noqa: E402
    BuildRequestError,
    ProtocolError,
    ServerError,
    SignalPostError,
    TransportError,
    ValidationError,
)
from signalpost.models import Envelope, PublishOptions, PublishResult, SignalResult, Status  # noqa: E402

__all__ = [
    "BuildRequestError",
    "Client",
    "Configuration",
    "Envelope",
    "ProtocolError",
    "PublishOptions",
    "PublishResult",
    "ServerError",
    "SignalPostError",
    "SignalResult",
    "Status",
    "TransportError",
    "ValidationError",
    "load_configuration",
]
