"""Error taxonomy for publish and signal requests."""

from __future__ import annotations

import json


class SignalPostError(Exception):
    """Base error for all client failures."""


class ValidationError(SignalPostError):
    """Local precondition failure. Raised before anything is built."""


class BuildRequestError(SignalPostError):
    """The payload could not be turned into a request."""


class TransportError(SignalPostError):
    """Network or timeout failure while talking to the server."""


class ProtocolError(SignalPostError):
    """Success status, but the body is not shaped like a publish response."""


class ServerError(SignalPostError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int | None, raw_body: str = "") -> None:
        self.status_code = status_code
        self.raw_body = raw_body
        self.body = parse_error_body(raw_body)
        message = "Server responded with an error"
        if status_code is not None and status_code > 0:
            message += f" and the status code is {status_code}"
        super().__init__(message)


def parse_error_body(raw_body: str) -> object:
    """Return the decoded JSON body, or the raw string when it does not parse."""
    try:
        return json.loads(raw_body)
    except ValueError:
        return raw_body
