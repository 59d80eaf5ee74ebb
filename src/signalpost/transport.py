"""HTTP transport for publish and signal requests."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from signalpost.config import Timeouts
from signalpost.errors import TransportError
from signalpost.request import RequestDescriptor
from signalpost.response import RawResponse

log = logging.getLogger(__name__)


class Transport(Protocol):
    def execute(self, descriptor: RequestDescriptor, timeouts: Timeouts) -> RawResponse: ...


def _client(timeouts: Timeouts) -> httpx.Client:
    timeout = httpx.Timeout(timeouts.request, connect=timeouts.connect)
    return httpx.Client(timeout=timeout)


class HttpTransport:
    """Sends a RequestDescriptor with httpx, one client per call."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url

    def execute(self, descriptor: RequestDescriptor, timeouts: Timeouts) -> RawResponse:
        # query values are pre-encoded, so the URL is assembled by hand
        url = descriptor.url(self.base_url)
        headers = {}
        if descriptor.body is not None:
            headers["Content-Type"] = "application/json"
        log.debug("%s %s", descriptor.method, descriptor.path)
        try:
            with _client(timeouts) as c:
                r = c.request(descriptor.method, url, content=descriptor.body, headers=headers)
        except httpx.TimeoutException as err:
            raise TransportError(f"{descriptor.operation.value} request timed out") from err
        except httpx.TransportError as err:
            raise TransportError(f"{descriptor.operation.value} request failed: {err}") from err
        log.debug("%s -> %d", descriptor.path, r.status_code)
        return RawResponse(status_code=r.status_code, body=r.text)
