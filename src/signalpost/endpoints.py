"""Publish and Signal endpoints.

Each endpoint is configured through chained setters::

    result = client.publish().channel("ch").message({"a": 1}).use_post(True).sync()

The setters only record settings. ``sync()`` and ``envelope()`` freeze
them into a PublishOptions value, take one sequence number from the
client and hand everything to the pure ``build_request()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from signalpost.errors import ProtocolError, ServerError, TransportError, ValidationError
from signalpost.models import Envelope, Operation, PublishOptions, PublishResult, SignalResult, Status
from signalpost.request import RequestDescriptor, build_request
from signalpost.response import interpret
from signalpost.schema import payload_for

if TYPE_CHECKING:
    from signalpost.client import Client

log = logging.getLogger(__name__)


class Endpoint:
    operation: Operation

    def __init__(self, client: Client) -> None:
        self._client = client
        self.clear()

    def clear(self) -> Endpoint:
        """Forget every setting made so far."""
        self._channel: str | None = None
        self._message: object = None
        self._use_post = False
        self._should_store: bool | None = None
        self._ttl: int | None = None
        self._meta: dict | None = None
        self._replicate = True
        self._serialize = True
        return self

    def channel(self, channel: str) -> Endpoint:
        self._channel = channel
        return self

    def message(self, message: object) -> Endpoint:
        self._message = message
        return self

    def use_post(self, use_post: bool = True) -> Endpoint:
        self._use_post = use_post
        return self

    def should_store(self, should_store: bool | None) -> Endpoint:
        self._should_store = should_store
        return self

    def ttl(self, ttl: int | None) -> Endpoint:
        self._ttl = ttl
        return self

    def meta(self, meta: dict | None) -> Endpoint:
        self._meta = meta
        return self

    def replicate(self, replicate: bool) -> Endpoint:
        self._replicate = replicate
        return self

    def do_not_serialize(self) -> Endpoint:
        self._serialize = False
        return self

    def options(self) -> PublishOptions:
        return PublishOptions(
            use_post=self._use_post,
            should_store=self._should_store,
            ttl=self._ttl,
            meta=self._meta,
            replicate=self._replicate,
            serialize=self._serialize,
        )

    def validate(self) -> None:
        if self._message is None:
            raise ValidationError("Message Missing")
        if not isinstance(self._channel, str) or not self._channel:
            raise ValidationError("Channel Missing")
        config = self._client.config
        if not config.subscribe_key:
            raise ValidationError("Subscribe Key not configured")
        if not config.publish_key:
            raise ValidationError("Publish Key not configured")

    def build(self) -> RequestDescriptor:
        """Validate and build the request, consuming one sequence number."""
        self.validate()
        options = self.options()
        descriptor = build_request(
            self.operation,
            self._client.config,
            self._channel,
            payload_for(self._message, options.serialize),
            options,
            self._client.sequence_id(),
        )
        log.debug(
            "built %s %s seqn=%s", descriptor.method, descriptor.path, descriptor.params["seqn"]
        )
        return descriptor

    def sync(self) -> PublishResult | SignalResult:
        """Run the request; every failure is raised."""
        descriptor = self.build()
        response = self._client.transport.execute(descriptor, self._client.config.timeouts())
        return interpret(self.operation, response)

    def envelope(self) -> Envelope:
        """Run the request; server, protocol and network failures land in the status.

        Validation and build errors are still raised.
        """
        descriptor = self.build()
        try:
            response = self._client.transport.execute(descriptor, self._client.config.timeouts())
        except TransportError as exc:
            log.warning("%s transport failure: %s", self.operation.value, exc)
            return Envelope(result=None, status=Status(self.operation, None, exc))

        try:
            result = interpret(self.operation, response)
        except (ServerError, ProtocolError) as exc:
            return Envelope(result=None, status=Status(self.operation, response.status_code, exc))
        return Envelope(result=result, status=Status(self.operation, response.status_code))


class Publish(Endpoint):
    operation = Operation.PUBLISH


class Signal(Endpoint):
    operation = Operation.SIGNAL
