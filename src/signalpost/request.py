"""Request descriptors for the publish and signal endpoints."""

from __future__ import annotations

from dataclasses import dataclass

from signalpost.config import Configuration, sdk_full_name
from signalpost.errors import ValidationError
from signalpost.models import Operation, PublishOptions
from signalpost.schema import Payload, encode_payload, to_canonical_string, url_encode

GET_PATH = "/{op}/{pub}/{sub}/0/{channel}/0/{message}"
POST_PATH = "/{op}/{pub}/{sub}/0/{channel}/0"


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything the transport needs. Query values are already percent-encoded."""

    operation: Operation
    method: str
    path: str
    query: tuple[tuple[str, str], ...]
    body: str | None = None

    @property
    def params(self) -> dict[str, str]:
        return dict(self.query)

    def query_string(self) -> str:
        return "&".join(f"{k}={v}" for k, v in self.query)

    def url(self, base_url: str) -> str:
        if not self.query:
            return f"{base_url}{self.path}"
        return f"{base_url}{self.path}?{self.query_string()}"


def build_query(
    config: Configuration,
    options: PublishOptions,
    sequence_id: int,
) -> tuple[tuple[str, str], ...]:
    params: list[tuple[str, str]] = [
        ("pnsdk", url_encode(sdk_full_name())),
        ("uuid", url_encode(config.uuid)),
        ("seqn", str(sequence_id)),
    ]

    if options.ttl is not None:
        if isinstance(options.ttl, bool) or not isinstance(options.ttl, int) or options.ttl <= 0:
            raise ValidationError("TTL must be a positive integer")
        params.append(("ttl", str(options.ttl)))

    if options.meta is not None:
        params.append(("meta", url_encode(to_canonical_string(options.meta))))

    if config.auth_key:
        params.append(("auth", url_encode(config.auth_key)))

    if options.should_store is not None:
        params.append(("store", "1" if options.should_store else "0"))

    if not options.replicate:
        params.append(("norep", "true"))

    return tuple(params)


def build_request(
    operation: Operation,
    config: Configuration,
    channel: str,
    payload: Payload | None,
    options: PublishOptions,
    sequence_id: int,
) -> RequestDescriptor:
    """Compose method, path, query and body for one publish or signal call."""
    if payload is None:
        raise ValidationError("Message Missing")
    if not isinstance(channel, str) or not channel:
        raise ValidationError("Channel Missing")
    if not config.subscribe_key:
        raise ValidationError("Subscribe Key not configured")
    if not config.publish_key:
        raise ValidationError("Publish Key not configured")

    encoded = encode_payload(payload, config.get_crypto())
    fields = {
        "op": operation.path_prefix,
        "pub": url_encode(config.publish_key),
        "sub": url_encode(config.subscribe_key),
        "channel": url_encode(channel),
    }
    query = build_query(config, options, sequence_id)

    if options.use_post:
        return RequestDescriptor(
            operation=operation,
            method="POST",
            path=POST_PATH.format(**fields),
            query=query,
            body=encoded.raw,
        )
    return RequestDescriptor(
        operation=operation,
        method="GET",
        path=GET_PATH.format(message=encoded.url_safe, **fields),
        query=query,
    )
