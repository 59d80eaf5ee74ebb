"""Message payloads: canonical JSON text, optional encryption, URL-safe form."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

from signalpost.errors import BuildRequestError

MALFORMED_UTF8 = "Malformed UTF-8 characters, possibly incorrectly encoded"


class Encryptor(Protocol):
    def encrypt(self, plaintext: str) -> str: ...


@dataclass(frozen=True)
class Serialized:
    """An application value that still has to be turned into JSON text."""

    value: object


@dataclass(frozen=True)
class Raw:
    """Pre-serialized text, sent verbatim."""

    text: object


Payload = Serialized | Raw


@dataclass(frozen=True)
class EncodedPayload:
    raw: str  # POST body form
    url_safe: str  # GET path segment form


def _decode_bytes(value: object) -> str:
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BuildRequestError(f"Value serialization error: {MALFORMED_UTF8}") from exc
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _json_key(key: object) -> object:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    return key


def _check_unique_keys(value: object) -> None:
    """Mappings whose keys collide once turned into JSON strings are rejected."""
    if isinstance(value, dict):
        seen = set()
        for key, item in value.items():
            text = _json_key(key)
            if text in seen:
                raise BuildRequestError(f"Value serialization error: duplicate key {text!r}")
            seen.add(text)
            _check_unique_keys(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_unique_keys(item)


def to_canonical_string(value: object) -> str:
    """Compact JSON with a single textual form for every supported value."""
    try:
        _check_unique_keys(value)
        text = json.dumps(
            value,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            default=_decode_bytes,
        )
        # lone surrogates survive json.dumps but cannot go on the wire
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise BuildRequestError(f"Value serialization error: {MALFORMED_UTF8}") from exc
    except (TypeError, ValueError) as exc:
        raise BuildRequestError(f"Value serialization error: {exc}") from exc
    return text


def url_encode(text: str) -> str:
    """Percent-encode everything except letters, digits and ``-_.~``."""
    return quote(text, safe="")


def payload_for(message: object, serialize: bool = True) -> Payload:
    return Serialized(message) if serialize else Raw(message)


def encode_payload(payload: Payload, crypto: Encryptor | None = None) -> EncodedPayload:
    """Serialize, optionally encrypt, then produce the URL-safe form.

    An encrypted payload is wrapped in double quotes so the server reads
    it as one JSON string literal, whatever the original value was.
    """
    if isinstance(payload, Raw):
        if not isinstance(payload.text, str):
            raise BuildRequestError("Type error, only string is expected")
        text = payload.text
    else:
        text = to_canonical_string(payload.value)

    if crypto is not None:
        text = f'"{crypto.encrypt(text)}"'

    try:
        url_safe = url_encode(text)
    except UnicodeEncodeError as exc:
        raise BuildRequestError(f"Value serialization error: {MALFORMED_UTF8}") from exc
    return EncodedPayload(raw=text, url_safe=url_safe)
