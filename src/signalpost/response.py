"""Turn raw publish/signal responses into results or errors."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass

from signalpost.errors import ProtocolError, ServerError
from signalpost.models import RESULT_TYPES, Operation, PublishResult, SignalResult

log = logging.getLogger(__name__)

TIMETOKEN_INDEX = 2


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: str


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def parse_timetoken(value: object) -> int:
    """Accept JSON integers, finite floats and numeric strings."""
    if isinstance(value, bool):
        raise ProtocolError(f"Unable to parse timetoken {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            raise ProtocolError(f"Unable to parse timetoken {value!r}") from None
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    raise ProtocolError(f"Unable to parse timetoken {value!r}")


def interpret(operation: Operation, response: RawResponse) -> PublishResult | SignalResult:
    """Success bodies look like ``[1, "Sent", "<timetoken>"]``."""
    if not is_success(response.status_code):
        log.warning("%s failed with status %s", operation.value, response.status_code)
        raise ServerError(response.status_code, response.body)

    try:
        data = json.loads(response.body)
    except ValueError as exc:
        raise ProtocolError("Unable to decode server response as JSON") from exc

    if not isinstance(data, list) or len(data) <= TIMETOKEN_INDEX:
        raise ProtocolError("Unable to parse timetoken from server response")

    timetoken = parse_timetoken(data[TIMETOKEN_INDEX])
    log.debug("%s accepted, timetoken=%d", operation.value, timetoken)
    return RESULT_TYPES[operation](timetoken)
