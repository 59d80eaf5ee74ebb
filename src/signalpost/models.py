"""Result and envelope types returned to callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Operation(Enum):
    PUBLISH = "publish"
    SIGNAL = "signal"

    @property
    def path_prefix(self) -> str:
        return self.value


@dataclass(frozen=True)
class PublishOptions:
    """Per-call publish settings. should_store is tri-state: None means unset."""

    use_post: bool = False
    should_store: bool | None = None
    ttl: int | None = None
    meta: dict | None = None
    replicate: bool = True
    serialize: bool = True


@dataclass(frozen=True)
class PublishResult:
    timetoken: int


@dataclass(frozen=True)
class SignalResult:
    timetoken: int


RESULT_TYPES = {
    Operation.PUBLISH: PublishResult,
    Operation.SIGNAL: SignalResult,
}


@dataclass(frozen=True)
class Status:
    operation: Operation
    status_code: int | None = None
    exception: Exception | None = None

    @property
    def is_error(self) -> bool:
        return self.exception is not None


@dataclass(frozen=True)
class Envelope:
    """Outcome of a call that never raises for server or network failures."""

    result: PublishResult | SignalResult | None
    status: Status

    @property
    def exception(self) -> Exception | None:
        return self.status.exception

    @property
    def is_error(self) -> bool:
        return self.status.is_error
