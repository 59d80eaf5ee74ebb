"""Per-client message sequence numbers (the ``seqn`` query parameter)."""

from __future__ import annotations

import threading

MAX_SEQUENCE = 65535


class SequenceGenerator:
    """Strictly increasing counter starting at 1, wrapping after MAX_SEQUENCE."""

    def __init__(self, ceiling: int = MAX_SEQUENCE) -> None:
        if ceiling < 1:
            raise ValueError("ceiling must be >= 1")
        self._ceiling = ceiling
        self._value = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            if self._value >= self._ceiling:
                self._value = 0
            self._value += 1
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0
