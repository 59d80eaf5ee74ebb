"""Client object tying configuration, sequence numbers and transport together."""

from __future__ import annotations

from signalpost.config import Configuration, Timeouts
from signalpost.endpoints import Publish, Signal
from signalpost.sequence import SequenceGenerator
from signalpost.transport import HttpTransport, Transport


class Client:
    def __init__(
        self,
        config: Configuration,
        transport: Transport | None = None,
        sequence: SequenceGenerator | None = None,
    ) -> None:
        self.config = config
        self.transport = transport or HttpTransport(config.base_url())
        self.sequence = sequence or SequenceGenerator()

    def publish(self) -> Publish:
        return Publish(self)

    def signal(self) -> Signal:
        return Signal(self)

    def sequence_id(self) -> int:
        return self.sequence.next()

    def reset_sequence(self) -> None:
        self.sequence.reset()

    def timeouts(self) -> Timeouts:
        return self.config.timeouts()
