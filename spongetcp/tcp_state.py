"""A summary of a TCP connection's state, comparable with the official state names."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class State(IntEnum):
    """Official connection state names from the TCP specification."""

    LISTEN = 0
    SYN_RCVD = 1
    SYN_SENT = 2
    ESTABLISHED = 3
    CLOSE_WAIT = 4
    LAST_ACK = 5
    FIN_WAIT_1 = 6
    FIN_WAIT_2 = 7
    CLOSING = 8
    TIME_WAIT = 9
    CLOSED = 10
    RESET = 11


class ReceiverSummary(str, Enum):
    """Descriptions of the states a TCP receiver can be in."""

    ERROR = "error (connection was reset)"
    LISTEN = "waiting for SYN: ackno is empty"
    SYN_RECV = "SYN received (ackno exists), and input to stream hasn't ended"
    FIN_RECV = "input to stream has ended"


class SenderSummary(str, Enum):
    """Descriptions of the states a TCP sender can be in."""

    ERROR = "error (connection was reset)"
    CLOSED = "waiting for stream to begin (no SYN sent)"
    SYN_SENT = "stream started but nothing acknowledged"
    SYN_ACKED = "stream ongoing"
    FIN_SENT = "stream finished (FIN sent) but not fully acknowledged"
    FIN_ACKED = "stream finished and fully acknowledged"


# (receiver, sender, active, linger_after_streams_finish) for each official state.
_OFFICIAL: dict[State, tuple[ReceiverSummary, SenderSummary, bool, bool]] = {
    State.LISTEN: (ReceiverSummary.LISTEN, SenderSummary.CLOSED, True, True),
    State.SYN_RCVD: (ReceiverSummary.SYN_RECV, SenderSummary.SYN_SENT, True, True),
    State.SYN_SENT: (ReceiverSummary.LISTEN, SenderSummary.SYN_SENT, True, True),
    State.ESTABLISHED: (ReceiverSummary.SYN_RECV, SenderSummary.SYN_ACKED, True, True),
    State.CLOSE_WAIT: (ReceiverSummary.FIN_RECV, SenderSummary.SYN_ACKED, True, False),
    State.LAST_ACK: (ReceiverSummary.FIN_RECV, SenderSummary.FIN_SENT, True, False),
    State.CLOSING: (ReceiverSummary.FIN_RECV, SenderSummary.FIN_SENT, True, True),
    State.FIN_WAIT_1: (ReceiverSummary.SYN_RECV, SenderSummary.FIN_SENT, True, True),
    State.FIN_WAIT_2: (ReceiverSummary.SYN_RECV, SenderSummary.FIN_ACKED, True, True),
    State.TIME_WAIT: (ReceiverSummary.FIN_RECV, SenderSummary.FIN_ACKED, True, True),
    State.RESET: (ReceiverSummary.ERROR, SenderSummary.ERROR, False, False),
    State.CLOSED: (ReceiverSummary.FIN_RECV, SenderSummary.FIN_ACKED, False, False),
}


def _text(value: object) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


@dataclass(frozen=True, eq=False)
class TCPState:
    """The sender and receiver summaries plus the connection's active and linger bits.

    An inactive state never lingers.  A ``TCPState`` compares equal to a
    ``State`` member when it matches that official state.
    """

    sender: str
    receiver: str
    active: bool = True
    linger_after_streams_finish: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", _text(self.sender))
        object.__setattr__(self, "receiver", _text(self.receiver))
        object.__setattr__(self, "active", bool(self.active))
        object.__setattr__(
            self,
            "linger_after_streams_finish",
            bool(self.linger_after_streams_finish) if self.active else False,
        )

    @classmethod
    def from_state(cls, state: State) -> TCPState:
        """The summary that corresponds to an official state name."""
        receiver, sender, active, linger = _OFFICIAL[State(state)]
        return cls(
            sender=sender.value,
            receiver=receiver.value,
            active=active,
            linger_after_streams_finish=linger,
        )

    def name(self) -> str:
        """A one-line description of the state."""
        return (
            f"sender=`{self.sender}`, receiver=`{self.receiver}`, "
            f"active={int(self.active)}, "
            f"linger_after_streams_finish={int(self.linger_after_streams_finish)}"
        )

    def _key(self) -> tuple[str, str, bool, bool]:
        return (self.sender, self.receiver, self.active, self.linger_after_streams_finish)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, State):
            other = TCPState.from_state(other)
        if not isinstance(other, TCPState):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())