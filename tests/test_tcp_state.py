import pytest

from spongetcp.tcp_state import ReceiverSummary, SenderSummary, State, TCPState


def test_state_zero_is_listen():
    assert TCPState.from_state(0) == TCPState.from_state(State.LISTEN)


def test_summary_strings_match_source():
    listen = TCPState.from_state(State.LISTEN)
    assert listen.receiver == "waiting for SYN: ackno is empty"
    assert TCPState.from_state(State.TIME_WAIT).sender == "stream finished and fully acknowledged"
    reset = TCPState.from_state(State.RESET)
    assert reset.receiver == reset.sender == "error (connection was reset)"


def test_listen_from_state():
    st = TCPState.from_state(State.LISTEN)
    assert st.receiver == ReceiverSummary.LISTEN.value
    assert st.sender == SenderSummary.CLOSED.value
    assert st.active is True
    assert st.linger_after_streams_finish is True


@pytest.mark.parametrize(
    "state, receiver, sender",
    [
        (State.SYN_RCVD, ReceiverSummary.SYN_RECV, SenderSummary.SYN_SENT),
        (State.SYN_SENT, ReceiverSummary.LISTEN, SenderSummary.SYN_SENT),
        (State.ESTABLISHED, ReceiverSummary.SYN_RECV, SenderSummary.SYN_ACKED),
        (State.CLOSE_WAIT, ReceiverSummary.FIN_RECV, SenderSummary.SYN_ACKED),
        (State.LAST_ACK, ReceiverSummary.FIN_RECV, SenderSummary.FIN_SENT),
        (State.CLOSING, ReceiverSummary.FIN_RECV, SenderSummary.FIN_SENT),
        (State.FIN_WAIT_1, ReceiverSummary.SYN_RECV, SenderSummary.FIN_SENT),
        (State.FIN_WAIT_2, ReceiverSummary.SYN_RECV, SenderSummary.FIN_ACKED),
        (State.TIME_WAIT, ReceiverSummary.FIN_RECV, SenderSummary.FIN_ACKED),
        (State.RESET, ReceiverSummary.ERROR, SenderSummary.ERROR),
        (State.CLOSED, ReceiverSummary.FIN_RECV, SenderSummary.FIN_ACKED),
    ],
)
def test_summaries_per_state(state, receiver, sender):
    st = TCPState.from_state(state)
    assert st.receiver == receiver.value
    assert st.sender == sender.value


@pytest.mark.parametrize("state", [State.CLOSE_WAIT, State.LAST_ACK, State.RESET, State.CLOSED])
def test_states_without_linger(state):
    assert TCPState.from_state(state).linger_after_streams_finish is False


@pytest.mark.parametrize("state", [State.RESET, State.CLOSED])
def test_inactive_states(state):
    assert TCPState.from_state(state).active is False


def test_time_wait_lingers_and_closed_does_not():
    time_wait = TCPState.from_state(State.TIME_WAIT)
    closed = TCPState.from_state(State.CLOSED)
    assert time_wait.sender == closed.sender
    assert time_wait.receiver == closed.receiver
    assert time_wait != closed


def test_name_format():
    st = TCPState.from_state(State.LISTEN)
    expected = (
        "sender=`" + SenderSummary.CLOSED.value + "`, receiver=`" + ReceiverSummary.LISTEN.value
        + "`, active=1, linger_after_streams_finish=1"
    )
    assert st.name() == expected


def test_name_of_reset_shows_zero_bits():
    assert TCPState.from_state(State.RESET).name().endswith("active=0, linger_after_streams_finish=0")


def test_inactive_state_never_lingers():
    st = TCPState(SenderSummary.FIN_ACKED, ReceiverSummary.FIN_RECV, active=False, linger_after_streams_finish=True)
    assert st.linger_after_streams_finish is False
    assert st == State.CLOSED


def test_equality_with_official_state():
    st = TCPState(SenderSummary.SYN_ACKED.value, ReceiverSummary.SYN_RECV.value, True, True)
    assert st == State.ESTABLISHED
    assert st != State.SYN_RCVD
    assert st == TCPState.from_state(State.ESTABLISHED)


def test_enum_members_normalized_to_strings():
    st = TCPState(SenderSummary.SYN_SENT, ReceiverSummary.LISTEN)
    assert st.sender == SenderSummary.SYN_SENT.value
    assert st == State.SYN_SENT


def test_all_official_states_distinct():
    states = {TCPState.from_state(s) for s in State}
    assert len(states) == len(State)


def test_from_state_accepts_integer():
    assert TCPState.from_state(3) == TCPState.from_state(State.ESTABLISHED)


def test_from_state_rejects_unknown():
    with pytest.raises(ValueError):
        TCPState.from_state(99)