import ipaddress

from spongetcp.segment import IPv4Datagram, TCPSegment
from spongetcp.tcp_config import FdAdapterConfig
from spongetcp.tcp_header import TCPHeader
from spongetcp.tcp_over_ip import FdAdapterBase, TCPOverIPv4Adapter

CLIENT = "10.0.0.1"
SERVER = "10.0.0.2"


def _client():
    adapter = TCPOverIPv4Adapter(
        FdAdapterConfig(
            source_address=CLIENT, source_port=40000, destination_address=SERVER, destination_port=80
        )
    )
    return adapter


def _server():
    return TCPOverIPv4Adapter(
        FdAdapterConfig(
            source_address=SERVER, source_port=80, destination_address=CLIENT, destination_port=40000
        )
    )


def _segment(**flags):
    return TCPSegment(header=TCPHeader(seqno=7, **flags), payload=b"payload")


def test_base_defaults_and_tick():
    base = FdAdapterBase()
    base.tick(10)
    assert base.listening is False
    assert base.config.source_port == 0


def test_wrap_sets_ports_and_addresses():
    seg = _segment()
    dgram = _client().wrap_tcp_in_ip(seg)
    assert (seg.header.sport, seg.header.dport) == (40000, 80)
    assert dgram.header.src == int(ipaddress.IPv4Address(CLIENT))
    assert dgram.header.dst == int(ipaddress.IPv4Address(SERVER))
    assert dgram.header.payload_length() == len(dgram.payload)


def test_wrap_unwrap_round_trip_over_wire():
    dgram = _client().wrap_tcp_in_ip(_segment(ack=True))
    received = IPv4Datagram.parse(dgram.serialize())
    seg = _server().unwrap_tcp_in_ip(received)
    assert seg is not None and seg.payload == b"payload"
    assert seg.header.ack is True
    assert seg.header.seqno == 7


def test_unwrap_rejects_wrong_destination_address():
    dgram = _client().wrap_tcp_in_ip(_segment())
    other = TCPOverIPv4Adapter(
        FdAdapterConfig(
            source_address="10.0.0.3", source_port=80, destination_address=CLIENT, destination_port=40000
        )
    )
    assert other.unwrap_tcp_in_ip(dgram) is None


def test_unwrap_rejects_wrong_peer():
    server = _server()
    server.config.destination_address = ipaddress.IPv4Address("10.0.0.9")
    assert server.unwrap_tcp_in_ip(_client().wrap_tcp_in_ip(_segment())) is None


def test_unwrap_rejects_other_protocol():
    dgram = _client().wrap_tcp_in_ip(_segment())
    dgram.header.proto = 17
    assert _server().unwrap_tcp_in_ip(dgram) is None


def test_unwrap_rejects_bad_checksum():
    dgram = _client().wrap_tcp_in_ip(_segment())
    dgram.payload = dgram.payload[:-1] + b"X"
    assert _server().unwrap_tcp_in_ip(dgram) is None


def test_unwrap_rejects_wrong_ports():
    server = _server()
    server.config.source_port = 81
    assert server.unwrap_tcp_in_ip(_client().wrap_tcp_in_ip(_segment())) is None
    server = _server()
    server.config.destination_port = 1
    assert server.unwrap_tcp_in_ip(_client().wrap_tcp_in_ip(_segment())) is None


def test_listening_accepts_syn_and_records_peer():
    server = TCPOverIPv4Adapter(FdAdapterConfig(source_port=80))
    server.listening = True
    seg = server.unwrap_tcp_in_ip(_client().wrap_tcp_in_ip(_segment(syn=True)))
    assert seg is not None and seg.header.syn
    assert server.listening is False
    assert server.config.source_address == ipaddress.IPv4Address(SERVER)
    assert server.config.destination_address == ipaddress.IPv4Address(CLIENT)
    assert server.config.destination_port == 40000


def test_listening_ignores_non_syn_and_rst():
    server = TCPOverIPv4Adapter(FdAdapterConfig(source_port=80))
    server.listening = True
    assert server.unwrap_tcp_in_ip(_client().wrap_tcp_in_ip(_segment(ack=True))) is None
    assert server.unwrap_tcp_in_ip(_client().wrap_tcp_in_ip(_segment(syn=True, rst=True))) is None
    assert server.listening is True