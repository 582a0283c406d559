"""TCP segments and the IPv4 datagrams that carry them."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from spongetcp.ipv4_header import BadChecksum, IPv4Header, PacketTooShort, internet_checksum
from spongetcp.tcp_header import TCPHeader


@dataclass
class TCPSegment:
    """A TCP header together with its payload."""

    header: TCPHeader = field(default_factory=TCPHeader)
    payload: bytes = b""

    @classmethod
    def parse(cls, data: bytes, datagram_layer_checksum: int = 0) -> TCPSegment:
        """Parse a segment, verifying its checksum.

        ``datagram_layer_checksum`` is the pseudo-header contribution from the
        carrying protocol.  Raises a ``ParseError`` subclass on failure.
        """
        raw = bytes(data)
        if internet_checksum(raw, datagram_layer_checksum):
            raise BadChecksum("TCP segment checksum mismatch")
        header = TCPHeader.parse(raw)
        return cls(header=header, payload=raw[4 * header.doff :])

    def serialize(self, datagram_layer_checksum: int = 0) -> bytes:
        """Serialize the segment with a freshly computed checksum."""
        header_out = replace(self.header, cksum=0)
        header_out.cksum = internet_checksum(
            header_out.serialize() + self.payload, datagram_layer_checksum
        )
        return header_out.serialize() + self.payload

    def length_in_sequence_space(self) -> int:
        """Payload length plus one for SYN and one for FIN."""
        return len(self.payload) + int(self.header.syn) + int(self.header.fin)


@dataclass
class IPv4Datagram:
    """An IPv4 header together with its payload."""

    header: IPv4Header = field(default_factory=IPv4Header)
    payload: bytes = b""

    @classmethod
    def parse(cls, data: bytes) -> IPv4Datagram:
        """Parse a whole datagram.  Raises a ``ParseError`` subclass on failure."""
        raw = bytes(data)
        header = IPv4Header.parse(raw)
        payload = raw[4 * header.hlen :]
        if len(payload) != header.payload_length():
            raise PacketTooShort("payload length differs from the header's")
        return cls(header=header, payload=payload)

    def serialize(self) -> bytes:
        """Serialize the datagram, recomputing the header checksum."""
        if len(self.payload) != self.header.payload_length():
            raise ValueError("IPv4Datagram.serialize: payload is wrong size")
        header_out = replace(self.header, cksum=0)
        header_out.cksum = internet_checksum(header_out.serialize())
        return header_out.serialize() + self.payload