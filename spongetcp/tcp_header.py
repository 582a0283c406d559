"""TCP segment headers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

from spongetcp.ipv4_header import HeaderTooShort, PacketTooShort

_FORMAT = struct.Struct(">HHIIBBHHH")

_URG = 0b0010_0000
_ACK = 0b0001_0000
_PSH = 0b0000_1000
_RST = 0b0000_0100
_SYN = 0b0000_0010
_FIN = 0b0000_0001


@dataclass(eq=False)
class TCPHeader:
    """A TCP header; TCP options are carried only as zero padding.

    Equality ignores the ports and the checksum.
    """

    LENGTH: ClassVar[int] = 20

    sport: int = 0
    dport: int = 0
    seqno: int = 0
    ackno: int = 0
    doff: int = 5
    urg: bool = False
    ack: bool = False
    psh: bool = False
    rst: bool = False
    syn: bool = False
    fin: bool = False
    win: int = 0
    cksum: int = 0
    uptr: int = 0

    @classmethod
    def parse(cls, data: bytes) -> TCPHeader:
        """Parse a header from the start of ``data``.

        The payload begins at ``4 * doff``.  Raises a ``ParseError`` subclass
        when the bytes do not hold a whole header.
        """
        raw = bytes(data)
        if len(raw) < cls.LENGTH:
            raise PacketTooShort("data too short for a TCP header")

        sport, dport, seqno, ackno, doff_b, flags, win, cksum, uptr = _FORMAT.unpack_from(raw)
        header = cls(
            sport=sport,
            dport=dport,
            seqno=seqno,
            ackno=ackno,
            doff=doff_b >> 4,
            urg=bool(flags & _URG),
            ack=bool(flags & _ACK),
            psh=bool(flags & _PSH),
            rst=bool(flags & _RST),
            syn=bool(flags & _SYN),
            fin=bool(flags & _FIN),
            win=win,
            cksum=cksum,
            uptr=uptr,
        )
        if header.doff < 5:
            raise HeaderTooShort(f"data offset {header.doff} is below 5")
        if len(raw) < 4 * header.doff:
            raise PacketTooShort("data shorter than the advertised header length")
        return header

    def serialize(self) -> bytes:
        """Serialize the header as it stands; the checksum is not recomputed."""
        if self.doff < 5:
            raise ValueError("TCP header too short")
        flags = (
            (_URG if self.urg else 0)
            | (_ACK if self.ack else 0)
            | (_PSH if self.psh else 0)
            | (_RST if self.rst else 0)
            | (_SYN if self.syn else 0)
            | (_FIN if self.fin else 0)
        )
        packed = _FORMAT.pack(
            self.sport & 0xFFFF,
            self.dport & 0xFFFF,
            self.seqno & 0xFFFFFFFF,
            self.ackno & 0xFFFFFFFF,
            (self.doff << 4) & 0xFF,
            flags,
            self.win & 0xFFFF,
            self.cksum & 0xFFFF,
            self.uptr & 0xFFFF,
        )
        return packed.ljust(4 * self.doff, b"\x00")

    def to_string(self) -> str:
        """The header's fields in human-readable form, numbers in hexadecimal."""
        flags = " ".join(
            f"{name}: {str(bool(value)).lower()}"
            for name, value in (
                ("urg", self.urg),
                ("ack", self.ack),
                ("psh", self.psh),
                ("rst", self.rst),
                ("syn", self.syn),
                ("fin", self.fin),
            )
        )
        return (
            f"TCP source port: {self.sport:x}\n"
            f"TCP dest port: {self.dport:x}\n"
            f"TCP seqno: {self.seqno:x}\n"
            f"TCP ackno: {self.ackno:x}\n"
            f"TCP doff: {self.doff:x}\n"
            f"Flags: {flags}\n"
            f"TCP winsize: {self.win:x}\n"
            f"TCP cksum: {self.cksum:x}\n"
            f"TCP uptr: {self.uptr:x}\n"
        )

    def summary(self) -> str:
        """A one-line human-readable summary of the header."""
        flags = ("S" if self.syn else "") + ("A" if self.ack else "") + ("R" if self.rst else "") + (
            "F" if self.fin else ""
        )
        return f"Header(flags={flags},seqno={self.seqno},ack={self.ackno},win={self.win})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TCPHeader):
            return NotImplemented
        return (
            self.seqno == other.seqno
            and self.ackno == other.ackno
            and self.doff == other.doff
            and self.urg == other.urg
            and self.ack == other.ack
            and self.psh == other.psh
            and self.rst == other.rst
            and self.syn == other.syn
            and self.fin == other.fin
            and self.win == other.win
            and self.uptr == other.uptr
        )

    __hash__ = None  # type: ignore[assignment]