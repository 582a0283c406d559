"""IPv4 datagram headers and the Internet checksum."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass
from typing import ClassVar

_FORMAT = struct.Struct(">BBHHHBBHII")


class ParseError(ValueError):
    """Raised when bytes cannot be parsed as a protocol header."""


class PacketTooShort(ParseError):
    """There are fewer bytes than the header or datagram requires."""


class WrongIPVersion(ParseError):
    """The IP version field is not 4."""


class HeaderTooShort(ParseError):
    """The header length field is below the minimum allowed."""


class TruncatedPacket(ParseError):
    """The datagram length differs from the length the header claims."""


class BadChecksum(ParseError):
    """The checksum does not verify."""


def internet_checksum(data: bytes, initial: int = 0) -> int:
    """Return the ones' complement Internet checksum of ``data``.

    ``initial`` is added into the running sum first, as when a pseudo-header
    contributes to the checksum of an encapsulated segment.
    """
    raw = bytes(data)
    if len(raw) % 2:
        raw += b"\x00"
    total = initial + sum(word for (word,) in struct.iter_unpack(">H", raw))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


@dataclass
class IPv4Header:
    """An IPv4 header; IP options are carried only as zero padding."""

    LENGTH: ClassVar[int] = 20
    DEFAULT_TTL: ClassVar[int] = 128
    PROTO_TCP: ClassVar[int] = 6

    ver: int = 4
    hlen: int = 5
    tos: int = 0
    length: int = 0
    ident: int = 0
    df: bool = True
    mf: bool = False
    offset: int = 0
    ttl: int = 128
    proto: int = 6
    cksum: int = 0
    src: int = 0
    dst: int = 0

    @classmethod
    def parse(cls, data: bytes) -> IPv4Header:
        """Parse a header from the start of a whole datagram.

        Raises a ``ParseError`` subclass describing what is wrong.
        """
        raw = bytes(data)
        if len(raw) < cls.LENGTH:
            raise PacketTooShort("datagram too short for an IPv4 header")

        first, tos, length, ident, fo_val, ttl, proto, cksum, src, dst = _FORMAT.unpack_from(raw)
        header = cls(
            ver=first >> 4,
            hlen=first & 0x0F,
            tos=tos,
            length=length,
            ident=ident,
            df=bool(fo_val & 0x4000),
            mf=bool(fo_val & 0x2000),
            offset=fo_val & 0x1FFF,
            ttl=ttl,
            proto=proto,
            cksum=cksum,
            src=src,
            dst=dst,
        )

        if len(raw) < 4 * header.hlen:
            raise PacketTooShort("datagram shorter than the advertised header length")
        if header.ver != 4:
            raise WrongIPVersion(f"IP version {header.ver}")
        if header.hlen < 5:
            raise HeaderTooShort(f"header length {header.hlen} is below 5")
        if len(raw) != header.length:
            raise TruncatedPacket(f"datagram is {len(raw)} bytes, header says {header.length}")
        if internet_checksum(raw[: 4 * header.hlen]):
            raise BadChecksum("IPv4 header checksum mismatch")
        return header

    def serialize(self) -> bytes:
        """Serialize the header as it stands; the checksum is not recomputed."""
        if self.ver != 4:
            raise ValueError("wrong IP version")
        if 4 * self.hlen < self.LENGTH:
            raise ValueError("IP header too short")

        first = ((self.ver << 4) | (self.hlen & 0x0F)) & 0xFF
        fo_val = (0x4000 if self.df else 0) | (0x2000 if self.mf else 0) | (self.offset & 0x1FFF)
        packed = _FORMAT.pack(
            first,
            self.tos & 0xFF,
            self.length & 0xFFFF,
            self.ident & 0xFFFF,
            fo_val,
            self.ttl & 0xFF,
            self.proto & 0xFF,
            self.cksum & 0xFFFF,
            self.src & 0xFFFFFFFF,
            self.dst & 0xFFFFFFFF,
        )
        return packed.ljust(4 * self.hlen, b"\x00")

    def payload_length(self) -> int:
        """Length of the datagram's payload according to the header."""
        return (self.length - 4 * self.hlen) & 0xFFFF

    def pseudo_cksum(self) -> int:
        """The pseudo-header's contribution to an encapsulated TCP checksum."""
        total = (self.src >> 16) + (self.src & 0xFFFF)
        total += (self.dst >> 16) + (self.dst & 0xFFFF)
        total += self.proto
        total += self.payload_length()
        return total & 0xFFFFFFFF

    def to_string(self) -> str:
        """The header's fields in human-readable form, numbers in hexadecimal."""
        df = str(bool(self.df)).lower()
        mf = str(bool(self.mf)).lower()
        return (
            f"IP version: {self.ver:x}\n"
            f"IP hdr len: {self.hlen:x}\n"
            f"IP tos: {self.tos:x}\n"
            f"IP dgram len: {self.length:x}\n"
            f"IP id: {self.ident:x}\n"
            f"Flags: df: {df} mf: {mf}\n"
            f"Offset: {self.offset:x}\n"
            f"TTL: {self.ttl:x}\n"
            f"Protocol: {self.proto:x}\n"
            f"Checksum: {self.cksum:x}\n"
            f"Src addr: {self.src:x}\n"
            f"Dst addr: {self.dst:x}\n"
        )

    def summary(self) -> str:
        """A one-line human-readable summary of the header."""
        ttl_part = "" if self.ttl >= 10 else f"ttl={self.ttl}, "
        src = ipaddress.IPv4Address(self.src & 0xFFFFFFFF)
        dst = ipaddress.IPv4Address(self.dst & 0xFFFFFFFF)
        return (
            f"IPv{self.ver:x}, len={self.length:x}, protocol={self.proto:x}, "
            f"{ttl_part}src={src}, dst={dst}"
        )