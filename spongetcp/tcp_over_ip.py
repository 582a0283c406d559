"""Conversion between TCP segments and the IPv4 datagrams that carry them."""

from __future__ import annotations

import ipaddress
from typing import Optional

from spongetcp.ipv4_header import IPv4Header, ParseError
from spongetcp.segment import IPv4Datagram, TCPSegment
from spongetcp.tcp_config import FdAdapterConfig


class FdAdapterBase:
    """Configuration and listening state shared by segment adapters."""

    def __init__(self, config: Optional[FdAdapterConfig] = None) -> None:
        self.config = config if config is not None else FdAdapterConfig()
        self.listening = False

    def tick(self, ms_since_last_tick: int) -> None:
        """Called periodically as time passes; does nothing by default."""


class TCPOverIPv4Adapter(FdAdapterBase):
    """Wraps TCP segments in IPv4 datagrams and unwraps them again."""

    def unwrap_tcp_in_ip(self, datagram: IPv4Datagram) -> Optional[TCPSegment]:
        """Return the TCP segment in ``datagram`` if it belongs to this connection.

        While listening, a SYN without RST fixes the addresses and ports of
        the connection and ends listening.
        """
        ip_header = datagram.header
        cfg = self.config

        if not self.listening and ip_header.dst != int(cfg.source_address):
            return None
        if not self.listening and ip_header.src != int(cfg.destination_address):
            return None
        if ip_header.proto != IPv4Header.PROTO_TCP:
            return None

        try:
            segment = TCPSegment.parse(datagram.payload, ip_header.pseudo_cksum())
        except ParseError:
            return None

        if segment.header.dport != cfg.source_port:
            return None

        if self.listening:
            if not (segment.header.syn and not segment.header.rst):
                return None
            cfg.source_address = ipaddress.IPv4Address(ip_header.dst)
            cfg.destination_address = ipaddress.IPv4Address(ip_header.src)
            cfg.destination_port = segment.header.sport
            self.listening = False

        if segment.header.sport != cfg.destination_port:
            return None
        return segment

    def wrap_tcp_in_ip(self, segment: TCPSegment) -> IPv4Datagram:
        """Set the segment's ports and wrap it in an addressed IPv4 datagram."""
        cfg = self.config
        segment.header.sport = cfg.source_port
        segment.header.dport = cfg.destination_port

        ip_header = IPv4Header(src=int(cfg.source_address), dst=int(cfg.destination_address))
        ip_header.length = ip_header.hlen * 4 + segment.header.doff * 4 + len(segment.payload)
        return IPv4Datagram(header=ip_header, payload=segment.serialize(ip_header.pseudo_cksum()))