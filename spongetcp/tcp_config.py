"""Configuration for TCP endpoints and the adapters that carry their segments."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import ClassVar, Optional


@dataclass
class TCPConfig:
    """Settings for a TCP sender and receiver."""

    DEFAULT_CAPACITY: ClassVar[int] = 64000
    MAX_PAYLOAD_SIZE: ClassVar[int] = 1000
    TIMEOUT_DFLT: ClassVar[int] = 1000
    MAX_RETX_ATTEMPTS: ClassVar[int] = 8

    rt_timeout: int = 1000
    recv_capacity: int = 64000
    send_capacity: int = 64000
    fixed_isn: Optional[int] = None


@dataclass
class FdAdapterConfig:
    """Addresses and loss rates for a segment adapter.

    Loss rates are fractions of 65535: zero never drops, 65535 nearly always does.
    """

    source_address: ipaddress.IPv4Address = ipaddress.IPv4Address(0)
    source_port: int = 0
    destination_address: ipaddress.IPv4Address = ipaddress.IPv4Address(0)
    destination_port: int = 0
    loss_rate_dn: int = 0
    loss_rate_up: int = 0

    def __post_init__(self) -> None:
        self.source_address = ipaddress.IPv4Address(self.source_address)
        self.destination_address = ipaddress.IPv4Address(self.destination_address)

    @staticmethod
    def loss_rate_from_fraction(fraction: float) -> int:
        """Convert a loss probability in [0, 1] to the 16-bit loss rate."""
        if not 0.0 <= fraction <= 1.0:
            raise ValueError("loss rate must be between 0 and 1")
        return int(0xFFFF * fraction)