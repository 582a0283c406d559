"""An adapter wrapper that drops segments at random."""

from __future__ import annotations

import random
from typing import Any, Optional

from spongetcp.segment import TCPSegment
from spongetcp.tcp_config import FdAdapterConfig


class LossyAdapter:
    """Wraps a segment adapter and randomly drops reads and writes.

    The wrapped adapter provides ``read()``, ``write(segment)``, ``config``,
    ``listening`` and ``tick(ms)``.  The drop probabilities come from its
    configuration's ``loss_rate_dn`` (reads) and ``loss_rate_up`` (writes).
    """

    def __init__(self, adapter: Any, rng: Optional[random.Random] = None) -> None:
        self._adapter = adapter
        self._rng = rng if rng is not None else random.Random()

    @property
    def adapter(self) -> Any:
        """The wrapped adapter."""
        return self._adapter

    def _should_drop(self, uplink: bool) -> bool:
        cfg = self._adapter.config
        loss = cfg.loss_rate_up if uplink else cfg.loss_rate_dn
        return loss != 0 and (self._rng.getrandbits(32) & 0xFFFF) < loss

    def read(self) -> Optional[TCPSegment]:
        """Read from the wrapped adapter, returning None if the segment is dropped."""
        segment = self._adapter.read()
        if self._should_drop(False):
            return None
        return segment

    def write(self, segment: TCPSegment) -> None:
        """Write through the wrapped adapter unless the segment is dropped."""
        if self._should_drop(True):
            return
        self._adapter.write(segment)

    def set_listening(self, listening: bool) -> None:
        """Set the wrapped adapter's listening flag."""
        self._adapter.listening = listening

    def config(self) -> FdAdapterConfig:
        """The wrapped adapter's configuration."""
        return self._adapter.config

    def tick(self, ms_since_last_tick: int) -> None:
        """Pass the passage of time on to the wrapped adapter."""
        self._adapter.tick(ms_since_last_tick)