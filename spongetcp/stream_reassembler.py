"""Reassembly of possibly out-of-order, overlapping substrings into a byte stream."""

from __future__ import annotations

import bisect

from spongetcp.byte_stream import ByteStream


def _touches(left: int, right: int, other_left: int, other_right: int) -> bool:
    """Whether the closed ranges [left, right] and [other_left, other_right] meet."""
    return left <= other_right and other_left <= right


class StreamReassembler:
    """Assembles excerpts of a byte stream into an in-order ``ByteStream``.

    The capacity bounds both the reassembled bytes still waiting in the
    output stream and the bytes held back until earlier gaps are filled.
    Bytes beyond that window are silently discarded.
    """

    def __init__(self, capacity: int) -> None:
        self._output = ByteStream(capacity)
        self._capacity = capacity
        self._first_unassembled = 0
        self._first_unacceptable = 0
        # Bytes not yet assembled, indexed from the first unassembled byte.
        self._window = bytearray()
        # Disjoint, non-adjacent [start, end) ranges held in the window, sorted.
        self._sections: list[tuple[int, int]] = []
        self._eof_seen = False
        self._end_index = 0

    def stream_out(self) -> ByteStream:
        """The reassembled, in-order output stream."""
        return self._output

    def unassembled_bytes(self) -> int:
        """Number of bytes stored but not yet written to the output."""
        return sum(end - start for start, end in self._sections)

    def empty(self) -> bool:
        """Whether no substrings are waiting to be assembled."""
        return not self._sections

    def push_substring(self, data: bytes, index: int, eof: bool) -> None:
        """Accept ``data`` starting at stream position ``index``.

        ``eof`` marks the last byte of ``data`` as the last byte of the stream.
        """
        data = bytes(data)
        end = index + len(data)

        self._sync_window()

        if eof and end <= self._first_unacceptable:
            self._end_index = end
            self._eof_seen = True
            if self._output.bytes_written() == self._end_index:
                self._finish()
                return

        if index >= self._first_unacceptable:
            return
        end = min(end, self._first_unacceptable)
        if end <= self._first_unassembled:
            return

        if index <= self._first_unassembled:
            self._assemble(data, index, end)
        else:
            self._store(data, index, end)

    def _sync_window(self) -> None:
        remaining = self._output.remaining_capacity()
        if len(self._window) == remaining:
            return
        self._first_unacceptable = self._first_unassembled + remaining
        if len(self._window) < remaining:
            self._window.extend(bytes(remaining - len(self._window)))
        else:
            del self._window[remaining:]

    def _finish(self) -> None:
        self._window.clear()
        self._output.end_input()

    def _assemble(self, data: bytes, index: int, end: int) -> None:
        base = self._first_unassembled
        fresh = data[base - index : end - index]
        self._window[: len(fresh)] = fresh

        stop = end
        low, high = index, end
        while self._sections and _touches(low, high, *self._sections[0]):
            start, finish = self._sections.pop(0)
            low, high = min(low, start), max(high, finish)
            stop = high

        count = stop - base
        self._output.write(bytes(self._window[:count]))
        del self._window[:count]
        self._first_unassembled = stop
        self._first_unacceptable = stop + self._output.remaining_capacity()

        if self._eof_seen and self._output.bytes_written() == self._end_index:
            self._finish()

    def _store(self, data: bytes, index: int, end: int) -> None:
        base = self._first_unassembled
        self._window[index - base : end - base] = data[: end - index]

        low, high = index, end
        kept = []
        for start, finish in self._sections:
            if _touches(low, high, start, finish):
                low, high = min(low, start), max(high, finish)
            else:
                kept.append((start, finish))
        bisect.insort(kept, (low, high))
        self._sections = kept