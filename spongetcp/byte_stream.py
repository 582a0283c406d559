"""A flow-controlled, in-order byte stream held in memory."""

from __future__ import annotations


class ByteStream:
    """A finite byte stream with a fixed capacity.

    Bytes are written on the input side and read from the output side.
    The writer may end the input; once the buffered bytes have all been
    read after that, the stream is at end of file.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._buffer = bytearray()
        self._input_ended = False
        self._eof = False
        self._bytes_written = 0
        self._bytes_read = 0
        self._error = False

    @property
    def capacity(self) -> int:
        """The maximum number of bytes the stream buffers at once."""
        return self._capacity

    # Writer side

    def write(self, data: bytes) -> int:
        """Write as much of ``data`` as fits and return how many bytes were accepted."""
        if self._eof:
            return 0
        accepted = bytes(data[: self.remaining_capacity()])
        self._buffer += accepted
        self._bytes_written += len(accepted)
        return len(accepted)

    def remaining_capacity(self) -> int:
        """Number of additional bytes the stream has room for."""
        return self._capacity - len(self._buffer)

    def end_input(self) -> None:
        """Signal that no more bytes will be written."""
        self._input_ended = True
        if not self._buffer:
            self._eof = True

    def set_error(self) -> None:
        """Mark the stream as having suffered an error."""
        self._error = True

    # Reader side

    def peek_output(self, length: int) -> bytes:
        """Return up to ``length`` bytes from the front without removing them."""
        if length < 0:
            raise ValueError("length must not be negative")
        return bytes(self._buffer[:length])

    def pop_output(self, length: int) -> None:
        """Remove up to ``length`` bytes from the front of the buffer."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length >= len(self._buffer):
            if self._input_ended:
                self._eof = True
            popped = len(self._buffer)
            self._buffer.clear()
        else:
            popped = length
            del self._buffer[:length]
        self._bytes_read += popped

    def read(self, length: int) -> bytes:
        """Remove and return up to ``length`` bytes from the front."""
        data = self.peek_output(length)
        self.pop_output(length)
        return data

    def input_ended(self) -> bool:
        """Whether the writer has ended the input."""
        return self._input_ended

    def error(self) -> bool:
        """Whether the stream has suffered an error."""
        return self._error

    def buffer_size(self) -> int:
        """Number of bytes that can currently be read."""
        return len(self._buffer)

    def buffer_empty(self) -> bool:
        """Whether nothing is buffered."""
        return not self._buffer

    def eof(self) -> bool:
        """Whether the output has reached the end of the stream."""
        return self._eof

    # Accounting

    def bytes_written(self) -> int:
        """Total number of bytes accepted by ``write``."""
        return self._bytes_written

    def bytes_read(self) -> int:
        """Total number of bytes popped from the stream."""
        return self._bytes_read