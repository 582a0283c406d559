# spongetcp

Pure-Python building blocks for a TCP implementation that runs in user space.
The package has no third-party dependencies.

## What is inside

- `spongetcp.byte_stream.ByteStream(capacity)` is a flow-controlled, in-order
  byte stream held in memory.
  - Writer side: `write(data)` accepts as many bytes as fit and returns the count.
    The other writer calls are `remaining_capacity()`, `end_input()` and `set_error()`.
  - Reader side: `peek_output(n)`, `pop_output(n)`, `read(n)`, `buffer_size()`,
    `buffer_empty()`, `input_ended()`, `eof()` and `error()`.
  - Accounting: `bytes_written()` and `bytes_read()`.
- `spongetcp.stream_reassembler.StreamReassembler(capacity)` accepts substrings
  through `push_substring(data, index, eof)`. They may arrive out of order or
  overlap. Bytes that have become contiguous are written to `stream_out()`, which
  is a `ByteStream`.
  - Bytes outside the capacity window are discarded.
  - `unassembled_bytes()` and `empty()` report what is held back.
- `spongetcp.ipv4_header` has these parts:
  - `IPv4Header`, with `parse`, `serialize`, `payload_length`, `pseudo_cksum`,
    `to_string` and `summary`.
  - `internet_checksum(data, initial=0)`, the ones'-complement checksum.
  - The `ParseError` family of exceptions: `PacketTooShort`, `WrongIPVersion`,
    `HeaderTooShort`, `TruncatedPacket` and `BadChecksum`.
- `spongetcp.tcp_header.TCPHeader` has `parse`, `serialize`, `to_string` and
  `summary`. Equality between headers ignores the ports and the checksum.
- `spongetcp.segment` holds `TCPSegment` and `IPv4Datagram`.
  - Their `parse` class methods verify checksums and lengths.
  - Their `serialize` methods compute fresh checksums.
  - `TCPSegment.length_in_sequence_space()` counts the payload plus SYN and FIN.
- `spongetcp.tcp_config` holds two classes:
  - `TCPConfig`, with the retransmission timeout, capacities and an optional fixed ISN.
  - `FdAdapterConfig`, with source and destination addresses and ports, and 16-bit
    loss rates. `FdAdapterConfig.loss_rate_from_fraction(p)` converts a
    probability to a loss rate.
- `spongetcp.tcp_over_ip.TCPOverIPv4Adapter` works in both directions.
  - `wrap_tcp_in_ip(segment)` sets the segment's ports and wraps it in an
    addressed `IPv4Datagram`.
  - `unwrap_tcp_in_ip(datagram)` returns the segment only if it belongs to the
    configured connection. While `listening`, a SYN without RST fixes the peer's
    address and port.
- `spongetcp.lossy_adapter.LossyAdapter(adapter, rng=None)` wraps any object that
  has `read()`, `write(segment)`, `config`, `listening` and `tick(ms)`.
  - It drops reads and writes at random, at the configuration's `loss_rate_dn` and
    `loss_rate_up`.
  - Its `config()` method returns the wrapped adapter's configuration.
  - `set_listening()` and `tick()` pass through to the wrapped adapter.
- `spongetcp.tcp_state` holds the official connection `State` names. It also has
  the `ReceiverSummary` and `SenderSummary` descriptions, and `TCPState`.
  - A `TCPState` pairs the two summaries with the active and linger flags.
  - `TCPState.from_state(State.ESTABLISHED)` builds the summary for an official
    state.
  - A `TCPState` compares equal to a `State` member when it matches that state.
  - `name()` describes the state in one line.

## Example

```python
from spongetcp.stream_reassembler import StreamReassembler

r = StreamReassembler(65000)
r.push_substring(b"b", 1, False)
r.push_substring(b"a", 0, False)
assert r.stream_out().read(2) == b"ab"
```

## What the package does not do

The package provides the pieces, not a working TCP endpoint. It has none of the following:

- a TCP sender, a TCP receiver or a connection state machine;
- sockets, TUN devices, UDP transport or an event loop;
- command-line programs.

`TCPState` is built from summary strings that you supply. The package does not
derive them from live sender and receiver objects.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```