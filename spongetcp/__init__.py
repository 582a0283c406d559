"""User-space TCP building blocks: byte streams, reassembly, headers, segments, adapters and state summaries."""

__version__ = "0.1.0"