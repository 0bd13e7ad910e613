"""User-space TCP components: byte streams, wrapped sequence numbers, messages, reassembly and a receiver."""

__version__ = "0.1.0"