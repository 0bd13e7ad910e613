"""A bounded in-memory byte stream with separate writer and reader views."""

from __future__ import annotations


class ByteStream:
    """A stream of bytes that holds at most ``capacity`` unread bytes at once."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._buffer = ""
        self._closed = False
        self._error = False
        self._pushed = 0
        self._popped = 0
        self._reader = Reader(self)
        self._writer = Writer(self)

    def reader(self) -> Reader:
        """Return the reading side of this stream."""
        return self._reader

    def writer(self) -> Writer:
        """Return the writing side of this stream."""
        return self._writer

    def set_error(self) -> None:
        """Signal that the stream suffered an error."""
        self._error = True

    def has_error(self) -> bool:
        """Whether the stream has had an error."""
        return self._error


class _StreamView:
    __slots__ = ("_stream",)

    def __init__(self, stream: ByteStream) -> None:
        self._stream = stream


class Writer(_StreamView):
    """The writing side of a :class:`ByteStream`."""

    __slots__ = ()

    def push(self, data: str) -> None:
        """Append as much of ``data`` as the available capacity allows."""
        stream = self._stream
        room = self.available_capacity()
        if room == 0:
            return
        accepted = data[:room]
        stream._pushed += len(accepted)
        stream._buffer += accepted

    def close(self) -> None:
        """Signal that nothing more will be written."""
        self._stream._closed = True

    def is_closed(self) -> bool:
        """Whether the stream has been closed."""
        return self._stream._closed

    def available_capacity(self) -> int:
        """How many bytes can be pushed right now."""
        return self._stream.capacity - len(self._stream._buffer)

    def bytes_pushed(self) -> int:
        """Total number of bytes pushed so far."""
        return self._stream._pushed

    def set_error(self) -> None:
        """Signal that the underlying stream suffered an error."""
        self._stream.set_error()

    def has_error(self) -> bool:
        """Whether the underlying stream has had an error."""
        return self._stream.has_error()


class Reader(_StreamView):
    """The reading side of a :class:`ByteStream`."""

    __slots__ = ()

    def peek(self) -> str:
        """Return the bytes currently buffered, without removing them."""
        return self._stream._buffer

    def pop(self, length: int) -> None:
        """Remove up to ``length`` bytes from the front of the buffer."""
        stream = self._stream
        taken = min(length, len(stream._buffer))
        stream._buffer = stream._buffer[taken:]
        stream._popped += taken

    def is_finished(self) -> bool:
        """Whether the stream is closed and every byte has been popped."""
        return not self._stream._buffer and self._stream._closed

    def bytes_buffered(self) -> int:
        """Number of bytes pushed and not yet popped."""
        return len(self._stream._buffer)

    def bytes_popped(self) -> int:
        """Total number of bytes popped so far."""
        return self._stream._popped

    def set_error(self) -> None:
        """Signal that the underlying stream suffered an error."""
        self._stream.set_error()

    def has_error(self) -> bool:
        """Whether the underlying stream has had an error."""
        return self._stream.has_error()


def read(reader: Reader, length: int) -> str:
    """Peek and pop up to ``length`` bytes from ``reader`` and return them."""
    parts: list[str] = []
    collected = 0
    while reader.bytes_buffered() and collected < length:
        view = reader.peek()
        if not view:
            raise RuntimeError("Reader.peek() returned an empty string")
        view = view[: length - collected]
        parts.append(view)
        collected += len(view)
        reader.pop(len(view))
    return "".join(parts)