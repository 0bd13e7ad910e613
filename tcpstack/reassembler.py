"""Reassembly of indexed, possibly overlapping substrings into a byte stream."""

from __future__ import annotations

from bisect import bisect_left

from tcpstack.byte_stream import ByteStream, Reader, Writer

_U64_MASK = (1 << 64) - 1


class Reassembler:
    """Collects out-of-order substrings and writes them to a stream in order."""

    def __init__(self, output: ByteStream) -> None:
        self._output = output
        self._next_index = 0
        self._store_start = 0
        self._store: list[tuple[int, str]] = []
        self._pending = 0
        self._finish_end = 0
        self._finish_known = False

    def insert(self, first_index: int, data: str, is_last_substring: bool) -> None:
        """Insert ``data`` starting at stream index ``first_index``.

        Bytes beyond the stream's available capacity are discarded; the stream
        is closed once the last byte has been written.
        """
        writer = self._output.writer()
        capacity = writer.available_capacity()
        if capacity == 0:
            return

        limit = self._next_index + capacity
        end = first_index + len(data)
        if is_last_substring and end <= limit:
            self._finish_known = True
            self._finish_end = end

        if end > limit and first_index <= limit:
            data = data[: limit - first_index]

        self._store_segment(first_index, data)

        if self._store_start <= self._next_index:
            offset = self._next_index - self._store_start
            segment_start = self._store_start
            _, segment = self._pop_first()
            if len(segment) + segment_start >= self._next_index:
                fresh = segment[offset:]
                self._next_index += len(fresh)
                writer.push(fresh)
            if is_last_substring or (
                self._finish_known and self._next_index >= self._finish_end
            ):
                writer.close()

    def bytes_pending(self) -> int:
        """How many bytes are stored in the reassembler itself."""
        return self._pending

    def reader(self) -> Reader:
        """The reading side of the output stream."""
        return self._output.reader()

    def writer(self) -> Writer:
        """The writing side of the output stream."""
        return self._output.writer()

    def _add(self, index: int, segment: str) -> None:
        item = (index, segment)
        position = bisect_left(self._store, item)
        if position < len(self._store) and self._store[position] == item:
            return
        self._store.insert(position, item)

    def _store_segment(self, first_index: int, data: str) -> None:
        if not self._store:
            self._add(first_index, data)
            self._pending += len(data)
            self._store_start = first_index
            return

        last = (first_index + len(data) - 1) & _U64_MASK
        before_start = (self._store_start - 1) & _U64_MASK
        if last == before_start:
            self._store_start = first_index
            _, head = self._store.pop(0)
            self._pending += len(data)
            self._add(first_index, data + head)
            return
        if last < self._store_start:
            self._store_start = first_index
            self._pending += len(data)
            self._add(first_index, data)
            return

        if not data:
            return

        data_end = first_index + len(data)
        merged_start = first_index
        merged_end = data_end
        merged = data
        changed = False
        for segment_start, segment in self._store:
            segment_end = segment_start + len(segment)
            if segment_start <= first_index and segment_end >= merged_end:
                return
            if segment_start <= first_index and segment_end >= first_index:
                merged = segment + data[segment_end - first_index :]
                merged_start = segment_start
                changed = True
            if not changed and segment_start >= first_index and segment_end <= merged_end:
                changed = True
            if segment_start <= data_end and segment_end >= data_end:
                changed = True
                merged_end = segment_end
                merged += segment[data_end - segment_start :]
                break

        if not changed:
            self._add(first_index, data)
            self._pending += len(data)
            return

        self._store = [
            (start, segment)
            for start, segment in self._store
            if not (start >= merged_start and start + len(segment) <= merged_end)
        ]
        self._pending = sum(len(segment) for _, segment in self._store)
        self._add(merged_start, merged)
        if merged_start < self._store_start:
            self._store_start = merged_start
        self._pending += len(merged)

    def _pop_first(self) -> tuple[int, str]:
        index, segment = self._store.pop(0)
        self._pending -= len(segment)
        if self._store:
            self._store_start = self._store[0][0]
        return index, segment