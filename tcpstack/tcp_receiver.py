"""The receiving half of a TCP endpoint."""

from __future__ import annotations

from tcpstack.byte_stream import Reader, Writer
from tcpstack.messages import TCPReceiverMessage, TCPSenderMessage
from tcpstack.reassembler import Reassembler
from tcpstack.wrapping_integers import Wrap32

_U64_MASK = (1 << 64) - 1
_MAX_WINDOW = 0xFFFF


class TCPReceiver:
    """Feeds incoming segments into a reassembler and reports acknowledgments."""

    def __init__(self, reassembler: Reassembler) -> None:
        self._reassembler = reassembler
        self._zero_point = Wrap32(0)
        self._synchronized = False

    def receive(self, message: TCPSenderMessage) -> None:
        """Insert the segment's payload into the reassembler at its stream index."""
        if self.writer().has_error():
            return
        if message.rst:
            self.reader().set_error()
            return

        if not self._synchronized:
            if not message.syn:
                return
            self._zero_point = Wrap32(message.seqno.raw_value)
            self._synchronized = True

        if message.payload and message.seqno == self._zero_point and not message.syn:
            return

        checkpoint = self.writer().bytes_pushed() + 1
        absolute = message.seqno.unwrap(self._zero_point, checkpoint)
        stream_index = (absolute + int(message.syn) - 1) & _U64_MASK
        self._reassembler.insert(stream_index, message.payload, message.fin)

    def send(self) -> TCPReceiverMessage:
        """Build the acknowledgment and window advertisement for the peer."""
        writer = self.writer()
        window_size = min(writer.available_capacity(), _MAX_WINDOW)
        ackno = None
        if self._synchronized:
            absolute_ackno = writer.bytes_pushed() + 1 + int(writer.is_closed())
            ackno = Wrap32.wrap(absolute_ackno, self._zero_point)
        return TCPReceiverMessage(ackno, window_size, writer.has_error())

    def reader(self) -> Reader:
        """The reading side of the reassembled stream."""
        return self._reassembler.reader()

    def writer(self) -> Writer:
        """The writing side of the reassembled stream."""
        return self._reassembler.writer()