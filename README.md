# tcpstack

Pieces of a TCP implementation that run entirely in user space. Each piece can
be combined with the others and tested on its own:

- `tcpstack.byte_stream` — `ByteStream` is a bounded in-memory stream of
  characters. Its `writer()` side pushes data, up to the available capacity,
  and closes the stream. Its `reader()` side peeks at buffered data and pops
  it. Both sides can set and query an error flag. The helper
  `read(reader, length)` removes up to `length` characters from a reader and
  returns them.
- `tcpstack.wrapping_integers` — `Wrap32` is a 32-bit sequence number.
  `Wrap32.wrap(n, zero_point)` turns an absolute sequence number into a
  wrapped one. `unwrap(zero_point, checkpoint)` recovers the absolute number
  closest to a checkpoint. Adding an integer with `+` wraps modulo 2**32.
- `tcpstack.messages` — `TCPSenderMessage` carries `seqno`, `syn`, `payload`,
  `fin` and `rst`. Its `sequence_length()` counts SYN and FIN as one sequence
  number each. `TCPReceiverMessage` carries `ackno` (which may be `None`),
  `window_size` and `rst`.
- `tcpstack.reassembler` — `Reassembler` accepts indexed substrings that may
  arrive out of order or overlap, and writes them into its `ByteStream` in
  order. Bytes beyond the stream's available capacity are discarded, and the
  stream is closed once the last substring has been written.
  `bytes_pending()` reports how much is held back waiting for gaps to fill.
- `tcpstack.tcp_receiver` — `TCPReceiver` turns incoming `TCPSenderMessage`s
  into stream data. `send()` reports the acknowledgement number and window
  size. The window is capped at 65535. An incoming RST puts the stream into
  the error state.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from tcpstack.byte_stream import ByteStream, read
from tcpstack.messages import TCPSenderMessage
from tcpstack.reassembler import Reassembler
from tcpstack.tcp_receiver import TCPReceiver
from tcpstack.wrapping_integers import Wrap32

isn = Wrap32(12345)
receiver = TCPReceiver(Reassembler(ByteStream(4000)))

receiver.receive(TCPSenderMessage(seqno=isn, syn=True, payload="hello", fin=True))

ack = receiver.send()
print(ack.ackno == isn + 7)          # True: SYN + 5 bytes + FIN
print(ack.window_size)               # 3995
print(read(receiver.reader(), 100))  # "hello"
print(receiver.reader().is_finished())  # True
```

Wrapping and unwrapping sequence numbers:

```python
from tcpstack.wrapping_integers import Wrap32

Wrap32.wrap(3 * 2**32 + 17, Wrap32(15)) == Wrap32(32)   # True
Wrap32(1).unwrap(Wrap32(0), 2**32 - 1)                   # 4294967297
```

## What this package does not do

The package has no sending side. Nothing in it reads an outbound stream,
fills a peer's window, or retransmits on a timer. The package opens no
sockets or network devices either. Messages are plain Python objects, and
you pass them between components yourself.