import pytest

from tcpstack.byte_stream import ByteStream, read


def test_push_then_peek_returns_data():
    stream = ByteStream(15)
    data = "hello"
    stream.writer().push(data)
    assert stream.reader().peek() == data
    assert stream.writer().bytes_pushed() == len(data)
    assert stream.reader().bytes_buffered() == len(data)


def test_available_plus_buffered_equals_capacity():
    capacity = 10
    stream = ByteStream(capacity)
    for chunk in ["ab", "cde", "f"]:
        stream.writer().push(chunk)
        assert (
            stream.writer().available_capacity() + stream.reader().bytes_buffered()
            == capacity
        )


def test_push_is_truncated_to_capacity():
    capacity = 3
    data = "abcdef"
    stream = ByteStream(capacity)
    stream.writer().push(data)
    assert stream.reader().peek() == data[:capacity]
    assert stream.writer().bytes_pushed() == capacity
    assert stream.writer().available_capacity() == 0


def test_push_into_full_stream_is_ignored():
    capacity = 2
    stream = ByteStream(capacity)
    stream.writer().push("xy")
    stream.writer().push("zz")
    assert stream.reader().peek() == "xy"
    assert stream.writer().bytes_pushed() == capacity


def test_pop_frees_capacity():
    capacity = 4
    stream = ByteStream(capacity)
    stream.writer().push("abcd")
    stream.reader().pop(1)
    assert stream.reader().peek() == "abcd"[1:]
    assert stream.writer().available_capacity() + stream.reader().bytes_buffered() == capacity
    stream.writer().push("ef")
    assert stream.reader().peek() == "bcd" + "e"


def test_pop_more_than_buffered_empties():
    data = "abc"
    stream = ByteStream(10)
    stream.writer().push(data)
    stream.reader().pop(100)
    assert stream.reader().peek() == ""
    assert stream.reader().bytes_popped() == len(data)
    assert stream.reader().bytes_buffered() == 0


def test_finished_only_after_close_and_drain():
    stream = ByteStream(8)
    stream.writer().push("ab")
    assert stream.reader().is_finished() is False
    stream.writer().close()
    assert stream.writer().is_closed() is True
    assert stream.reader().is_finished() is False
    stream.reader().pop(2)
    assert stream.reader().is_finished() is True


def test_empty_closed_stream_is_finished():
    stream = ByteStream(8)
    stream.writer().close()
    assert stream.reader().is_finished() is True


def test_error_is_shared_between_views():
    stream = ByteStream(8)
    assert stream.reader().has_error() is False
    stream.writer().set_error()
    assert stream.reader().has_error() is True
    assert stream.has_error() is True


def test_reader_can_set_error():
    stream = ByteStream(8)
    stream.reader().set_error()
    assert stream.writer().has_error() is True


def test_views_share_state_across_calls():
    stream = ByteStream(8)
    first_writer = stream.writer()
    first_writer.push("a")
    stream.writer().push("b")
    assert stream.reader().peek() == "ab"
    first_reader = stream.reader()
    first_reader.pop(1)
    assert stream.reader().bytes_popped() == 1
    assert stream.reader().peek() == "b"


def test_read_takes_prefix():
    data = "hello world"
    stream = ByteStream(64)
    stream.writer().push(data)
    assert read(stream.reader(), 5) == data[:5]
    assert stream.reader().peek() == data[5:]
    assert stream.reader().bytes_popped() == 5


def test_read_more_than_buffered_returns_everything():
    data = "xyz"
    stream = ByteStream(64)
    stream.writer().push(data)
    assert read(stream.reader(), 1000) == data
    assert stream.reader().bytes_buffered() == 0


def test_read_zero_returns_empty():
    stream = ByteStream(64)
    stream.writer().push("abc")
    assert read(stream.reader(), 0) == ""
    assert stream.reader().peek() == "abc"


def test_popped_plus_buffered_equals_pushed():
    stream = ByteStream(5)
    for chunk in ["abc", "defg", "hi"]:
        stream.writer().push(chunk)
        read(stream.reader(), 2)
        assert (
            stream.reader().bytes_popped() + stream.reader().bytes_buffered()
            == stream.writer().bytes_pushed()
        )


def test_negative_capacity_is_rejected():
    with pytest.raises(ValueError):
        ByteStream(-1)