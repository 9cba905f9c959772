import io

from apclient.subfile import Subfile


def make():
    stream = io.BytesIO(b"0123456789")
    return stream, Subfile(stream, 3)


def test_construction_moves_to_offset():
    stream, _ = make()
    assert stream.tell() == 3


def test_read_starts_at_offset():
    _, sub = make()
    assert sub.read(2) == b"34"
    assert sub.read() == b"56789"


def test_seek_start_is_relative_to_offset():
    _, sub = make()
    sub.read(4)
    assert sub.seek(0) == 0
    assert sub.read(1) == b"3"
    assert sub.seek(2) == 2
    assert sub.read(1) == b"5"


def test_seek_current():
    _, sub = make()
    sub.read(1)
    assert sub.seek(2, io.SEEK_CUR) == 3
    assert sub.read(1) == b"6"


def test_seek_end():
    _, sub = make()
    assert sub.seek(-1, io.SEEK_END) == 6
    assert sub.read() == b"9"


def test_seek_before_offset_reports_zero():
    stream, sub = make()
    assert sub.seek(-8, io.SEEK_END) == 0
    assert stream.tell() == 2