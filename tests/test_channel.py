import struct

import pytest

from apclient.channel import (
    ChannelError,
    ChannelManager,
    DataEvent,
    HeaderEvent,
)


class _Owner:
    pass


@pytest.fixture
def manager():
    owner = _Owner()
    mgr = ChannelManager(owner)
    mgr._test_owner = owner
    return mgr


def _packet(channel_id, body=b""):
    return struct.pack(">H", channel_id) + body


def _header(header_id, data):
    return struct.pack(">H", len(data) + 1) + bytes([header_id]) + data


END_OF_HEADERS = b"\x00\x00"


def test_allocate_hands_out_consecutive_ids(manager):
    first, _ = manager.allocate()
    second, _ = manager.allocate()
    assert (first, second) == (0, 1)


def test_poll_decodes_headers_then_data_then_end(manager):
    channel_id, channel = manager.allocate()
    channel.timeout = 1
    manager.dispatch(0x9, _packet(channel_id, _header(1, b"abc") + _header(2, b"") + END_OF_HEADERS))
    manager.dispatch(0x9, _packet(channel_id, b"payload"))
    manager.dispatch(0x9, _packet(channel_id))

    assert channel.poll() == HeaderEvent(1, b"abc")
    assert channel.poll() == HeaderEvent(2, b"")
    assert channel.poll() == DataEvent(b"payload")
    assert channel.poll() is None
    assert channel.closed


def test_poll_after_end_raises(manager):
    channel_id, channel = manager.allocate()
    channel.timeout = 1
    manager.dispatch(0x9, _packet(channel_id, END_OF_HEADERS))
    manager.dispatch(0x9, _packet(channel_id))
    assert channel.poll() is None
    with pytest.raises(ChannelError):
        channel.poll()


def test_error_packet_closes_channel(manager):
    channel_id, channel = manager.allocate()
    channel.timeout = 1
    manager.dispatch(0xA, _packet(channel_id, b"\x00\x02"))
    with pytest.raises(ChannelError):
        channel.poll()
    assert channel.closed


def test_packets_for_unknown_channel_are_dropped(manager):
    channel_id, channel = manager.allocate()
    channel.timeout = 0.01
    manager.dispatch(0x9, _packet(channel_id + 5, END_OF_HEADERS))
    with pytest.raises(TimeoutError):
        channel.poll()


def test_packets_go_to_their_own_channel(manager):
    first_id, first = manager.allocate()
    second_id, second = manager.allocate()
    first.timeout = second.timeout = 1
    manager.dispatch(0x9, _packet(second_id, _header(7, b"two") + END_OF_HEADERS))
    manager.dispatch(0x9, _packet(first_id, _header(3, b"one") + END_OF_HEADERS))
    assert second.poll() == HeaderEvent(7, b"two")
    assert first.poll() == HeaderEvent(3, b"one")


def test_headers_iterator_stops_at_data(manager):
    channel_id, channel = manager.allocate()
    channel.timeout = 1
    manager.dispatch(0x9, _packet(channel_id, _header(1, b"x") + _header(4, b"yz") + END_OF_HEADERS))
    manager.dispatch(0x9, _packet(channel_id, b"first"))
    manager.dispatch(0x9, _packet(channel_id, b"second"))
    manager.dispatch(0x9, _packet(channel_id))

    assert list(channel.headers()) == [(1, b"x"), (4, b"yz")]
    assert list(channel.data()) == [b"second"]


def test_data_iterator_skips_headers(manager):
    channel_id, channel = manager.allocate()
    channel.timeout = 1
    manager.dispatch(0x9, _packet(channel_id, _header(1, b"h") + END_OF_HEADERS))
    for chunk in (b"a", b"b", b"c"):
        manager.dispatch(0x9, _packet(channel_id, chunk))
    manager.dispatch(0x9, _packet(channel_id))
    assert b"".join(channel.data()) == b"abc"


def test_trailing_bytes_after_headers_are_rejected(manager):
    channel_id, channel = manager.allocate()
    channel.timeout = 1
    manager.dispatch(0x9, _packet(channel_id, END_OF_HEADERS + b"junk"))
    with pytest.raises(ChannelError):
        channel.poll()


def test_short_packet_is_rejected(manager):
    with pytest.raises(ChannelError):
        manager.dispatch(0x9, b"\x00")