"""Fetching cover images over a data channel."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from typing import Any

from .spotify_id import FileId

CMD_IMAGE_REQUEST = 0x19


def request_cover(session: Any, file: FileId) -> Iterator[bytes]:
    """Request the image ``file`` and return an iterator over its data chunks."""
    channel_id, channel = session.channel.allocate()
    packet = struct.pack(">HH", channel_id, 0) + file.data
    session.send_packet(CMD_IMAGE_REQUEST, packet)
    return channel.data()