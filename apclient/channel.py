"""Multiplexed data channels: allocation, routing and per-channel decoding."""

from __future__ import annotations

import enum
import logging
import queue
import struct
import threading
import weakref
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .util import SeqGenerator

logger = logging.getLogger(__name__)

_CMD_CHANNEL_ERROR = 0xA


class ChannelError(Exception):
    """Raised when the server reports a channel error or the stream is misused."""


@dataclass(frozen=True)
class HeaderEvent:
    """A header sent at the start of a channel."""

    header_id: int
    data: bytes


@dataclass(frozen=True)
class DataEvent:
    """A chunk of channel payload."""

    data: bytes


class _State(enum.Enum):
    HEADER = enum.auto()
    DATA = enum.auto()
    CLOSED = enum.auto()


class Channel:
    """The receiving end of one channel.

    Packets routed to the channel are queued; :meth:`poll` decodes them into
    header events, then data events, and finally ``None`` once the server
    sends an empty packet.  ``timeout`` bounds how long a poll waits for the
    next packet (``None`` waits indefinitely).
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout
        self._packets: queue.SimpleQueue[tuple[int, bytes]] = queue.SimpleQueue()
        self._state = _State.HEADER
        self._header_buffer = b""

    @property
    def closed(self) -> bool:
        return self._state is _State.CLOSED

    def _deliver(self, cmd: int, data: bytes) -> None:
        self._packets.put((cmd, bytes(data)))

    def _recv_packet(self) -> bytes:
        try:
            cmd, packet = self._packets.get(timeout=self.timeout)
        except queue.Empty:
            raise TimeoutError("no packet arrived on the channel") from None
        if cmd == _CMD_CHANNEL_ERROR:
            code = struct.unpack_from(">H", packet)[0] if len(packet) >= 2 else None
            logger.error("channel error: %d %s", len(packet), code)
            self._state = _State.CLOSED
            raise ChannelError(f"channel error code {code}")
        return packet

    def poll(self) -> HeaderEvent | DataEvent | None:
        """Return the next event, or ``None`` when the channel has ended."""
        while True:
            if self._state is _State.CLOSED:
                raise ChannelError("polling already terminated channel")

            if self._state is _State.HEADER:
                data = self._header_buffer or self._recv_packet()
                if len(data) < 2:
                    raise ChannelError("truncated channel header")
                (length,) = struct.unpack_from(">H", data)
                data = data[2:]
                if length == 0:
                    if data:
                        raise ChannelError("unexpected bytes after channel headers")
                    self._header_buffer = b""
                    self._state = _State.DATA
                    continue
                if len(data) < length:
                    raise ChannelError("truncated channel header")
                event = HeaderEvent(data[0], data[1:length])
                self._header_buffer = data[length:]
                return event

            packet = self._recv_packet()
            if not packet:
                self._state = _State.CLOSED
                return None
            return DataEvent(packet)

    def headers(self) -> Iterator[tuple[int, bytes]]:
        """Yield ``(header_id, data)`` pairs until the headers are done.

        The poll that ends the headers consumes the event that follows them.
        """
        while True:
            event = self.poll()
            if not isinstance(event, HeaderEvent):
                return
            yield event.header_id, event.data

    def data(self) -> Iterator[bytes]:
        """Yield payload chunks, skipping headers, until the channel ends."""
        while True:
            event = self.poll()
            if event is None:
                return
            if isinstance(event, DataEvent):
                yield event.data


class ChannelManager:
    """Allocates channel ids and routes incoming channel packets."""

    def __init__(self, session: Any) -> None:
        logger.debug("new ChannelManager")
        self._session_ref = weakref.ref(session)
        self._lock = threading.Lock()
        self._sequence = SeqGenerator(0, bits=16)
        self._channels: dict[int, Channel] = {}

    def _session(self) -> Any:
        session = self._session_ref()
        if session is None:
            raise RuntimeError("Session died")
        return session

    def allocate(self) -> tuple[int, Channel]:
        """Reserve a new channel id and return it with its channel."""
        channel = Channel()
        with self._lock:
            seq = self._sequence.get()
            self._channels[seq] = channel
        return seq, channel

    def dispatch(self, cmd: int, data: bytes) -> None:
        """Route a packet whose first two bytes name the channel."""
        if len(data) < 2:
            raise ChannelError("channel packet too short")
        (channel_id,) = struct.unpack_from(">H", data)
        with self._lock:
            channel = self._channels.get(channel_id)
        if channel is not None and not channel.closed:
            channel._deliver(cmd, data[2:])