"""An authenticated session: shared state and routing of incoming packets."""

from __future__ import annotations

import hashlib
import itertools
import logging
import queue
import threading

from .audio_key import AudioKeyManager
from .cache import Cache
from .channel import ChannelManager
from .config import SessionConfig

logger = logging.getLogger(__name__)

CMD_PING = 0x4
CMD_PONG = 0x49
CMD_PONG_ACK = 0x4A
CMD_COUNTRY_CODE = 0x1B
_CHANNEL_COMMANDS = frozenset({0x9, 0xA})
_AUDIO_KEY_COMMANDS = frozenset({0xD, 0xE})
_MERCURY_COMMANDS = range(0xB2, 0xB7)

_session_counter = itertools.count()


def device_id(name: str) -> str:
    """Derive a device id as the hex SHA-1 of ``name``."""
    return hashlib.sha1(name.encode("utf-8")).hexdigest()


class Session:
    """State shared by the components of one connection.

    Outgoing packets are queued on :attr:`outgoing` as ``(cmd, data)`` pairs
    for the transport to send.
    """

    def __init__(
        self,
        config: SessionConfig,
        username: str,
        cache: Cache | None = None,
    ) -> None:
        self._config = config
        self._cache = cache
        self._lock = threading.Lock()
        self._username = username
        self._country = ""
        self._session_id = next(_session_counter)
        self._audio_key: AudioKeyManager | None = None
        self._channel: ChannelManager | None = None
        self.outgoing: queue.SimpleQueue[tuple[int, bytes]] = queue.SimpleQueue()
        logger.debug("new Session[%d]", self._session_id)

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def cache(self) -> Cache | None:
        return self._cache

    @property
    def username(self) -> str:
        with self._lock:
            return self._username

    @property
    def country(self) -> str:
        with self._lock:
            return self._country

    @property
    def device_id(self) -> str:
        return self._config.device_id

    @property
    def session_id(self) -> int:
        return self._session_id

    @property
    def audio_key(self) -> AudioKeyManager:
        with self._lock:
            if self._audio_key is None:
                self._audio_key = AudioKeyManager(self)
            return self._audio_key

    @property
    def channel(self) -> ChannelManager:
        with self._lock:
            if self._channel is None:
                self._channel = ChannelManager(self)
            return self._channel

    def send_packet(self, cmd: int, data: bytes) -> None:
        """Queue a packet for the transport."""
        self.outgoing.put((cmd, bytes(data)))

    def dispatch(self, cmd: int, data: bytes) -> None:
        """Handle one packet received from the server."""
        if cmd == CMD_PING:
            logger.debug("Session[%d] ping", self._session_id)
            self.send_packet(CMD_PONG, data)
        elif cmd == CMD_PONG_ACK:
            pass
        elif cmd == CMD_COUNTRY_CODE:
            country = bytes(data).decode("utf-8")
            logger.info("Country: %r", country)
            with self._lock:
                self._country = country
        elif cmd in _CHANNEL_COMMANDS:
            self.channel.dispatch(cmd, data)
        elif cmd in _AUDIO_KEY_COMMANDS:
            self.audio_key.dispatch(cmd, data)
        elif cmd in _MERCURY_COMMANDS:
            logger.debug("Session[%d] ignoring mercury packet %#x", self._session_id, cmd)

    def __repr__(self) -> str:
        return f"Session(id={self._session_id}, username={self.username!r})"