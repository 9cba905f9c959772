"""Requests for the decryption keys of audio files."""

from __future__ import annotations

import logging
import struct
import threading
import weakref
from concurrent.futures import Future
from typing import Any

from .spotify_id import FileId, SpotifyId
from .util import SeqGenerator

logger = logging.getLogger(__name__)

CMD_REQUEST_KEY = 0xC
CMD_AES_KEY = 0xD
CMD_AES_KEY_ERROR = 0xE

_KEY_SIZE = 16


class AudioKeyError(Exception):
    """Raised when the server refuses or fails to supply an audio key."""


class AudioKeyManager:
    """Sends key requests and completes them as answers arrive."""

    def __init__(self, session: Any) -> None:
        logger.debug("new AudioKeyManager")
        self._session_ref = weakref.ref(session)
        self._lock = threading.Lock()
        self._sequence = SeqGenerator(0, bits=32)
        self._pending: dict[int, Future[bytes]] = {}

    def _session(self) -> Any:
        session = self._session_ref()
        if session is None:
            raise RuntimeError("Session died")
        return session

    def request(self, track: SpotifyId, file: FileId) -> Future[bytes]:
        """Ask for the key of ``file`` in ``track``; the future yields 16 bytes."""
        session = self._session()
        future: Future[bytes] = Future()
        with self._lock:
            seq = self._sequence.get()
            self._pending[seq] = future
        packet = file.data + track.to_raw() + struct.pack(">IH", seq, 0)
        session.send_packet(CMD_REQUEST_KEY, packet)
        return future

    def dispatch(self, cmd: int, data: bytes) -> None:
        """Complete the pending request named by the packet's sequence number."""
        if len(data) < 4:
            raise AudioKeyError("audio key packet too short")
        (seq,) = struct.unpack_from(">I", data)
        body = data[4:]
        with self._lock:
            future = self._pending.pop(seq, None)
        if future is None or future.done():
            return

        if cmd == CMD_AES_KEY and len(body) == _KEY_SIZE:
            future.set_result(bytes(body))
        elif cmd == CMD_AES_KEY:
            future.set_exception(AudioKeyError(f"audio key of {len(body)} bytes"))
        elif cmd == CMD_AES_KEY_ERROR:
            logger.warning("error audio key %s", body[:2].hex(" "))
            future.set_exception(AudioKeyError(f"audio key error {body[:2].hex()}"))
        else:
            future.set_exception(AudioKeyError(f"unexpected command {cmd:#x}"))