"""On-disk cache for credentials and audio files."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import BinaryIO

from .authentication import Credentials
from .spotify_id import FileId
from .util import mkdir_existing


class Cache:
    """A cache directory holding ``credentials.json`` and a ``files`` tree."""

    def __init__(self, location: str | os.PathLike[str], use_audio_cache: bool) -> None:
        self.root = Path(location)
        self.use_audio_cache = use_audio_cache
        mkdir_existing(self.root)
        mkdir_existing(self.root / "files")

    def _credentials_path(self) -> Path:
        return self.root / "credentials.json"

    def credentials(self) -> Credentials | None:
        return Credentials.from_file(self._credentials_path())

    def save_credentials(self, cred: Credentials) -> None:
        cred.save_to_file(self._credentials_path())

    def _file_path(self, file_id: FileId) -> Path:
        name = file_id.to_base16()
        return self.root / "files" / name[:2] / name[2:]

    def file(self, file_id: FileId) -> BinaryIO | None:
        """Open a cached file for reading, or return None if it is absent."""
        try:
            return open(self._file_path(file_id), "rb")
        except OSError:
            return None

    def save_file(self, file_id: FileId, contents: BinaryIO) -> None:
        """Store the stream's contents, if the audio cache is enabled."""
        if not self.use_audio_cache:
            return
        path = self._file_path(file_id)
        mkdir_existing(path.parent)
        with open(path, "wb") as cache_file:
            shutil.copyfileobj(contents, cache_file)