"""A view of a seekable stream that starts at a fixed offset."""

from __future__ import annotations

import io
from typing import BinaryIO


class Subfile:
    """Wraps a seekable binary stream so that ``offset`` appears as position 0."""

    def __init__(self, stream: BinaryIO, offset: int) -> None:
        self.stream = stream
        self.offset = offset
        stream.seek(offset, io.SEEK_SET)

    def read(self, size: int = -1) -> bytes:
        return self.stream.read(size)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Seek within the view; positions before its start are reported as 0."""
        if whence == io.SEEK_SET:
            offset += self.offset
        new_position = self.stream.seek(offset, whence)
        if new_position > self.offset:
            return new_position - self.offset
        return 0