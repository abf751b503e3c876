"""Character to UTF-8 byte offset mapping for error positions."""

from __future__ import annotations

from bisect import bisect_right
from typing import Final

_ASCII_LIMIT: Final = 127


class UTF8PositionMapper:
    """Maps code-point offsets in a document to UTF-8 byte offsets.

    Rather than storing the byte offset of every character, the mapper keeps
    checkpoints at regular character intervals and walks forward from the
    nearest one. Pure-ASCII documents skip the walk entirely since both
    offsets coincide.
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        """Initialize position mapper with checkpoint system.

        Args:
            text: The document the offsets refer to
            checkpoint_interval: Characters between checkpoints (default 256)
        """
        if checkpoint_interval < 1:
            raise ValueError("checkpoint_interval must be positive")

        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        self.is_ascii_only: Final = text.isascii()
        self._char_checkpoints: list[int] = []
        self._byte_checkpoints: list[int] = []

        if not self.is_ascii_only:
            self._build_checkpoints()

    def _build_checkpoints(self) -> None:
        """Records the byte offset at every checkpoint boundary."""
        byte_pos = 0
        for char_pos, char in enumerate(self.text):
            if char_pos % self.checkpoint_interval == 0:
                self._char_checkpoints.append(char_pos)
                self._byte_checkpoints.append(byte_pos)
            byte_pos += _utf8_width(char)

    def char_to_byte(self, char_pos: int) -> int:
        """Convert a code-point offset to a UTF-8 byte offset.

        Offsets past the end of the text clamp to the encoded length.
        """
        if char_pos < 0:
            raise ValueError("char_pos must be non-negative")
        if self.is_ascii_only:
            return min(char_pos, len(self.text))

        char_pos = min(char_pos, len(self.text))
        index = bisect_right(self._char_checkpoints, char_pos) - 1
        if index < 0:
            return 0

        byte_pos = self._byte_checkpoints[index]
        for char in self.text[self._char_checkpoints[index] : char_pos]:
            byte_pos += _utf8_width(char)
        return byte_pos


def _utf8_width(char: str) -> int:
    """Number of bytes ``char`` occupies in UTF-8."""
    code_point = ord(char)
    if code_point <= _ASCII_LIMIT:
        return 1
    if code_point < 0x800:
        return 2
    if code_point < 0x10000:
        return 3
    return 4
