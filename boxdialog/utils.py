"""
Cell geometry and small helpers shared by the layout and rendering code.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A 0-based cell coordinate (column, row)."""
    x: int = 0
    y: int = 0

    def offset(self, dx: int = 0, dy: int = 0) -> "Position":
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Size:
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class Rect:
    """A rectangular block of cells. `right` and `bottom` are inclusive."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1


def write_all(fd: int, data: bytes) -> None:
    """Write every byte of `data` to `fd`, looping over short writes."""
    if not data:
        return
    view = memoryview(data)
    written = 0
    while written < len(data):
        n = os.write(fd, view[written:])
        if n <= 0:
            raise OSError(f"short write on fd {fd}")
        written += n


def truncate_string(text: str, width: int, ellipsis: str = "") -> str:
    """
    Cut plain text down to `width` cells.

    Args:
        text: Single-width text
        width: Maximum cells
        ellipsis: Marker ending the text when it was cut

    Returns:
        Text no longer than `width`
    """
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    if len(ellipsis) >= width:
        return text[:width]
    return text[: width - len(ellipsis)] + ellipsis
