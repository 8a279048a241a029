"""
Rendering sinks.

Everything that draws takes a `RenderSink` argument. Draw calls are queued
and land on the terminal in issue order when `flush()` is called, so one
`Dialog.draw()` reaches the screen as a single frame.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, Optional

from . import ansi
from .errors import TerminalError
from .theme import Color
from .utils import Rect, Size, write_all

logger = logging.getLogger(__name__)


class CursorShape(Enum):
    BAR = "bar"
    UNDERSCORE = "underscore"


class RenderSink:
    """Cell-addressed, 0-based drawing surface."""

    def move_cursor(self, x: int, y: int) -> None:
        raise NotImplementedError

    def write_text(self, text: str) -> None:
        raise NotImplementedError

    def set_colors(self, fg: Color, bg: Color) -> None:
        raise NotImplementedError

    def clear(self, region: Optional[Rect] = None) -> None:
        raise NotImplementedError

    def set_cursor_shape(self, shape: CursorShape) -> None:
        raise NotImplementedError

    def show_cursor(self) -> None:
        raise NotImplementedError

    def hide_cursor(self) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        raise NotImplementedError

    def query_grid_size(self) -> Size:
        raise NotImplementedError

    def write_at(self, x: int, y: int, text: str) -> None:
        self.move_cursor(x, y)
        self.write_text(text)


class AnsiTerminal(RenderSink):
    """
    Render sink that speaks ANSI/VT100 to a file descriptor.

    Example:
        >>> term = AnsiTerminal()
        >>> with term.session():
        ...     dialog.show(term)
    """

    def __init__(self, fd: Optional[int] = None, *, encoding: str = "utf-8"):
        self.fd = sys.stdout.fileno() if fd is None else int(fd)
        self.encoding = encoding
        self._frame: List[str] = []

    def move_cursor(self, x: int, y: int) -> None:
        self._frame.append(ansi.goto_xy(max(0, int(x)), max(0, int(y))))

    def write_text(self, text: str) -> None:
        if text:
            self._frame.append(text)

    def set_colors(self, fg: Color, bg: Color) -> None:
        self._frame.append(ansi.set_colors(fg.value, bg.value))

    def clear(self, region: Optional[Rect] = None) -> None:
        if region is None:
            self._frame.append(ansi.CLEAR_SCREEN)
            return
        blank = " " * max(0, region.width)
        for yy in range(region.y, region.y + region.height):
            self.move_cursor(region.x, yy)
            self._frame.append(blank)

    def set_cursor_shape(self, shape: CursorShape) -> None:
        self._frame.append(ansi.CURSOR_BAR if shape is CursorShape.BAR else ansi.CURSOR_UNDERSCORE)

    def show_cursor(self) -> None:
        self._frame.append(ansi.SHOW_CURSOR)

    def hide_cursor(self) -> None:
        self._frame.append(ansi.HIDE_CURSOR)

    def flush(self) -> None:
        if not self._frame:
            return
        data = "".join(self._frame).encode(self.encoding, errors="replace")
        self._frame.clear()
        try:
            write_all(self.fd, data)
        except OSError as e:
            raise TerminalError(f"Failed to write frame to fd {self.fd}: {e}") from e

    def query_grid_size(self) -> Size:
        try:
            sz = os.get_terminal_size(self.fd)
        except OSError as e:
            raise TerminalError(f"Failed to query terminal size on fd {self.fd}: {e}") from e
        return Size(sz.columns, sz.lines)

    @property
    def pending(self) -> int:
        """Number of queued writes not yet flushed."""
        return len(self._frame)

    @contextmanager
    def session(self) -> Iterator["AnsiTerminal"]:
        """Switch to the alternate screen for the duration of the block."""
        self._frame.append(ansi.ENTER_ALT_SCREEN)
        self._frame.append(ansi.CLEAR_SCREEN)
        self.flush()
        logger.debug("entered alternate screen on fd %d", self.fd)
        try:
            yield self
        finally:
            self._frame.clear()
            self._frame.append(ansi.RESET)
            self._frame.append(ansi.CURSOR_DEFAULT)
            self._frame.append(ansi.SHOW_CURSOR)
            self._frame.append(ansi.LEAVE_ALT_SCREEN)
            self.flush()
            logger.debug("left alternate screen on fd %d", self.fd)
