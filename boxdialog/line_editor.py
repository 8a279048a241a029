"""
Single-line editor with a horizontally scrolling window.

The editor holds more text than it can show. `window_start` is the first
buffer offset on screen; `render()` describes what a field of `window_size`
cells should display without touching the terminal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .input import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_END,
    KEY_HOME,
    KEY_LEFT,
    KEY_RIGHT,
    KeyEvent,
    Modifiers,
    is_printable,
)
from .terminal import CursorShape
from .utils import Position

logger = logging.getLogger(__name__)


class EditMode(Enum):
    INSERT = "insert"
    OVERTYPE = "overtype"

    def toggled(self) -> "EditMode":
        return EditMode.OVERTYPE if self is EditMode.INSERT else EditMode.INSERT

    @property
    def cursor_shape(self) -> CursorShape:
        return CursorShape.BAR if self is EditMode.INSERT else CursorShape.UNDERSCORE


@dataclass(frozen=True)
class LineRender:
    """What an editor looks like on screen.

    Attributes:
        text: Visible slice of the buffer
        left_overflow: Buffer text is hidden to the left
        right_overflow: Buffer text is hidden to the right
        padding: Number of pad glyphs following the text
        cursor_column: Cursor offset from the editor's screen position
    """
    text: str
    left_overflow: bool
    right_overflow: bool
    padding: int
    cursor_column: int

    @property
    def width(self) -> int:
        return int(self.left_overflow) + len(self.text) + int(self.right_overflow) + self.padding

    def line(self, pad_char: str = "_", left_indicator: str = "<", right_indicator: str = ">") -> str:
        return (
            (left_indicator if self.left_overflow else "")
            + self.text
            + (right_indicator if self.right_overflow else "")
            + (pad_char * self.padding)
        )


class LineEditor:
    """
    Bounded text buffer edited in place.

    Example:
        >>> ed = LineEditor(window_size=5, max_length=10)
        >>> for ch in "ABCDEFG":
        ...     ed.insert_char(ch)
        >>> ed.render().text
        'CDEFG'
    """

    def __init__(self,
                 window_size: int,
                 max_length: int,
                 position: Optional[Position] = None,
                 pad_char: str = "_",
                 mode: EditMode = EditMode.INSERT):
        """
        Args:
            window_size: Number of buffer characters visible at once
            max_length: Buffer capacity
            position: Screen cell of the first visible column
            pad_char: Glyph filling unused window cells
            mode: Initial edit mode
        """
        self.window_size = max(1, int(window_size))
        self.max_length = max(0, int(max_length))
        self.position = position if position is not None else Position()
        self.pad_char = pad_char[:1] or " "
        self.edit_mode = mode
        self._buffer: List[str] = []
        self.cursor = 0
        self.window_start = 0

    @property
    def buffer(self) -> str:
        return "".join(self._buffer)

    @property
    def value(self) -> str:
        return self.buffer

    def __len__(self) -> int:
        return len(self._buffer)

    def set_value(self, text: str) -> None:
        """Replace the buffer, truncated to capacity, with the cursor at the end."""
        self._buffer = list(("" if text is None else str(text))[: self.max_length])
        self.window_start = 0
        self._set_cursor(len(self._buffer))

    def set_position(self, position: Position) -> None:
        self.position = position

    def set_mode(self, mode: EditMode) -> None:
        self.edit_mode = mode

    def toggle_mode(self) -> EditMode:
        self.edit_mode = self.edit_mode.toggled()
        return self.edit_mode

    @property
    def cursor_shape(self) -> CursorShape:
        return self.edit_mode.cursor_shape

    def handle_key(self, event: KeyEvent) -> bool:
        """
        Apply one key event.

        Returns:
            True if the key was one the editor understands (whether or not it
            changed anything)
        """
        code = event.code

        if code == KEY_LEFT:
            self.move_left()
        elif code == KEY_RIGHT:
            self.move_right()
        elif code == KEY_HOME:
            self._set_cursor(0)
        elif code == KEY_END:
            self._set_cursor(len(self._buffer))
        elif code == KEY_BACKSPACE:
            self.backspace()
        elif code == KEY_DELETE:
            self.delete()
        elif event.is_char and is_printable(code) and not event.has(Modifiers.CTRL | Modifiers.ALT):
            self.insert_char(code)
        else:
            return False
        return True

    def move_left(self) -> None:
        if self.cursor > 0:
            self._set_cursor(self.cursor - 1)

    def move_right(self) -> None:
        if self.cursor < len(self._buffer):
            self._set_cursor(self.cursor + 1)

    def backspace(self) -> None:
        if self.cursor > 0:
            self._buffer.pop(self.cursor - 1)
            self._set_cursor(self.cursor - 1)

    def delete(self) -> None:
        if self.cursor < len(self._buffer):
            self._buffer.pop(self.cursor)
            self._adjust_window()

    def insert_char(self, ch: str) -> bool:
        """
        Insert or overtype one character at the cursor.

        Returns:
            False if the character was rejected (buffer full)
        """
        n = len(self._buffer)
        if self.edit_mode is EditMode.OVERTYPE and self.cursor < n:
            self._buffer[self.cursor] = ch
        elif n >= self.max_length:
            return False
        else:
            self._buffer.insert(self.cursor, ch)
        self._set_cursor(self.cursor + 1)
        return True

    def _set_cursor(self, pos: int) -> None:
        self.cursor = max(0, min(int(pos), len(self._buffer)))
        self._adjust_window()

    def _adjust_window(self) -> None:
        if self.cursor < self.window_start:
            self.window_start = self.cursor
        # strict '>' lets the cursor rest on the cell just past the window
        elif self.cursor > self.window_start + self.window_size:
            self.window_start = self.cursor - self.window_size
        # pull back when the buffer shrank so the window stays filled
        self.window_start = max(0, min(self.window_start, len(self._buffer) - self.window_size))

    def render(self) -> LineRender:
        n = len(self._buffer)
        end = min(self.window_start + self.window_size, n)
        text = "".join(self._buffer[self.window_start:end])
        left = self.window_start > 0
        return LineRender(
            text=text,
            left_overflow=left,
            right_overflow=end < n,
            padding=max(0, self.window_size - len(text)),
            cursor_column=(self.cursor - self.window_start) + (1 if left else 0),
        )

    def cursor_screen_position(self) -> Position:
        return self.position.offset(self.render().cursor_column, 0)
