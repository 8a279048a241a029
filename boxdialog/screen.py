from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .terminal import CursorShape, RenderSink
from .theme import Color
from .utils import Rect, Size


DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


@dataclass(frozen=True)
class Cell:
    ch: str = " "
    fg: Color = Color.DEFAULT
    bg: Color = Color.DEFAULT


@dataclass
class ShadowScreen(RenderSink):
    """In-memory render sink.

    Keeps a grid of cells plus the cursor state so drawing code can run
    without a terminal. Writes past the right edge are dropped rather than
    wrapped.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    cursor_x: int = 0
    cursor_y: int = 0
    fg: Color = Color.DEFAULT
    bg: Color = Color.DEFAULT
    cursor_visible: bool = True
    cursor_shape: Optional[CursorShape] = None
    flush_count: int = 0
    _cells: List[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self._cells:
            self._cells = [Cell() for _ in range(self.width * self.height)]

    def _idx(self, x: int, y: int) -> int:
        return int(y) * self.width + int(x)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Cell:
        if not self._in_bounds(x, y):
            return Cell()
        return self._cells[self._idx(x, y)]

    def set_cell(self, x: int, y: int, ch: str, fg: Optional[Color] = None, bg: Optional[Color] = None) -> None:
        if not self._in_bounds(x, y):
            return
        s = ch[0] if ch else " "
        self._cells[self._idx(x, y)] = Cell(s, self.fg if fg is None else fg, self.bg if bg is None else bg)

    def move_cursor(self, x: int, y: int) -> None:
        self.cursor_x = max(0, min(int(x), self.width - 1))
        self.cursor_y = max(0, min(int(y), self.height - 1))

    def write_text(self, text: str) -> None:
        for ch in "" if text is None else str(text):
            self.set_cell(self.cursor_x, self.cursor_y, ch)
            self.cursor_x += 1

    def set_colors(self, fg: Color, bg: Color) -> None:
        self.fg = fg
        self.bg = bg

    def clear(self, region: Optional[Rect] = None) -> None:
        if region is None:
            region = Rect(0, 0, self.width, self.height)
        for yy in range(region.y, region.y + region.height):
            for xx in range(region.x, region.x + region.width):
                self.set_cell(xx, yy, " ")

    def set_cursor_shape(self, shape: CursorShape) -> None:
        self.cursor_shape = shape

    def show_cursor(self) -> None:
        self.cursor_visible = True

    def hide_cursor(self) -> None:
        self.cursor_visible = False

    def flush(self) -> None:
        self.flush_count += 1

    def query_grid_size(self) -> Size:
        return Size(self.width, self.height)

    def resize(self, width: int, height: int) -> None:
        """Change the grid size, keeping whatever still fits."""
        old = [(x, y, self.get_cell(x, y)) for y in range(self.height) for x in range(self.width)]
        self.width = int(width)
        self.height = int(height)
        self._cells = [Cell() for _ in range(self.width * self.height)]
        for x, y, cell in old:
            if self._in_bounds(x, y):
                self._cells[self._idx(x, y)] = cell
        self.move_cursor(self.cursor_x, self.cursor_y)

    def get_cursor(self) -> Tuple[int, int]:
        return (self.cursor_x, self.cursor_y)

    def row_text(self, y: int, x: int = 0, width: Optional[int] = None) -> str:
        """Characters of row `y` from column `x`, `width` cells long."""
        w = self.width - x if width is None else width
        return "".join(self.get_cell(xx, y).ch for xx in range(x, x + w))

    def dump(self) -> str:
        return "\n".join(self.row_text(y) for y in range(self.height))
