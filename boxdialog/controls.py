"""
Dialog controls: text fields and buttons.

Both variants share the small `Control` interface the dialog drives. Controls
are only positioned by the layout pass; until then `position` is None and
drawing is a no-op.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .input import KeyEvent
from .line_editor import EditMode, LineEditor
from .results import DialogResult, DialogReturnValue
from .terminal import RenderSink
from .theme import Colors, DialogColors
from .utils import Position

logger = logging.getLogger(__name__)

# Key that activates a focused button. Enter is taken by the dialog's submit.
SELECT_KEY = " "

LABEL_SUFFIX = ": "


def _paint(sink: RenderSink, colors: Colors, text: str) -> None:
    if not text:
        return
    sink.set_colors(colors.fg, colors.bg)
    sink.write_text(text)


class Control:
    """Interface shared by every control a dialog can hold."""

    name: str
    tab_index: Optional[int]
    position: Optional[Position]

    def draw(self, sink: RenderSink, colors: DialogColors, background: Optional[Colors] = None) -> None:
        """Paint the control. Cells it blanks take `background`, or the fill colors when None."""
        raise NotImplementedError

    def handle_input(self, event: KeyEvent, mode: EditMode) -> DialogReturnValue:
        raise NotImplementedError

    def show_focus_indicator(self, sink: RenderSink, colors: DialogColors, mode: EditMode) -> None:
        raise NotImplementedError

    def hide_focus_indicator(self, sink: RenderSink, colors: DialogColors, background: Optional[Colors] = None) -> None:
        raise NotImplementedError

    def set_position(self, position: Position) -> None:
        self.position = position

    def get_tab_index(self) -> Optional[int]:
        return self.tab_index

    def get_name(self) -> str:
        return self.name

    def get_value(self) -> Optional[Tuple[str, str]]:
        return None

    @property
    def focusable(self) -> bool:
        return self.tab_index is not None


class Field(Control):
    """
    Labeled single-line text entry.

    Example:
        >>> f = Field("First Name", display_width=15, input_length=30, tab_index=0)
        >>> f.handle_input(KeyEvent("J"), EditMode.INSERT).should_quit
        False
        >>> f.get_value()
        ('First Name', 'J')
    """

    def __init__(self,
                 name: str,
                 display_width: int,
                 input_length: int,
                 tab_index: Optional[int] = None,
                 value: str = "",
                 pad_char: str = "_",
                 left_indicator: str = "<",
                 right_indicator: str = ">"):
        self.name = str(name)
        self.display_width = max(1, int(display_width))
        self.input_length = max(0, int(input_length))
        self.tab_index = tab_index
        self.position: Optional[Position] = None
        self.left_indicator = left_indicator
        self.right_indicator = right_indicator
        self.input = LineEditor(self.display_width, self.input_length, pad_char=pad_char)
        if value:
            self.input.set_value(value)
        self.value = self.input.value
        self._drawn_width = 0

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, tab_index={self.tab_index!r}, value={self.value!r})"

    @property
    def label(self) -> str:
        return self.name + LABEL_SUFFIX

    @property
    def scrolls(self) -> bool:
        return self.input_length > self.display_width

    @property
    def max_width(self) -> int:
        """Widest the input can draw, overflow markers included."""
        return self.display_width + (2 if self.scrolls else 0)

    @property
    def input_position(self) -> Optional[Position]:
        if self.position is None:
            return None
        return self.input.position

    def set_position(self, position: Position) -> None:
        self.position = position
        self.input.set_position(position.offset(len(self.name) + len(LABEL_SUFFIX), 0))

    def set_mode(self, mode: EditMode) -> None:
        self.input.set_mode(mode)

    def draw(self, sink: RenderSink, colors: DialogColors, background: Optional[Colors] = None) -> None:
        if self.position is None:
            return
        sink.move_cursor(self.position.x, self.position.y)
        _paint(sink, colors.label, self.label)
        self.draw_input(sink, colors, background)

    def draw_input(self, sink: RenderSink, colors: DialogColors, background: Optional[Colors] = None) -> None:
        if self.position is None:
            return
        r = self.input.render()
        pos = self.input.position
        sink.move_cursor(pos.x, pos.y)
        if r.left_overflow:
            _paint(sink, colors.input_indicator, self.left_indicator)
        _paint(sink, colors.input, r.text)
        if r.right_overflow:
            _paint(sink, colors.input_indicator, self.right_indicator)
        _paint(sink, colors.input, self.input.pad_char * r.padding)

        # blank cells an earlier, wider render left behind
        stale = self._drawn_width - r.width
        if stale > 0:
            _paint(sink, colors.fill if background is None else background, " " * stale)
        self._drawn_width = r.width

    def handle_input(self, event: KeyEvent, mode: EditMode) -> DialogReturnValue:
        self.input.set_mode(mode)
        self.input.handle_key(event)
        self.value = self.input.value
        return DialogReturnValue()

    def show_focus_indicator(self, sink: RenderSink, colors: DialogColors, mode: EditMode) -> None:
        if self.position is None:
            return
        self.input.set_mode(mode)
        caret = self.input.cursor_screen_position()
        sink.set_cursor_shape(mode.cursor_shape)
        sink.move_cursor(caret.x, caret.y)
        sink.show_cursor()

    def hide_focus_indicator(self, sink: RenderSink, colors: DialogColors, background: Optional[Colors] = None) -> None:
        sink.hide_cursor()

    def get_value(self) -> Optional[Tuple[str, str]]:
        return (self.name, self.value)


class Button(Control):
    """Push button that ends the dialog with its outcome tag."""

    def __init__(self, name: str, result: DialogResult = DialogResult.OK, tab_index: Optional[int] = None):
        self.name = str(name)
        self.result = result
        self.tab_index = tab_index
        self.position: Optional[Position] = None

    def __repr__(self) -> str:
        return f"Button(name={self.name!r}, result={self.result!r}, tab_index={self.tab_index!r})"

    def draw(self, sink: RenderSink, colors: DialogColors, background: Optional[Colors] = None) -> None:
        if self.position is None:
            return
        sink.move_cursor(self.position.x, self.position.y)
        _paint(sink, colors.button, self.name)

    def handle_input(self, event: KeyEvent, mode: EditMode) -> DialogReturnValue:
        if event.code == SELECT_KEY:
            logger.debug("button %r activated", self.name)
            return DialogReturnValue.quit(self.result)
        return DialogReturnValue()

    def _brackets(self, sink: RenderSink, colors: Colors, left: str, right: str) -> None:
        if self.position is None:
            return
        sink.move_cursor(self.position.x - 1, self.position.y)
        _paint(sink, colors, left)
        sink.move_cursor(self.position.x + len(self.name), self.position.y)
        _paint(sink, colors, right)

    def show_focus_indicator(self, sink: RenderSink, colors: DialogColors, mode: EditMode) -> None:
        sink.hide_cursor()
        self._brackets(sink, colors.button_focus, "[", "]")

    def hide_focus_indicator(self, sink: RenderSink, colors: DialogColors, background: Optional[Colors] = None) -> None:
        self._brackets(sink, colors.fill if background is None else background, " ", " ")
