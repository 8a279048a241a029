"""
Modal dialog boxes.

A `Dialog` owns its controls, lays them out inside a bordered box centered on
the terminal grid, routes key events to the focused control and reports how
it ended. Every drawing call takes the render sink explicitly; one draw is
one flushed frame.

Example:
    >>> dialog = (DialogBuilder("Add Contact")
    ...           .add_field("First Name", 15, 30, tab_index=0)
    ...           .add_button("OK", DialogResult.OK, tab_index=1)
    ...           .add_button("Cancel", DialogResult.CANCEL, tab_index=2)
    ...           .build())
    >>> dialog.show(term)
    >>> rv = dialog.handle_input(term, KeyEvent(KEY_ENTER))
    >>> rv.form_data["First Name"]
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .borders import BorderChars, Borders
from .config import DialogConfig, get_config
from .controls import Button, Control, Field
from .errors import DialogConfigError
from .focus import FocusEngine
from .input import KEY_BACKTAB, KEY_ENTER, KEY_ESC, KEY_INSERT, KEY_TAB, KeyEvent, Modifiers
from .layout import MAX_BUTTONS, Layout, compute_layout
from .line_editor import EditMode
from .results import DialogResult, DialogReturnValue, FormData
from .terminal import RenderSink
from .theme import Color, Colors, DialogColors, build_colors
from .utils import Position, Size, truncate_string

logger = logging.getLogger(__name__)

TITLE_OFFSET = 4


class DialogState(Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"
    TERMINATED = "terminated"


def _tab_order_key(control: Control):
    idx = control.get_tab_index()
    return (idx is None, idx if idx is not None else 0)


class Dialog:
    """
    Bordered modal box with fields and buttons.

    Controls keep their insertion order for layout (fields stack top to
    bottom, buttons fill slots left to right) and are additionally ordered by
    tab index for focus traversal.
    """

    def __init__(self,
                 title: str,
                 controls: Sequence[Control] = (),
                 *,
                 borders: Optional[Borders] = None,
                 margin: Position = Position(2, 1),
                 colors: Optional[DialogColors] = None,
                 overlay: bool = False,
                 fill: bool = True,
                 submit_result: DialogResult = DialogResult.OK,
                 cancel_result: DialogResult = DialogResult.CANCEL):
        """
        Args:
            title: Text shown in the top border
            controls: Fields and buttons, in insertion order
            borders: Edge styles (double box, single separator by default)
            margin: Blank cells between the border and the content
            colors: Zone colors
            overlay: Paint the whole grid behind the dialog
            fill: Paint the dialog interior
            submit_result: Outcome reported on Enter
            cancel_result: Outcome reported on Escape

        Raises:
            DialogConfigError: More than three buttons or a negative margin
        """
        if margin.x < 0 or margin.y < 0:
            raise DialogConfigError(f"margin must be non-negative, got ({margin.x}, {margin.y})")

        self.title = title
        self._controls: List[Control] = list(controls)

        buttons = [c for c in self._controls if isinstance(c, Button)]
        if len(buttons) > MAX_BUTTONS:
            raise DialogConfigError(f"a dialog holds at most {MAX_BUTTONS} buttons, got {len(buttons)}")
        # ordinals belong to this dialog; a control may sit in more than one
        self._slots: Dict[int, int] = {id(b): i for i, b in enumerate(buttons)}
        self._field_rows: Dict[int, int] = {
            id(f): i for i, f in enumerate(c for c in self._controls if isinstance(c, Field))
        }

        self.controls: List[Control] = sorted(self._controls, key=_tab_order_key)
        self.borders = borders if borders is not None else Borders()
        self.chars = BorderChars.from_borders(self.borders)
        self.margin = margin
        self.colors = colors if colors is not None else DialogColors()
        self.overlay = overlay
        self.fill = fill
        self.submit_result = submit_result
        self.cancel_result = cancel_result

        self.focus = FocusEngine(self.controls)
        self.edit_mode = EditMode.INSERT
        self.layout: Optional[Layout] = None
        self.state = DialogState.HIDDEN
        self._grid_size: Optional[Size] = None
        self._result: Optional[DialogReturnValue] = None

    def __repr__(self) -> str:
        return f"Dialog(title={self.title!r}, controls={len(self._controls)}, state={self.state.name})"

    @property
    def is_visible(self) -> bool:
        return self.state is DialogState.VISIBLE

    @property
    def focused(self) -> Optional[Control]:
        return self.focus.focused

    @property
    def fields(self) -> List[Field]:
        return [c for c in self._controls if isinstance(c, Field)]

    @property
    def buttons(self) -> List[Button]:
        return [c for c in self._controls if isinstance(c, Button)]

    @property
    def grid_size(self) -> Optional[Size]:
        """Grid size the current layout was computed for."""
        return self._grid_size

    def field_index(self, field: Field) -> int:
        return self._field_rows[id(field)]

    def slot(self, button: Button) -> int:
        return self._slots[id(button)]

    @property
    def result(self) -> Optional[DialogReturnValue]:
        return self._result

    def get_data(self) -> FormData:
        return FormData(dict(f.get_value() for f in self.fields))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def show(self, sink: RenderSink) -> None:
        """Lay out, draw and flush. Focus goes to the lowest tab index."""
        if self.state is DialogState.TERMINATED:
            logger.debug("show() ignored: dialog %r already terminated", self.title)
            return
        if self.state is DialogState.HIDDEN and self.focus.focused is None:
            self.focus.reset()
        self._layout(sink.query_grid_size())
        self.state = DialogState.VISIBLE
        logger.debug("dialog %r shown", self.title)
        self.draw(sink)

    def hide(self, sink: RenderSink) -> None:
        """Take the dialog off screen, leaving the area blank."""
        if not self.is_visible:
            return
        self.state = DialogState.HIDDEN
        self._erase(sink)
        sink.hide_cursor()
        sink.flush()
        logger.debug("dialog %r hidden", self.title)

    def resize(self, sink: RenderSink) -> None:
        """Force a new layout pass against the current grid size and redraw."""
        if self.layout is not None and self.is_visible:
            self._erase(sink)
        self._layout(sink.query_grid_size())
        if self.is_visible:
            self.draw(sink)

    def poll_resize(self, sink: RenderSink) -> bool:
        """
        Redraw if the grid size changed since the last layout pass.

        Returns:
            True if a redraw happened
        """
        if not self.is_visible or sink.query_grid_size() == self._grid_size:
            return False
        self.draw(sink)
        return True

    def _layout(self, grid: Size) -> None:
        self.layout = compute_layout(self._controls, self.margin, grid)
        self.layout.apply(self._controls)
        self._grid_size = grid

    def _backdrop(self) -> Colors:
        return self.colors.overlay if self.overlay else Colors(Color.DEFAULT, Color.DEFAULT)

    def _interior(self) -> Colors:
        return self.colors.fill if self.fill else self._backdrop()

    def _erase(self, sink: RenderSink) -> None:
        if self.layout is None:
            return
        bg = self._backdrop()
        sink.set_colors(bg.fg, bg.bg)
        sink.clear(self.layout.rect)

    def _terminate(self, result: DialogResult) -> DialogReturnValue:
        self.state = DialogState.TERMINATED
        self._result = DialogReturnValue.quit(result, self.get_data())
        logger.debug("dialog %r terminated with %s", self.title, result.name)
        return self._result

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def draw(self, sink: RenderSink) -> None:
        """Repaint the whole dialog as one frame."""
        if not self.is_visible:
            return

        grid = sink.query_grid_size()
        if self.layout is None or grid != self._grid_size:
            logger.debug("grid size changed to %dx%d", grid.width, grid.height)
            if self.layout is not None and not self.overlay:
                self._erase(sink)
            self._layout(grid)

        if self.overlay:
            sink.set_colors(self.colors.overlay.fg, self.colors.overlay.bg)
            sink.clear()

        self._draw_frame(sink)
        self._draw_title(sink)
        self._draw_separator(sink)

        focused = self.focus.focused
        interior = self._interior()
        for control in self.controls:
            if isinstance(control, Field):
                control.set_mode(self.edit_mode)
            control.draw(sink, self.colors, interior)
            if control is not focused:
                control.hide_focus_indicator(sink, self.colors, interior)

        self._draw_focus(sink)
        sink.flush()

    def _draw_frame(self, sink: RenderSink) -> None:
        rect = self.layout.rect
        border = self.colors.border
        inner = max(0, rect.width - 2)

        sink.set_colors(border.fg, border.bg)
        sink.write_at(rect.x, rect.y, self.chars.top_row(rect.width))
        for yy in range(rect.y + 1, rect.bottom):
            sink.set_colors(border.fg, border.bg)
            sink.write_at(rect.x, yy, self.chars.left)
            if self.fill:
                sink.set_colors(self.colors.fill.fg, self.colors.fill.bg)
                sink.write_text(" " * inner)
            sink.set_colors(border.fg, border.bg)
            sink.write_at(rect.right, yy, self.chars.right)
        sink.write_at(rect.x, rect.bottom, self.chars.bottom_row(rect.width))

    def _draw_title(self, sink: RenderSink) -> None:
        if not self.title:
            return
        rect = self.layout.rect
        room = rect.width - TITLE_OFFSET - 1
        text = truncate_string(f" {self.title} ", room)
        if not text:
            return
        sink.set_colors(self.colors.border.fg, self.colors.border.bg)
        sink.write_at(rect.x + TITLE_OFFSET, rect.y, text)

    def _draw_separator(self, sink: RenderSink) -> None:
        rect = self.layout.rect
        sink.set_colors(self.colors.border.fg, self.colors.border.bg)
        sink.write_at(rect.x, self.layout.separator_row, self.chars.split_row(rect.width))

    def _draw_focus(self, sink: RenderSink) -> None:
        focused = self.focus.focused
        if focused is None:
            sink.hide_cursor()
            return
        focused.show_focus_indicator(sink, self.colors, self.edit_mode)
        if isinstance(focused, Field):
            sink.set_cursor_shape(self.edit_mode.cursor_shape)

    def _refresh_focused(self, sink: RenderSink) -> None:
        # a grid change moves everything, so fall back to a full draw
        if sink.query_grid_size() != self._grid_size:
            self.draw(sink)
            return
        focused = self.focus.focused
        if focused is not None:
            focused.draw(sink, self.colors, self._interior())
        self._draw_focus(sink)
        sink.flush()

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def toggle_mode(self, sink: Optional[RenderSink] = None) -> EditMode:
        """Switch between insert and overtype for every field."""
        self.edit_mode = self.edit_mode.toggled()
        for f in self.fields:
            f.set_mode(self.edit_mode)
        logger.debug("edit mode -> %s", self.edit_mode.name)
        if sink is not None and self.is_visible:
            self._refresh_focused(sink)
        return self.edit_mode

    def _move_focus(self, sink: RenderSink, forward: bool) -> None:
        old = self.focus.focused
        new = self.focus.next() if forward else self.focus.previous()
        if old is not None and old is not new:
            old.hide_focus_indicator(sink, self.colors, self._interior())
        self._refresh_focused(sink)

    def handle_input(self, sink: RenderSink, event: KeyEvent) -> DialogReturnValue:
        """
        Feed one key event to the dialog.

        Args:
            sink: Where redraws go
            event: Decoded keystroke

        Returns:
            should_quit=True with the outcome and the field values once the
            dialog terminates; an empty value otherwise
        """
        if self.state is DialogState.TERMINATED:
            return self._result
        if self.state is DialogState.HIDDEN:
            return DialogReturnValue()

        code = event.code
        if code == KEY_ENTER:
            return self._terminate(self.submit_result)
        if code == KEY_ESC:
            return self._terminate(self.cancel_result)
        if code == KEY_BACKTAB or (code == KEY_TAB and event.has(Modifiers.SHIFT)):
            self._move_focus(sink, forward=False)
            return DialogReturnValue()
        if code == KEY_TAB:
            self._move_focus(sink, forward=True)
            return DialogReturnValue()
        if code == KEY_INSERT:
            self.toggle_mode(sink)
            return DialogReturnValue()

        focused = self.focus.focused
        if focused is None:
            return DialogReturnValue()
        rv = focused.handle_input(event, self.edit_mode)
        if rv.should_quit:
            return self._terminate(rv.dialog_result or self.submit_result)
        self._refresh_focused(sink)
        return rv


class DialogBuilder:
    """
    Fluent construction of a `Dialog`.

    Example:
        >>> dialog = DialogBuilder("Login").set_margin(4, 1).add_field("User", 12, 32, 0).build()
    """

    def __init__(self, title: str = ""):
        self.title = title
        self._controls: List[Control] = []
        self._borders = Borders()
        self._margin = Position(2, 1)
        self._colors: Optional[DialogColors] = None
        self._overlay = False
        self._fill = True
        self._submit = DialogResult.OK
        self._cancel = DialogResult.CANCEL
        self._pad_char = "_"
        self._left_indicator = "<"
        self._right_indicator = ">"

    @classmethod
    def from_config(cls, title: str = "", config: Optional[DialogConfig] = None) -> "DialogBuilder":
        """Seed borders, margin, colors, overlay, fill and pad glyphs from configuration."""
        cfg = get_config().dialog if config is None else config
        b = cfg.borders
        builder = cls(title)
        builder._borders = Borders.parse(b.top, b.left, b.right, b.bottom, b.split)
        builder.set_margin(cfg.margin_x, cfg.margin_y)
        builder._colors = build_colors(config=cfg.colors)
        builder._overlay = cfg.overlay
        builder._fill = cfg.fill
        builder._pad_char = cfg.pad_char
        builder._left_indicator = cfg.left_indicator
        builder._right_indicator = cfg.right_indicator
        return builder

    def set_borders(self, borders: Borders) -> "DialogBuilder":
        self._borders = borders
        return self

    def set_margin(self, x: int, y: int) -> "DialogBuilder":
        if int(x) < 0 or int(y) < 0:
            raise DialogConfigError(f"margin must be non-negative, got ({x}, {y})")
        self._margin = Position(int(x), int(y))
        return self

    def set_colors(self, colors: DialogColors) -> "DialogBuilder":
        self._colors = colors
        return self

    def set_overlay(self, overlay: bool) -> "DialogBuilder":
        self._overlay = bool(overlay)
        return self

    def set_fill(self, fill: bool) -> "DialogBuilder":
        self._fill = bool(fill)
        return self

    def set_submit_result(self, result: DialogResult) -> "DialogBuilder":
        self._submit = result
        return self

    def set_cancel_result(self, result: DialogResult) -> "DialogBuilder":
        self._cancel = result
        return self

    def set_pad_char(self, ch: str) -> "DialogBuilder":
        if not isinstance(ch, str) or len(ch) != 1:
            raise DialogConfigError(f"pad char must be a single character, got {ch!r}")
        self._pad_char = ch
        return self

    def add_field(self,
                  name: str,
                  display_width: int,
                  input_length: int,
                  tab_index: Optional[int] = None,
                  value: str = "") -> "DialogBuilder":
        if display_width < 1:
            raise DialogConfigError(f"field {name!r}: display width must be at least 1, got {display_width}")
        if input_length < 0:
            raise DialogConfigError(f"field {name!r}: input length must be non-negative, got {input_length}")
        return self.add_control(Field(
            name, display_width, input_length, tab_index,
            value=value,
            pad_char=self._pad_char,
            left_indicator=self._left_indicator,
            right_indicator=self._right_indicator,
        ))

    def add_button(self,
                   name: str,
                   result: DialogResult = DialogResult.OK,
                   tab_index: Optional[int] = None) -> "DialogBuilder":
        return self.add_control(Button(name, result, tab_index))

    def add_control(self, control: Control) -> "DialogBuilder":
        if isinstance(control, Button):
            count = sum(1 for c in self._controls if isinstance(c, Button))
            if count >= MAX_BUTTONS:
                raise DialogConfigError(f"a dialog holds at most {MAX_BUTTONS} buttons; cannot add {control.name!r}")
        self._controls.append(control)
        return self

    def build(self) -> Dialog:
        return Dialog(
            self.title,
            self._controls,
            borders=self._borders,
            margin=self._margin,
            colors=self._colors if self._colors is not None else build_colors(),
            overlay=self._overlay,
            fill=self._fill,
            submit_result=self._submit,
            cancel_result=self._cancel,
        )
