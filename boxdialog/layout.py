"""
Dialog geometry.

`compute_layout` is pure: it looks at the controls' labels and widths, the
margin and the grid size and returns where everything goes. Nothing is moved
until `Layout.apply` is called.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .controls import Button, Control, Field
from .errors import DialogConfigError
from .utils import Position, Rect, Size

logger = logging.getLogger(__name__)

MAX_BUTTONS = 3

# border + title row, separator, button row, bottom border
_CHROME_ROWS = 4
_ROWS_PER_FIELD = 2
# columns around a field: left border, ": " after the label, right border
_FIELD_CHROME_COLS = 4
# per-button allowance for the focus brackets and spacing
_BUTTON_PADDING = 6


@dataclass(frozen=True)
class Layout:
    """
    Result of one layout pass.

    Attributes:
        size: Dialog width and height including the border
        origin: Top-left border cell
        positions: One entry per control, in the order given to
                   `compute_layout`; None for controls left unplaced
    """
    size: Size
    origin: Position
    positions: List[Optional[Position]] = field(default_factory=list)

    @property
    def rect(self) -> Rect:
        return Rect(self.origin.x, self.origin.y, self.size.width, self.size.height)

    @property
    def separator_row(self) -> int:
        return self.origin.y + self.size.height - 3

    @property
    def button_row(self) -> int:
        return self.origin.y + self.size.height - 2

    def apply(self, controls: Sequence[Control]) -> None:
        for control, pos in zip(controls, self.positions):
            if pos is not None:
                control.set_position(pos)


def _check_margin(margin: Position) -> None:
    if margin.x < 0 or margin.y < 0:
        raise DialogConfigError(f"margin must be non-negative, got ({margin.x}, {margin.y})")


def dialog_size(controls: Sequence[Control], margin: Position) -> Size:
    """Smallest dialog that fits `controls` with `margin` inside the border."""
    _check_margin(margin)
    fields = [c for c in controls if isinstance(c, Field)]
    buttons = [c for c in controls if isinstance(c, Button)]

    width = 2 + 2 * margin.x
    if fields:
        longest = max(len(f.name) for f in fields)
        # fields that can scroll reserve a column on each side for the overflow markers
        widest = max(f.max_width for f in fields)
        width = max(width, longest + widest + _FIELD_CHROME_COLS + 2 * margin.x)
    if buttons:
        width = max(width, sum(len(b.name) + _BUTTON_PADDING for b in buttons) + 2 * margin.x)

    height = _CHROME_ROWS + _ROWS_PER_FIELD * len(fields) + 2 * margin.y
    return Size(width, height)


def _button_columns(buttons: Sequence[Button], origin: Position, size: Size, margin: Position) -> List[int]:
    n = len(buttons)
    if n > MAX_BUTTONS:
        raise DialogConfigError(f"a dialog holds at most {MAX_BUTTONS} buttons, got {n}")

    left = origin.x + margin.x + 2

    def right(b: Button) -> int:
        return origin.x + size.width - margin.x - 2 - len(b.name)

    def centered(b: Button) -> int:
        return origin.x + (size.width - len(b.name)) // 2

    if n == 1:
        return [centered(buttons[0])]
    if n == 2:
        return [left, right(buttons[1])]
    if n == 3:
        return [left, centered(buttons[1]), right(buttons[2])]
    return []


def compute_layout(controls: Sequence[Control], margin: Position, screen_size: Size) -> Layout:
    """
    Size, center and place a dialog's controls.

    Args:
        controls: Controls in insertion order; fields stack in this order and
                  buttons fill their slots in this order
        margin: Blank cells between the border and the content
        screen_size: Current terminal grid size

    Returns:
        Layout with one position per control

    Raises:
        DialogConfigError: Negative margin or more than three buttons
    """
    size = dialog_size(controls, margin)
    origin = Position(
        max(0, screen_size.width // 2 - size.width // 2),
        max(0, screen_size.height // 2 - size.height // 2),
    )

    fields = [c for c in controls if isinstance(c, Field)]
    buttons = [c for c in controls if isinstance(c, Button)]
    rows = {id(f): i for i, f in enumerate(fields)}
    button_x = dict(zip(map(id, buttons), _button_columns(buttons, origin, size, margin)))
    longest = max((len(f.name) for f in fields), default=0)
    button_y = origin.y + size.height - 2

    positions: List[Optional[Position]] = []
    for control in controls:
        if isinstance(control, Field):
            positions.append(Position(
                origin.x + 1 + margin.x + longest - len(control.name),
                origin.y + 1 + margin.y + _ROWS_PER_FIELD * rows[id(control)],
            ))
        elif isinstance(control, Button):
            positions.append(Position(button_x[id(control)], button_y))
        else:
            positions.append(None)

    logger.debug("layout: size=%dx%d origin=(%d,%d) screen=%dx%d",
                 size.width, size.height, origin.x, origin.y, screen_size.width, screen_size.height)
    return Layout(size=size, origin=origin, positions=positions)
