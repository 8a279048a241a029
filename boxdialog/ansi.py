"""
ANSI escape sequences for cursor movement, color and screen control.

Every helper returns the sequence as a string; nothing here writes to the
terminal. `AnsiTerminal` collects these into a frame and flushes it.
"""

from typing import Optional

CSI = "\x1b["

RESET = "\x1b[0m"

# Text styles
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
UNDERLINE = "\x1b[4m"
BLINK = "\x1b[5m"
REVERSE = "\x1b[7m"

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"

ENTER_ALT_SCREEN = "\x1b[?1049h"
LEAVE_ALT_SCREEN = "\x1b[?1049l"

CLEAR_SCREEN = "\x1b[2J"
CLEAR_LINE = "\x1b[2K"

# DECSCUSR: 6 = steady bar, 4 = steady underline
CURSOR_BAR = "\x1b[6 q"
CURSOR_UNDERSCORE = "\x1b[4 q"
CURSOR_DEFAULT = "\x1b[0 q"

# Color codes, indexed like the SGR 30-37 / 90-97 ranges
FG_BASE = 30
BG_BASE = 40
FG_BRIGHT_BASE = 90
BG_BRIGHT_BASE = 100
FG_DEFAULT = 39
BG_DEFAULT = 49


def goto_xy(x: int, y: int) -> str:
    """
    Move cursor to a cell.

    Args:
        x: Column (0-indexed)
        y: Row (0-indexed)
    """
    return f"{CSI}{int(y) + 1};{int(x) + 1}H"


def sgr(*codes: int) -> str:
    """Build a Select Graphic Rendition sequence from numeric codes."""
    if not codes:
        return RESET
    return CSI + ";".join(str(int(c)) for c in codes) + "m"


def fg_code(index: Optional[int]) -> int:
    """SGR foreground code for a 0-15 palette index (None = terminal default)."""
    if index is None:
        return FG_DEFAULT
    i = int(index)
    return FG_BASE + i if i < 8 else FG_BRIGHT_BASE + (i - 8)


def bg_code(index: Optional[int]) -> int:
    """SGR background code for a 0-15 palette index (None = terminal default)."""
    if index is None:
        return BG_DEFAULT
    i = int(index)
    return BG_BASE + i if i < 8 else BG_BRIGHT_BASE + (i - 8)


def set_colors(fg: Optional[int], bg: Optional[int]) -> str:
    return sgr(fg_code(fg), bg_code(bg))
