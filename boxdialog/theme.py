from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Optional

from .config import DialogColorConfig, get_config
from .errors import DialogConfigError


class Color(Enum):
    """The 16-color terminal palette, plus the terminal's own default."""

    DEFAULT = None
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    BRIGHT_BLACK = 8
    BRIGHT_RED = 9
    BRIGHT_GREEN = 10
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_MAGENTA = 13
    BRIGHT_CYAN = 14
    BRIGHT_WHITE = 15

    @classmethod
    def parse(cls, name: str) -> "Color":
        key = str(name).strip().upper().replace("-", "_").replace(" ", "_")
        if key in _COLOR_ALIASES:
            key = _COLOR_ALIASES[key]
        try:
            return cls[key]
        except KeyError:
            raise DialogConfigError(f"Unknown color name: {name!r}") from None


_COLOR_ALIASES: Dict[str, str] = {
    "GREY": "BRIGHT_BLACK",
    "GRAY": "BRIGHT_BLACK",
    "DARK_GREY": "BRIGHT_BLACK",
    "DARK_GRAY": "BRIGHT_BLACK",
    "LIGHT_GREY": "WHITE",
    "LIGHT_GRAY": "WHITE",
    "NONE": "DEFAULT",
}


@dataclass(frozen=True)
class Colors:
    fg: Color = Color.WHITE
    bg: Color = Color.BLACK


def parse_colors(text: str) -> Colors:
    """
    Parse a "<fg> on <bg>" color pair.

    Example:
        >>> parse_colors("bright white on blue")
        Colors(fg=<Color.BRIGHT_WHITE: 15>, bg=<Color.BLUE: 4>)
    """
    raw = "" if text is None else str(text).strip()
    if not raw:
        raise DialogConfigError("Empty color pair")
    parts = raw.lower().split(" on ")
    if len(parts) > 2:
        raise DialogConfigError(f"Malformed color pair: {text!r}")
    fg = Color.parse(parts[0])
    bg = Color.parse(parts[1]) if len(parts) == 2 else Color.DEFAULT
    return Colors(fg=fg, bg=bg)


@dataclass
class DialogColors:
    """Colors for each zone of a dialog."""

    border: Colors = field(default_factory=lambda: Colors(Color.WHITE, Color.BLACK))
    fill: Colors = field(default_factory=lambda: Colors(Color.WHITE, Color.BLACK))
    overlay: Colors = field(default_factory=lambda: Colors(Color.WHITE, Color.BLACK))
    label: Colors = field(default_factory=lambda: Colors(Color.WHITE, Color.BLACK))
    input: Colors = field(default_factory=lambda: Colors(Color.WHITE, Color.BLACK))
    input_indicator: Colors = field(default_factory=lambda: Colors(Color.WHITE, Color.BLACK))
    button: Colors = field(default_factory=lambda: Colors(Color.WHITE, Color.BLACK))
    button_focus: Colors = field(default_factory=lambda: Colors(Color.WHITE, Color.BLACK))

    def zone(self, name: str) -> Colors:
        return getattr(self, name)


def build_colors(*, source: Optional[DialogColors] = None, config: Optional[DialogColorConfig] = None) -> DialogColors:
    if source is not None:
        return copy.deepcopy(source)

    cfg_colors = get_config().dialog.colors if config is None else config

    out = DialogColors()
    for f in fields(DialogColors):
        pair = getattr(cfg_colors, f.name)
        setattr(out, f.name, parse_colors(pair))
    return out
