"""
Box drawing glyphs for dialog borders.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .errors import DialogConfigError


class BorderStyle(Enum):
    SINGLE = "single"
    DOUBLE = "double"

    @classmethod
    def parse(cls, value: "str | BorderStyle") -> "BorderStyle":
        if isinstance(value, BorderStyle):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise DialogConfigError(f"Unknown border style: {value!r}") from None


_S = BorderStyle.SINGLE
_D = BorderStyle.DOUBLE

_LINE: Dict[BorderStyle, Tuple[str, str]] = {
    # (horizontal, vertical)
    _S: ("─", "│"),
    _D: ("═", "║"),
}

# Keyed by (horizontal edge, vertical edge).
_TOP_LEFT = {(_S, _S): "┌", (_S, _D): "╓", (_D, _S): "╒", (_D, _D): "╔"}
_TOP_RIGHT = {(_S, _S): "┐", (_S, _D): "╖", (_D, _S): "╕", (_D, _D): "╗"}
_BOTTOM_LEFT = {(_S, _S): "└", (_S, _D): "╙", (_D, _S): "╘", (_D, _D): "╚"}
_BOTTOM_RIGHT = {(_S, _S): "┘", (_S, _D): "╜", (_D, _S): "╛", (_D, _D): "╝"}

# Keyed by (vertical edge, split line).
_LEFT_TEE = {(_S, _S): "├", (_S, _D): "╞", (_D, _S): "╟", (_D, _D): "╠"}
_RIGHT_TEE = {(_S, _S): "┤", (_S, _D): "╡", (_D, _S): "╢", (_D, _D): "╣"}


@dataclass(frozen=True)
class Borders:
    """Line style for each edge of a dialog, plus the button separator."""

    top: BorderStyle = BorderStyle.DOUBLE
    left: BorderStyle = BorderStyle.DOUBLE
    right: BorderStyle = BorderStyle.DOUBLE
    bottom: BorderStyle = BorderStyle.DOUBLE
    split: BorderStyle = BorderStyle.SINGLE

    @classmethod
    def uniform(cls, style: "str | BorderStyle") -> "Borders":
        st = BorderStyle.parse(style)
        return cls(top=st, left=st, right=st, bottom=st, split=st)

    @classmethod
    def parse(cls, top: str, left: str, right: str, bottom: str, split: str) -> "Borders":
        return cls(
            top=BorderStyle.parse(top),
            left=BorderStyle.parse(left),
            right=BorderStyle.parse(right),
            bottom=BorderStyle.parse(bottom),
            split=BorderStyle.parse(split),
        )


@dataclass(frozen=True)
class BorderChars:
    tl: str
    tr: str
    bl: str
    br: str
    top: str
    left: str
    right: str
    bottom: str
    left_intersect: str
    right_intersect: str
    split: str

    @classmethod
    def from_borders(cls, borders: Borders) -> "BorderChars":
        return cls(
            tl=_TOP_LEFT[(borders.top, borders.left)],
            tr=_TOP_RIGHT[(borders.top, borders.right)],
            bl=_BOTTOM_LEFT[(borders.bottom, borders.left)],
            br=_BOTTOM_RIGHT[(borders.bottom, borders.right)],
            top=_LINE[borders.top][0],
            left=_LINE[borders.left][1],
            right=_LINE[borders.right][1],
            bottom=_LINE[borders.bottom][0],
            left_intersect=_LEFT_TEE[(borders.left, borders.split)],
            right_intersect=_RIGHT_TEE[(borders.right, borders.split)],
            split=_LINE[borders.split][0],
        )

    def top_row(self, width: int) -> str:
        if width < 2:
            return ""
        return self.tl + (self.top * (width - 2)) + self.tr

    def bottom_row(self, width: int) -> str:
        if width < 2:
            return ""
        return self.bl + (self.bottom * (width - 2)) + self.br

    def split_row(self, width: int) -> str:
        if width < 2:
            return ""
        return self.left_intersect + (self.split * (width - 2)) + self.right_intersect
