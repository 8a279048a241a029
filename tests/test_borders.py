import pytest

from boxdialog.borders import BorderChars, Borders, BorderStyle
from boxdialog.errors import DialogConfigError


def test_default_is_double_box_with_single_split():
    chars = BorderChars.from_borders(Borders())
    assert chars.top_row(5) == "╔═══╗"
    assert chars.bottom_row(5) == "╚═══╝"
    assert chars.split_row(5) == "╟───╢"
    assert (chars.left, chars.right) == ("║", "║")


def test_uniform_single():
    chars = BorderChars.from_borders(Borders.uniform("single"))
    assert chars.top_row(3) == "┌─┐"
    assert chars.bottom_row(3) == "└─┘"
    assert chars.split_row(3) == "├─┤"


def test_mixed_edges_pick_matching_corners():
    b = Borders(
        top=BorderStyle.DOUBLE,
        left=BorderStyle.SINGLE,
        right=BorderStyle.DOUBLE,
        bottom=BorderStyle.SINGLE,
        split=BorderStyle.DOUBLE,
    )
    chars = BorderChars.from_borders(b)
    assert chars.tl == "╒"
    assert chars.tr == "╗"
    assert chars.bl == "└"
    assert chars.br == "╜"
    assert chars.left_intersect == "╞"
    assert chars.right_intersect == "╣"


def test_every_combination_has_glyphs():
    styles = list(BorderStyle)
    for top in styles:
        for side in styles:
            for split in styles:
                chars = BorderChars.from_borders(Borders(top, side, side, top, split))
                assert all(len(getattr(chars, name)) == 1 for name in (
                    "tl", "tr", "bl", "br", "left_intersect", "right_intersect"))


def test_rows_narrower_than_two_are_empty():
    chars = BorderChars.from_borders(Borders())
    assert chars.top_row(1) == ""
    assert chars.split_row(0) == ""


def test_parse_styles():
    assert Borders.parse("single", "DOUBLE", " single ", "double", "single").left is BorderStyle.DOUBLE
    with pytest.raises(DialogConfigError):
        BorderStyle.parse("dotted")
