import random

from boxdialog.input import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_END,
    KEY_HOME,
    KEY_LEFT,
    KEY_RIGHT,
    KeyEvent,
    Modifiers,
)
from boxdialog.line_editor import EditMode, LineEditor
from boxdialog.terminal import CursorShape
from boxdialog.utils import Position


def type_text(ed, text):
    for ch in text:
        ed.handle_key(KeyEvent(ch))


def press(ed, key, times=1):
    for _ in range(times):
        ed.handle_key(KeyEvent(key))


def test_typing_past_window_scrolls():
    ed = LineEditor(window_size=5, max_length=10)
    type_text(ed, "ABCDEFG")

    assert ed.buffer == "ABCDEFG"
    assert ed.cursor == 7
    assert ed.window_start == 2

    r = ed.render()
    assert r.text == "CDEFG"
    assert r.left_overflow is True
    # the slice reaches the end of the buffer, so nothing is hidden on the right
    assert r.right_overflow is False
    assert r.padding == 0
    assert r.cursor_column == 6


def test_backspace_pulls_window_back():
    ed = LineEditor(window_size=5, max_length=10)
    type_text(ed, "ABCDEFG")
    press(ed, KEY_BACKSPACE, 3)

    assert ed.buffer == "ABCD"
    assert ed.cursor == 4
    assert ed.window_start == 0

    r = ed.render()
    assert r.text == "ABCD"
    assert not r.left_overflow
    assert not r.right_overflow
    assert r.padding == 1
    assert r.line() == "ABCD_"


def test_overtype_replaces_in_place():
    ed = LineEditor(window_size=5, max_length=10)
    ed.set_value("AB")
    press(ed, KEY_HOME)
    ed.set_mode(EditMode.OVERTYPE)
    ed.handle_key(KeyEvent("X"))

    assert ed.buffer == "XB"
    assert ed.cursor == 1


def test_overtype_at_end_appends_until_full():
    ed = LineEditor(window_size=5, max_length=3, mode=EditMode.OVERTYPE)
    type_text(ed, "ABCD")
    assert ed.buffer == "ABC"
    assert ed.cursor == 3


def test_insert_rejected_when_full_leaves_state_alone():
    ed = LineEditor(window_size=5, max_length=3)
    type_text(ed, "ABC")
    press(ed, KEY_HOME)
    press(ed, KEY_RIGHT)

    assert ed.insert_char("Z") is False
    assert ed.buffer == "ABC"
    assert ed.cursor == 1


def test_insert_in_middle():
    ed = LineEditor(window_size=10, max_length=10)
    type_text(ed, "ac")
    press(ed, KEY_LEFT)
    type_text(ed, "b")
    assert ed.buffer == "abc"
    assert ed.cursor == 2


def test_edges_are_no_ops():
    ed = LineEditor(window_size=5, max_length=10)
    press(ed, KEY_BACKSPACE)
    press(ed, KEY_DELETE)
    press(ed, KEY_LEFT)
    press(ed, KEY_RIGHT)
    assert ed.buffer == ""
    assert ed.cursor == 0

    type_text(ed, "ab")
    press(ed, KEY_RIGHT)
    press(ed, KEY_DELETE)
    assert ed.buffer == "ab"
    assert ed.cursor == 2


def test_delete_removes_char_at_cursor():
    ed = LineEditor(window_size=5, max_length=10)
    type_text(ed, "abc")
    press(ed, KEY_HOME)
    press(ed, KEY_DELETE)
    assert ed.buffer == "bc"
    assert ed.cursor == 0


def test_home_and_end_move_window():
    ed = LineEditor(window_size=5, max_length=10)
    type_text(ed, "ABCDEFG")

    press(ed, KEY_HOME)
    assert ed.window_start == 0
    r = ed.render()
    assert r.text == "ABCDE"
    assert not r.left_overflow
    assert r.right_overflow
    assert r.cursor_column == 0
    assert r.line() == "ABCDE>"

    press(ed, KEY_END)
    assert ed.cursor == 7
    assert ed.window_start == 2


def test_both_indicators_when_scrolled_into_middle():
    ed = LineEditor(window_size=3, max_length=10)
    ed.set_value("abcdef")
    press(ed, KEY_LEFT, 4)
    r = ed.render()
    assert r.text == "cde"
    assert r.left_overflow and r.right_overflow
    assert r.width == 5
    assert r.line(left_indicator="«", right_indicator="»") == "«cde»"


def test_set_value_truncates_and_moves_cursor_to_end():
    ed = LineEditor(window_size=5, max_length=4)
    ed.set_value("abcdefgh")
    assert ed.value == "abcd"
    assert ed.cursor == 4


def test_modified_keys_are_not_inserted():
    ed = LineEditor(window_size=5, max_length=10)
    assert ed.handle_key(KeyEvent("a", Modifiers.CTRL)) is False
    assert ed.handle_key(KeyEvent("KEY_F5")) is False
    assert ed.buffer == ""


def test_mode_and_cursor_shape():
    ed = LineEditor(window_size=5, max_length=10)
    assert ed.cursor_shape is CursorShape.BAR
    assert ed.toggle_mode() is EditMode.OVERTYPE
    assert ed.cursor_shape is CursorShape.UNDERSCORE
    assert ed.toggle_mode() is EditMode.INSERT


def test_cursor_screen_position_counts_left_indicator():
    ed = LineEditor(window_size=3, max_length=10, position=Position(10, 5))
    type_text(ed, "ab")
    assert ed.cursor_screen_position() == Position(12, 5)

    type_text(ed, "cde")
    # window shows "cde" behind the left indicator, cursor just past it
    assert ed.cursor_screen_position() == Position(14, 5)


def test_window_invariant_holds_under_random_editing():
    rng = random.Random(1234)
    keys = [KEY_LEFT, KEY_RIGHT, KEY_HOME, KEY_END, KEY_BACKSPACE, KEY_DELETE, "x", "y", "z"]
    ed = LineEditor(window_size=4, max_length=12)

    for _ in range(2000):
        key = rng.choice(keys)
        if key == "x" and rng.random() < 0.3:
            ed.toggle_mode()
        ed.handle_key(KeyEvent(key))

        n = len(ed)
        assert n <= ed.max_length
        assert 0 <= ed.cursor <= n
        assert ed.window_start <= ed.cursor <= ed.window_start + ed.window_size
        assert ed.window_start <= max(0, n - ed.window_size)

        r = ed.render()
        assert len(r.text) + r.padding == ed.window_size
