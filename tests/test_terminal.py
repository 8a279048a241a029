import os

import pytest

from boxdialog import ansi
from boxdialog.errors import TerminalError
from boxdialog.terminal import AnsiTerminal, CursorShape
from boxdialog.theme import Color
from boxdialog.utils import Rect


def drain(fd):
    return os.read(fd, 65536).decode("utf-8")


@pytest.fixture
def pipe():
    r, w = os.pipe()
    yield r, w
    for fd in (r, w):
        try:
            os.close(fd)
        except OSError:
            pass


def test_writes_are_buffered_until_flush(pipe):
    r, w = pipe
    term = AnsiTerminal(w)
    term.move_cursor(0, 0)
    term.write_text("hi")
    assert term.pending == 2

    term.flush()
    assert term.pending == 0
    assert drain(r) == "\x1b[1;1Hhi"


def test_colors_cursor_and_clear(pipe):
    r, w = pipe
    term = AnsiTerminal(w)
    term.set_colors(Color.WHITE, Color.BLUE)
    term.set_cursor_shape(CursorShape.UNDERSCORE)
    term.hide_cursor()
    term.clear(Rect(2, 1, 3, 2))
    term.flush()
    assert drain(r) == (
        "\x1b[37;44m"
        + ansi.CURSOR_UNDERSCORE
        + ansi.HIDE_CURSOR
        + "\x1b[2;3H   "
        + "\x1b[3;3H   "
    )


def test_default_and_bright_colors():
    assert ansi.set_colors(Color.BRIGHT_YELLOW.value, Color.DEFAULT.value) == "\x1b[93;49m"


def test_session_switches_alternate_screen(pipe):
    r, w = pipe
    term = AnsiTerminal(w)
    with term.session():
        assert drain(r) == ansi.ENTER_ALT_SCREEN + ansi.CLEAR_SCREEN
        term.write_text("discarded")
    out = drain(r)
    assert "discarded" not in out
    assert out.endswith(ansi.SHOW_CURSOR + ansi.LEAVE_ALT_SCREEN)


def test_flush_failure_raises_terminal_error(pipe):
    r, w = pipe
    term = AnsiTerminal(w)
    os.close(w)
    term.write_text("x")
    with pytest.raises(TerminalError) as exc:
        term.flush()
    assert isinstance(exc.value, OSError)


def test_grid_size_on_non_terminal_raises(pipe):
    _, w = pipe
    with pytest.raises(TerminalError):
        AnsiTerminal(w).query_grid_size()
