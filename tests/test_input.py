import os

import pytest

from boxdialog.input import (
    KEY_BACKSPACE,
    KEY_BACKTAB,
    KEY_DELETE,
    KEY_END,
    KEY_ENTER,
    KEY_ESC,
    KEY_F2,
    KEY_F5,
    KEY_HOME,
    KEY_INSERT,
    KEY_RIGHT,
    KEY_TAB,
    KEY_UP,
    KeyEvent,
    Modifiers,
    RawInput,
    decode_control_byte,
    is_printable,
    parse_ansi_sequence,
)


@pytest.fixture
def pipe():
    r, w = os.pipe()
    yield r, w
    for fd in (r, w):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.mark.parametrize("seq, expected", [
    ("\x1b[A", KeyEvent(KEY_UP)),
    ("\x1b[1;5C", KeyEvent(KEY_RIGHT, Modifiers.CTRL)),
    ("\x1b[1;2H", KeyEvent(KEY_HOME, Modifiers.SHIFT)),
    ("\x1b[F", KeyEvent(KEY_END)),
    ("\x1b[2~", KeyEvent(KEY_INSERT)),
    ("\x1b[3~", KeyEvent(KEY_DELETE)),
    ("\x1b[15~", KeyEvent(KEY_F5)),
    ("\x1b[Z", KeyEvent(KEY_BACKTAB, Modifiers.SHIFT)),
    ("\x1bOQ", KeyEvent(KEY_F2)),
])
def test_parse_ansi_sequence(seq, expected):
    assert parse_ansi_sequence(seq) == expected


@pytest.mark.parametrize("seq", ["\x1b[99~", "\x1b[~", "\x1bOZ", "junk"])
def test_parse_ansi_sequence_unknown(seq):
    assert parse_ansi_sequence(seq) is None


def test_decode_control_bytes():
    assert decode_control_byte(0x0D) == KeyEvent(KEY_ENTER)
    assert decode_control_byte(0x09) == KeyEvent(KEY_TAB)
    assert decode_control_byte(0x7F) == KeyEvent(KEY_BACKSPACE)
    assert decode_control_byte(0x11) == KeyEvent("q", Modifiers.CTRL)
    assert decode_control_byte(ord("a")) is None


def test_is_printable():
    assert is_printable("a")
    assert is_printable("é")
    assert not is_printable("\x07")
    assert not is_printable("ab")


def test_read_fed_bytes(pipe):
    r, _ = pipe
    keys = RawInput(r, esc_timeout=0.01)
    keys.feed(b"a\x1b[A\r\t")
    assert keys.key_pressed()
    assert keys.read_key(0) == KeyEvent("a")
    assert keys.read_key(0) == KeyEvent(KEY_UP)
    assert keys.read_key(0) == KeyEvent(KEY_ENTER)
    assert keys.read_key(0) == KeyEvent(KEY_TAB)
    assert keys.read_key(0) is None


def test_lone_escape_and_alt(pipe):
    r, _ = pipe
    keys = RawInput(r, esc_timeout=0.01)
    keys.feed(b"\x1b")
    assert keys.read_key(0) == KeyEvent(KEY_ESC)

    keys.feed(b"\x1bx")
    assert keys.read_key(0) == KeyEvent("x", Modifiers.ALT)


def test_utf8_character(pipe):
    r, _ = pipe
    keys = RawInput(r, esc_timeout=0.01)
    keys.feed("é".encode("utf-8"))
    assert keys.read_key(0) == KeyEvent("é")


def test_reads_from_descriptor(pipe):
    r, w = pipe
    with RawInput(r, esc_timeout=0.01) as keys:
        assert keys.read_key(timeout=0) is None
        os.write(w, b"\x1b[3~z")
        assert keys.read_key(timeout=1) == KeyEvent(KEY_DELETE)
        assert keys.read_key(timeout=1) == KeyEvent("z")
