"""
Raw mode input handling and keystroke parsing.
"""

import logging
import os
import re
import select
import sys
from dataclasses import dataclass
from enum import IntFlag
from typing import Dict, Optional

try:
    import termios  # type: ignore
    import tty  # type: ignore
except ImportError:  # pragma: no cover
    termios = None  # type: ignore
    tty = None  # type: ignore

from .errors import TerminalError

logger = logging.getLogger(__name__)

# Named keys. Printable characters are delivered as themselves.
KEY_ENTER = "KEY_ENTER"
KEY_ESC = "KEY_ESC"
KEY_TAB = "KEY_TAB"
KEY_BACKTAB = "KEY_BACKTAB"
KEY_BACKSPACE = "KEY_BACKSPACE"
KEY_DELETE = "KEY_DELETE"
KEY_INSERT = "KEY_INSERT"
KEY_UP = "KEY_UP"
KEY_DOWN = "KEY_DOWN"
KEY_LEFT = "KEY_LEFT"
KEY_RIGHT = "KEY_RIGHT"
KEY_HOME = "KEY_HOME"
KEY_END = "KEY_END"
KEY_PAGEUP = "KEY_PAGEUP"
KEY_PAGEDOWN = "KEY_PAGEDOWN"
KEY_F1 = "KEY_F1"
KEY_F2 = "KEY_F2"
KEY_F3 = "KEY_F3"
KEY_F4 = "KEY_F4"
KEY_F5 = "KEY_F5"
KEY_F6 = "KEY_F6"
KEY_F7 = "KEY_F7"
KEY_F8 = "KEY_F8"
KEY_F9 = "KEY_F9"
KEY_F10 = "KEY_F10"
KEY_F11 = "KEY_F11"
KEY_F12 = "KEY_F12"

_ESC_SEQUENCE_TIMEOUT_S = 0.05

_CSI_FINAL_KEYS: Dict[str, str] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
    "P": KEY_F1,
    "Q": KEY_F2,
    "R": KEY_F3,
    "S": KEY_F4,
    "Z": KEY_BACKTAB,
}

_CSI_TILDE_KEYS: Dict[int, str] = {
    1: KEY_HOME,
    2: KEY_INSERT,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGEUP,
    6: KEY_PAGEDOWN,
    7: KEY_HOME,
    8: KEY_END,
    11: KEY_F1,
    12: KEY_F2,
    13: KEY_F3,
    14: KEY_F4,
    15: KEY_F5,
    17: KEY_F6,
    18: KEY_F7,
    19: KEY_F8,
    20: KEY_F9,
    21: KEY_F10,
    23: KEY_F11,
    24: KEY_F12,
}

_CSI_RE = re.compile(r"^\x1b\[([0-9;]*)([A-Za-z~])$")


class Modifiers(IntFlag):
    NONE = 0
    SHIFT = 1
    ALT = 2
    CTRL = 4


@dataclass(frozen=True)
class KeyEvent:
    """
    One decoded keystroke.

    Attributes:
        code: A single character, or one of the KEY_* names
        modifiers: Shift/Ctrl/Alt state reported with the key
    """
    code: str
    modifiers: Modifiers = Modifiers.NONE

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    def has(self, mod: Modifiers) -> bool:
        return bool(self.modifiers & mod)


def is_printable(ch: str) -> bool:
    """
    Check if character is printable.

    Args:
        ch: Character to check

    Returns:
        True if printable
    """
    if len(ch) != 1:
        return False
    code = ord(ch)
    return 32 <= code <= 126 or code >= 160


def _xterm_modifiers(param: str) -> Modifiers:
    # xterm encodes modifiers as 1 + bitmask(shift=1, alt=2, ctrl=4)
    try:
        n = int(param) - 1
    except ValueError:
        return Modifiers.NONE
    if n <= 0:
        return Modifiers.NONE
    return Modifiers(n & 0x7)


def parse_ansi_sequence(seq: str) -> Optional[KeyEvent]:
    """
    Parse ANSI escape sequence to a key event.

    Args:
        seq: Escape sequence (including ESC)

    Returns:
        KeyEvent or None if not recognized
    """
    # SS3 variants (common in some terminals / keypad modes)
    if len(seq) == 3 and seq.startswith("\x1bO"):
        key = _CSI_FINAL_KEYS.get(seq[2])
        if key is None or key == KEY_BACKTAB:
            return None
        return KeyEvent(key)

    m = _CSI_RE.match(seq)
    if not m:
        return None

    params, final = m.group(1), m.group(2)
    parts = [p for p in params.split(";")] if params else []

    if final == "~":
        if not parts:
            return None
        try:
            num = int(parts[0])
        except ValueError:
            return None
        key = _CSI_TILDE_KEYS.get(num)
        if key is None:
            return None
        mods = _xterm_modifiers(parts[1]) if len(parts) > 1 else Modifiers.NONE
        return KeyEvent(key, mods)

    key = _CSI_FINAL_KEYS.get(final)
    if key is None:
        return None
    if key == KEY_BACKTAB:
        return KeyEvent(KEY_BACKTAB, Modifiers.SHIFT)
    # CSI with modifiers, e.g. ESC [ 1 ; 2 B
    mods = _xterm_modifiers(parts[1]) if len(parts) > 1 else Modifiers.NONE
    return KeyEvent(key, mods)


def decode_control_byte(b: int) -> Optional[KeyEvent]:
    """Map a single C0 control byte (or DEL) to a key event."""
    if b in (0x0D, 0x0A):
        return KeyEvent(KEY_ENTER)
    if b == 0x09:
        return KeyEvent(KEY_TAB)
    if b in (0x08, 0x7F):
        # many clients send DEL (0x7f) for backspace
        return KeyEvent(KEY_BACKSPACE)
    if b == 0x1B:
        return KeyEvent(KEY_ESC)
    if 0x01 <= b <= 0x1A:
        return KeyEvent(chr(ord("a") + b - 1), Modifiers.CTRL)
    return None


def _utf8_length(lead: int) -> int:
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 1


class RawInput:
    """
    Context manager for raw mode input.

    Example:
        >>> with RawInput() as inp:
        ...     ev = inp.read_key()
        ...     if ev is not None and ev.code == KEY_ENTER:
        ...         print("Enter pressed")
    """

    def __init__(self, fd: Optional[int] = None, *, esc_timeout: float = _ESC_SEQUENCE_TIMEOUT_S):
        """Initialize raw input handler.

        Args:
            fd: Terminal file descriptor (defaults to stdin)
            esc_timeout: Seconds to wait for the rest of an escape sequence
                         before treating a lone ESC as the Escape key
        """
        self._fd = sys.stdin.fileno() if fd is None else int(fd)
        self._esc_timeout = esc_timeout
        self._inbuf = bytearray()
        self._saved_attrs = None

    def __enter__(self):
        """Enable raw mode."""
        self.enable_raw_mode()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Disable raw mode."""
        self.disable_raw_mode()
        return False

    def enable_raw_mode(self) -> None:
        if self._saved_attrs is not None:
            return
        if termios is None or tty is None:
            return
        if not os.isatty(self._fd):
            return
        try:
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setraw(self._fd, when=termios.TCSANOW)
        except termios.error as e:
            raise TerminalError(f"Failed to enable raw mode on fd {self._fd}: {e}") from e
        logger.debug("raw mode enabled on fd %d", self._fd)

    def disable_raw_mode(self) -> None:
        saved = self._saved_attrs
        if saved is None or termios is None:
            return
        self._saved_attrs = None
        try:
            termios.tcsetattr(self._fd, termios.TCSANOW, saved)
        except termios.error as e:
            raise TerminalError(f"Failed to restore terminal mode on fd {self._fd}: {e}") from e
        logger.debug("raw mode disabled on fd %d", self._fd)

    def _fill_inbuf(self, timeout: Optional[float]) -> bool:
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            if not ready:
                return False
            data = os.read(self._fd, 1024)
        except InterruptedError:
            return False
        except OSError as e:
            raise TerminalError(f"Failed to read from fd {self._fd}: {e}") from e
        if not data:
            return False
        self._inbuf.extend(data)
        return True

    def _read_byte(self, timeout: Optional[float]) -> Optional[int]:
        if not self._inbuf:
            if not self._fill_inbuf(timeout):
                return None
        b = self._inbuf[0]
        del self._inbuf[0]
        return b

    def key_pressed(self) -> bool:
        """
        Check if a key is available without blocking.

        Returns:
            True if key available
        """
        if self._inbuf:
            return True
        return self._fill_inbuf(0)

    def feed(self, data: bytes) -> None:
        """Queue bytes as if they had arrived from the terminal."""
        self._inbuf.extend(data)

    def _read_escape(self) -> KeyEvent:
        b1 = self._read_byte(self._esc_timeout)
        if b1 is None:
            return KeyEvent(KEY_ESC)

        if b1 == 0x5B:  # '['
            seq = "\x1b["
            while len(seq) < 16:
                b = self._read_byte(self._esc_timeout)
                if b is None:
                    break
                seq += chr(b)
                if 0x40 <= b <= 0x7E:
                    break
            ev = parse_ansi_sequence(seq)
            if ev is None:
                logger.debug("unrecognized escape sequence %r", seq)
                return KeyEvent(KEY_ESC)
            return ev

        if b1 == 0x4F:  # 'O'
            b2 = self._read_byte(self._esc_timeout)
            if b2 is None:
                return KeyEvent("O", Modifiers.ALT)
            ev = parse_ansi_sequence("\x1bO" + chr(b2))
            return KeyEvent(KEY_ESC) if ev is None else ev

        if b1 == 0x1B:
            self._inbuf[0:0] = bytes([b1])
            return KeyEvent(KEY_ESC)

        inner = self._decode_byte(b1)
        if inner is None:
            return KeyEvent(KEY_ESC)
        return KeyEvent(inner.code, inner.modifiers | Modifiers.ALT)

    def _decode_byte(self, b: int) -> Optional[KeyEvent]:
        ev = decode_control_byte(b)
        if ev is not None:
            return ev
        if b < 0x80:
            return KeyEvent(chr(b))

        raw = bytearray([b])
        for _ in range(_utf8_length(b) - 1):
            nxt = self._read_byte(self._esc_timeout)
            if nxt is None:
                break
            raw.append(nxt)
        ch = raw.decode("utf-8", errors="replace")
        return KeyEvent(ch[0]) if ch else None

    def read_key(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """
        Read a single keystroke (blocking or with timeout).

        Args:
            timeout: Timeout in seconds (None = blocking, 0 = poll)

        Returns:
            KeyEvent, or None on timeout
        """
        b = self._read_byte(timeout)
        if b is None:
            return None
        if b == 0x1B:
            return self._read_escape()
        return self._decode_byte(b)
