"""
boxdialog - Modal dialog boxes for character-grid terminals.

This library provides:
- A sliding-window single-line editor with insert/overtype modes
- Labeled text fields and action buttons behind one control interface
- Dialog layout, tab-order focus and Enter/Escape termination
- Single/double line borders and per-zone colors
- An ANSI terminal sink, a headless shadow screen and a raw key reader
"""

import logging

__version__ = "0.1.0"
__author__ = "boxdialog contributors"

from .borders import BorderChars, Borders, BorderStyle
from .config import BoxDialogConfig, configure, get_config, load_config
from .controls import Button, Control, Field
from .dialog import Dialog, DialogBuilder, DialogState
from .errors import DialogConfigError, DialogError, TerminalError
from .focus import FocusEngine
from .input import (
    KEY_BACKSPACE, KEY_BACKTAB, KEY_DELETE, KEY_DOWN, KEY_END, KEY_ENTER, KEY_ESC,
    KEY_F1, KEY_F2, KEY_F3, KEY_F4, KEY_F5, KEY_F6, KEY_F7, KEY_F8, KEY_F9, KEY_F10, KEY_F11, KEY_F12,
    KEY_HOME, KEY_INSERT, KEY_LEFT, KEY_PAGEDOWN, KEY_PAGEUP, KEY_RIGHT, KEY_TAB, KEY_UP,
    KeyEvent, Modifiers, RawInput, parse_ansi_sequence,
)
from .layout import Layout, compute_layout
from .line_editor import EditMode, LineEditor, LineRender
from .logs import configure_logging
from .results import DialogResult, DialogReturnValue, FormData
from .screen import ShadowScreen
from .terminal import AnsiTerminal, CursorShape, RenderSink
from .theme import Color, Colors, DialogColors, build_colors, parse_colors
from .utils import Position, Rect, Size

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Dialog
    "Dialog",
    "DialogBuilder",
    "DialogState",
    "DialogResult",
    "DialogReturnValue",
    "FormData",
    # Controls
    "Control",
    "Field",
    "Button",
    "LineEditor",
    "LineRender",
    "EditMode",
    "FocusEngine",
    "Layout",
    "compute_layout",
    # Appearance
    "Borders",
    "BorderStyle",
    "BorderChars",
    "Color",
    "Colors",
    "DialogColors",
    "build_colors",
    "parse_colors",
    # Terminal
    "RenderSink",
    "AnsiTerminal",
    "ShadowScreen",
    "CursorShape",
    "RawInput",
    "KeyEvent",
    "Modifiers",
    "parse_ansi_sequence",
    "KEY_ENTER",
    "KEY_ESC",
    "KEY_TAB",
    "KEY_BACKTAB",
    "KEY_BACKSPACE",
    "KEY_DELETE",
    "KEY_INSERT",
    "KEY_UP",
    "KEY_DOWN",
    "KEY_LEFT",
    "KEY_RIGHT",
    "KEY_HOME",
    "KEY_END",
    "KEY_PAGEUP",
    "KEY_PAGEDOWN",
    "KEY_F1",
    "KEY_F2",
    "KEY_F3",
    "KEY_F4",
    "KEY_F5",
    "KEY_F6",
    "KEY_F7",
    "KEY_F8",
    "KEY_F9",
    "KEY_F10",
    "KEY_F11",
    "KEY_F12",
    # Geometry
    "Position",
    "Size",
    "Rect",
    # Config / logging / errors
    "BoxDialogConfig",
    "configure",
    "get_config",
    "load_config",
    "configure_logging",
    "DialogError",
    "DialogConfigError",
    "TerminalError",
]
