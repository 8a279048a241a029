"""
Exception types raised by boxdialog.
"""


class DialogError(Exception):
    """Base class for every error raised by this package."""


class DialogConfigError(DialogError, ValueError):
    """A dialog or configuration value that can never work.

    Raised at construction time (a fourth button, a negative margin, an
    unknown color name) rather than while the dialog is on screen.
    """


class TerminalError(DialogError, OSError):
    """A write, flush or size query against the terminal failed.

    A half-written frame leaves the screen in an unknown state, so these
    always propagate to the caller.
    """
