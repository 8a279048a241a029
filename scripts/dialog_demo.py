#!/usr/bin/env python3
# SPDX-License-Identifier: GPL-2.0-or-later
#
# dialog_demo.py - Interactive "Add Contact" dialog on the current terminal
#
# F2 hides/shows the dialog, Ctrl+Q quits without an answer. Enter, Escape
# or a button ends the dialog and the outcome is printed after the terminal
# is restored.

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Optional

from boxdialog import (
    KEY_F2,
    AnsiTerminal,
    DialogBuilder,
    DialogResult,
    DialogReturnValue,
    Modifiers,
    RawInput,
    configure,
    configure_logging,
    get_config,
)

# idle poll interval; each timeout checks for a terminal resize
_POLL_S = 0.25


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(add_help=True, description="Show an Add Contact dialog.")
    p.add_argument("--config", help="TOML configuration file")
    p.add_argument("--log-file", help="write debug records to this file")
    p.add_argument("--overlay", action="store_true", help="paint the whole screen behind the dialog")
    return p.parse_args(argv)


def build_dialog(overlay: bool = False):
    builder = DialogBuilder.from_config("Add Contact").set_margin(4, 1)
    if overlay:
        builder.set_overlay(True)
    return (builder
            .add_field("First Name", 15, 30, tab_index=0)
            .add_field("Last Name", 15, 30, tab_index=1)
            .add_field("Email", 20, 60, tab_index=2)
            .add_field("Phone", 12, 20, tab_index=3)
            .add_button("OK", DialogResult.OK, tab_index=4)
            .add_button("Cancel", DialogResult.CANCEL, tab_index=5)
            .build())


def run(overlay: bool = False) -> Optional[DialogReturnValue]:
    dialog = build_dialog(overlay)
    term = AnsiTerminal()

    with term.session(), RawInput() as keys:
        dialog.show(term)
        while True:
            ev = keys.read_key(timeout=_POLL_S)
            if ev is None:
                dialog.poll_resize(term)
                continue
            if ev.code == "q" and ev.has(Modifiers.CTRL):
                return None
            if ev.code == KEY_F2:
                if dialog.is_visible:
                    dialog.hide(term)
                else:
                    dialog.show(term)
                continue
            rv = dialog.handle_input(term, ev)
            if rv.should_quit:
                return rv


def main(argv: list[str]) -> int:
    args = _parse_args(argv)

    cfg = configure(global_config_path=args.config) if args.config else get_config()
    log_cfg = cfg.logging
    if args.log_file:
        log_cfg = replace(log_cfg, level="DEBUG", file=args.log_file)
    configure_logging(log_cfg)

    rv = run(overlay=args.overlay)
    if rv is None:
        print("Quit.")
        return 1

    print(f"Result: {rv.dialog_result.name}")
    for name, value in rv.form_data.items():
        print(f"  {name}: {value}")
    return 0 if rv.dialog_result is DialogResult.OK else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
