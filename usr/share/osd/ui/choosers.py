#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# ui/choosers.py - Subtitle selection dialogs
#

"""
Selection backends for picking a subtitle by hand.

    ZenityChooser    - GTK list dialog (zenity)
    KdialogChooser   - Qt radio list dialog (kdialog)
    TerminalChooser  - questionary menu in the terminal

All of them return the index of the chosen item, so two subtitles with
the same file name can never be confused.
"""

import subprocess
from abc import abstractmethod
from typing import List, Optional, Sequence, Tuple

import questionary
from questionary import Style

from ..core.errors import ChooserUnavailable, DecodeError, SelectionCancelled
from ..core.resolver import Chooser
from ..utils.i18n import _

# Desktops where the GTK dialog is used
GTK_DESKTOPS = {"Cinnamon", "GNOME", "XFCE", "xfce4", "bspwm", "gnome", "gtk"}

custom_style = Style([
    ('qmark', 'fg:#673ab7 bold'),
    ('question', 'bold'),
    ('answer', 'fg:#4caf50 bold'),
    ('pointer', 'fg:#673ab7 bold'),
    ('highlighted', 'fg:#673ab7 bold'),
    ('selected', 'fg:#4caf50'),
    ('instruction', ''),
    ('text', ''),
])


def detect_gui_mode(desktop: Optional[str]) -> str:
    """
    Pick the dialog toolkit for a desktop session.

    Args:
        desktop: Value of XDG_CURRENT_DESKTOP (None if unset)

    Returns:
        "gtk" or "qt"
    """
    if not desktop or desktop in GTK_DESKTOPS:
        return "gtk"
    return "qt"


def _parse_index(output: str, count: int) -> int:
    selected = output.strip().splitlines()
    if not selected:
        raise SelectionCancelled(_("Movie not selected."))
    try:
        index = int(selected[0])
    except ValueError as e:
        raise DecodeError(_("Unexpected dialog output: %r") % output) from e
    if not 0 <= index < count:
        raise DecodeError(_("Unexpected dialog output: %r") % output)
    return index


class DialogChooser(Chooser):
    """Runs an external dialog program and reads the chosen index from stdout"""

    program = ""

    @abstractmethod
    def build_command(self, items: Sequence[Tuple[str, bool]], title: str) -> List[str]:
        """Command line for the dialog, item indexes as the returned values"""

    def choose(self, items: Sequence[Tuple[str, bool]], title: str) -> int:
        command = self.build_command(items, title)
        try:
            result = subprocess.run(command, stdout=subprocess.PIPE, text=True, check=False)
        except FileNotFoundError as e:
            raise ChooserUnavailable(_("%s not found.") % self.program.capitalize()) from e

        # 0: subtitle selected, anything else: cancel button or closed window
        if result.returncode != 0:
            raise SelectionCancelled(_("Movie not selected."))
        return _parse_index(result.stdout, len(items))


class ZenityChooser(DialogChooser):
    """Subtitle column plus a hidden index column; labels already carry the hash mark"""

    program = "zenity"

    def build_command(self, items, title):
        command = [
            "zenity",
            "--width=720",
            "--height=400",
            "--list",
            f"--title={title}",
            "--column=#",
            "--column=Subtitle",
            "--hide-column=1",
            "--print-column=1",
        ]
        for index, (label, _matched) in enumerate(items):
            command.extend([str(index), label])
        return command


class KdialogChooser(DialogChooser):
    """Radio list whose tags are the item indexes"""

    program = "kdialog"

    def build_command(self, items, title):
        command = [
            "kdialog",
            "--geometry", "800x400",
            "--radiolist", _("Select subtitle"),
            "--title", title,
        ]
        for index, (label, _matched) in enumerate(items):
            command.extend([str(index), label, "off"])
        return command


class TerminalChooser(Chooser):
    """questionary select menu"""

    def choose(self, items, title):
        choices = [questionary.Choice(label, value=index) for index, (label, _matched) in enumerate(items)]
        answer = questionary.select(
            _("Select subtitle for %s") % title,
            choices=choices,
            style=custom_style,
        ).ask()

        # ask() returns None on Ctrl-C / Esc
        if answer is None:
            raise SelectionCancelled(_("Movie not selected."))
        return answer


def create_chooser(mode: str) -> Chooser:
    """
    Build the selection backend for a mode.

    Args:
        mode: "gtk", "qt" or "terminal"
    """
    if mode == "gtk":
        return ZenityChooser()
    if mode == "qt":
        return KdialogChooser()
    if mode == "terminal":
        return TerminalChooser()
    raise ValueError(f"Unknown selection mode: {mode}")
