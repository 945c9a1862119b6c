# SPDX-License-Identifier: MIT

from typing import Optional

from rich.console import Console
from rich.padding import Padding

from daylog.view.state import get_show_header


def header(user_name: str, report_name: Optional[str] = None) -> None:
    """Print the one-line banner: app, current user and report name."""
    if not get_show_header():
        return

    parts = ["[dark_orange]daylog[/dark_orange]", f"[plum1]{user_name}[/plum1]"]
    if report_name is not None:
        parts.append(f"[sandy_brown]{report_name}[/sandy_brown]")

    Console().print(Padding(" · ".join(parts), (1, 0, 0, 1)))
