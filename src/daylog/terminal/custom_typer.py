# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core

_ALIAS_SEPARATOR = re.compile(r"\s*,\s*")


class AliasedTyperGroup(typer.core.TyperGroup):
    """
    Group whose command names list their aliases, e.g. "list, ls".

    Any alias selects the command; help shows the full name with its aliases.
    """

    def resolve_name(self, name: str) -> str:
        for registered_name in self.commands:
            if name in _ALIAS_SEPARATOR.split(registered_name):
                return registered_name
        return name

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.resolve_name(cmd_name))

    def list_commands(self, ctx: click.Context) -> list[str]:
        # Registration order
        return list(self.commands)
