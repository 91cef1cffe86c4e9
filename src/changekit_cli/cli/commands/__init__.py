"""CLI command modules for changekit.

Each module holds one command (or a closely related pair);
:func:`register_commands` attaches them to the root Typer app.
"""

from __future__ import annotations

import typer

from .aggregate import aggregate
from .fragment import create_fragment
from .init import init
from .release import notes, release
from .status import status


def register_commands(app: typer.Typer) -> None:
    app.command(name="init")(init)
    app.command(name="create-fragment")(create_fragment)
    app.command(name="add", hidden=True)(create_fragment)
    app.command(name="aggregate")(aggregate)
    app.command(name="release")(release)
    app.command(name="notes")(notes)
    app.command(name="status")(status)


__all__ = ["register_commands"]
