"""Command registrations for the portal-access CLI."""

from __future__ import annotations

import typer

from . import config, roles

COMMAND_MODULES = (
    roles,
    config,
)


def register_all(app: typer.Typer) -> None:
    for module in COMMAND_MODULES:
        module.register(app)
