"""Mapping-table commands: validate and export."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from portal_access.core.rbac.config import (
    AccessConfigError,
    AccessControlConfig,
    audit_access_config,
    default_access_config,
    load_access_config,
)
from portal_access.settings import get_settings


def _load(config_file: Path | None) -> AccessControlConfig:
    path = config_file or get_settings().config_file
    if path is None:
        return default_access_config()
    return load_access_config(path)


def run_validate(config_file: Path | None, *, strict: bool = False) -> None:
    """Load the mapping tables and report likely mistakes."""

    try:
        config = _load(config_file)
    except AccessConfigError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1) from exc

    findings = audit_access_config(config)
    for finding in findings:
        typer.echo(f"⚠️  {finding}")
    if findings and strict:
        raise typer.Exit(code=1)
    if not findings:
        typer.echo("✅ access config OK")


def run_export(config_file: Path | None) -> None:
    """Print the effective mapping tables as a JSON config document."""

    try:
        config = _load(config_file)
    except AccessConfigError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1) from exc

    document = {
        "role_permissions": config.permissions.as_dict(),
        "role_statuses": config.statuses.as_dict(),
        "workspace_roles": config.workspaces.as_dict(),
    }
    typer.echo(json.dumps(document, indent=2, sort_keys=True))


def register(app: typer.Typer) -> None:
    @app.command(name="validate", help=run_validate.__doc__)
    def validate(
        config_file: Path | None = typer.Option(
            None,
            "--config",
            help="JSON config document (defaults to PORTAL_ACCESS_CONFIG_FILE or built-ins).",
        ),
        strict: bool = typer.Option(False, "--strict", help="Exit 1 when findings are reported."),
    ) -> None:
        run_validate(config_file, strict=strict)

    @app.command(name="export", help=run_export.__doc__)
    def export(
        config_file: Path | None = typer.Option(
            None,
            "--config",
            help="JSON config document (defaults to PORTAL_ACCESS_CONFIG_FILE or built-ins).",
        ),
    ) -> None:
        run_export(config_file)
