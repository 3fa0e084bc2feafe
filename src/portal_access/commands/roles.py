"""Role inspection commands: derived permissions, statuses and checks."""

from __future__ import annotations

import json

import typer

from portal_access.core.auth.evaluator import get_evaluator


def run_permissions(roles: list[str], *, as_json: bool = False) -> None:
    """Print the permissions a sign-in with ROLES would embed."""

    evaluator = get_evaluator()
    snapshot = evaluator.issue_snapshot(roles)
    permissions = sorted(snapshot.permissions)
    if as_json:
        typer.echo(json.dumps({"roles": sorted(snapshot.roles), "permissions": permissions}))
        return
    for permission in permissions:
        typer.echo(permission)


def run_statuses(roles: list[str], *, entity: str | None = None, as_json: bool = False) -> None:
    """Print the record statuses a sign-in with ROLES would embed."""

    evaluator = get_evaluator()
    snapshot = evaluator.issue_snapshot(roles)
    if entity is not None:
        statuses = {entity: sorted(evaluator.get_allowed_statuses(snapshot, entity))}
    else:
        statuses = {
            entity_type: sorted(values)
            for entity_type, values in sorted(snapshot.allowed_statuses.items())
        }
    if as_json:
        typer.echo(json.dumps({"roles": sorted(snapshot.roles), "statuses": statuses}))
        return
    for entity_type, values in statuses.items():
        typer.echo(f"{entity_type}: {', '.join(values) if values else '-'}")


def _report(allowed: bool) -> None:
    typer.echo("allowed" if allowed else "denied")
    if not allowed:
        raise typer.Exit(code=1)


def register(app: typer.Typer) -> None:
    @app.command(name="permissions", help=run_permissions.__doc__)
    def permissions(
        roles: list[str] = typer.Argument(..., help="Roles held by the principal."),
        as_json: bool = typer.Option(False, "--json", help="Emit JSON."),
    ) -> None:
        run_permissions(roles, as_json=as_json)

    @app.command(name="statuses", help=run_statuses.__doc__)
    def statuses(
        roles: list[str] = typer.Argument(..., help="Roles held by the principal."),
        entity: str | None = typer.Option(
            None,
            "--entity",
            "-e",
            help="Limit output to one entity type (e.g. Modification).",
        ),
        as_json: bool = typer.Option(False, "--json", help="Emit JSON."),
    ) -> None:
        run_statuses(roles, entity=entity, as_json=as_json)

    @app.command(name="check", help="Check whether ROLES grant PERMISSION (exit 1 when denied).")
    def check(
        permission: str = typer.Argument(..., help="Permission key, e.g. myresearch.projectrecord.read."),
        role: list[str] | None = typer.Option(None, "--role", "-r", help="Role held; repeatable."),
    ) -> None:
        evaluator = get_evaluator()
        snapshot = evaluator.issue_snapshot(role or [])
        _report(evaluator.has_permission(snapshot, permission))

    @app.command(
        name="check-status",
        help="Check whether ROLES may access ENTITY records in STATUS (exit 1 when denied).",
    )
    def check_status(
        entity: str = typer.Argument(..., help="Entity type, e.g. Modification."),
        status: str = typer.Argument(..., help="Record status, e.g. WithSponsor."),
        role: list[str] | None = typer.Option(None, "--role", "-r", help="Role held; repeatable."),
    ) -> None:
        evaluator = get_evaluator()
        snapshot = evaluator.issue_snapshot(role or [])
        _report(evaluator.can_access_record_status(snapshot, entity, status))
