"""portal-access command line entry point."""

from __future__ import annotations

import typer

from portal_access.commands import register_all
from portal_access.common.logging import setup_logging
from portal_access.settings import get_settings

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Inspect and validate the portal access-control tables.",
)


@app.callback()
def _main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log evaluation decisions to stderr.",
    ),
) -> None:
    if verbose:
        setup_logging(get_settings().model_copy(update={"logging_level": "DEBUG"}))


register_all(app)


if __name__ == "__main__":
    app()
