"""CLI error handling helpers."""

import json

import click

from ledgerbook.api.responses import error_response
from ledgerbook.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError, as_json: bool = False) -> None:
    """Render a domain error and exit with failure.

    With ``as_json`` the error is written to stdout as an error payload so
    scripts reading ``--json`` output always get a parseable document.
    """
    if as_json:
        click.echo(json.dumps(error_response(error), indent=2))
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
