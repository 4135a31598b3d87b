"""CLI error handling helpers."""

from typing import Optional

import click

from invoicekit.domain.errors import DomainError


def handle_domain_error(
    ctx: click.Context,
    error: DomainError | ValueError,
    context: Optional[str] = None,
) -> None:
    """Print an error to stderr and exit with status 1.

    Args:
        ctx: Click context of the running command
        error: Domain or parse error to report
        context: Optional label printed before the error, e.g. "Invalid due date"
    """
    message = f"{context}: {error}" if context else str(error)
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)
