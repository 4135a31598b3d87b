"""Client management commands."""

import click
from invoicekit.cli.client_resolution import resolve_client_or_exit
from invoicekit.cli.error_handling import handle_domain_error
from invoicekit.domain.client import ClientService


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.option("--email", help="Contact email")
@click.option("--company", help="Company name")
@click.option("--phone", help="Phone number")
@click.option("--address", help="Postal address")
@click.pass_context
def create_client(
    ctx,
    name: str,
    email: str | None,
    company: str | None,
    phone: str | None,
    address: str | None,
):
    """Create a new client.

    Examples:
        invoicekit client create "Jane Doe" --email jane@example.com
        invoicekit client create "Jane Doe" --company "Acme Ltd" --phone "555-0100"
    """
    service = ClientService(ctx.obj["db"])

    try:
        client_id = service.create_client(
            user_id=ctx.obj["user_id"],
            name=name,
            email=email,
            company=company,
            phone=phone,
            address=address,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created client '{name}' (ID: {client_id})")


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    service = ClientService(ctx.obj["db"])

    clients = service.list_clients(ctx.obj["user_id"])
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 80)
    for c in clients:
        click.echo(
            f"ID: {c.id:3d} | {c.name:20s} | {(c.company or ''):20s} | {c.email or ''}"
        )


@client_group.command("show")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def show_client(ctx, client: str):
    """Show a client's contact details.

    CLIENT can be a client name, company or ID.
    """
    service = ClientService(ctx.obj["db"])
    client_id = resolve_client_or_exit(ctx, service, client)
    c = service.require_client(client_id, ctx.obj["user_id"])

    click.echo(f"Client {c.id}: {c.name}")
    for label, value in (
        ("Company", c.company),
        ("Email", c.email),
        ("Phone", c.phone),
        ("Address", c.address),
    ):
        if value:
            click.echo(f"  {label}: {value}")


@client_group.command("update")
@click.argument("client", metavar="CLIENT")
@click.option("--name", help="New display name")
@click.option("--email", help="New contact email")
@click.option("--company", help="New company name")
@click.option("--phone", help="New phone number")
@click.option("--address", help="New postal address")
@click.pass_context
def update_client(
    ctx,
    client: str,
    name: str | None,
    email: str | None,
    company: str | None,
    phone: str | None,
    address: str | None,
) -> None:
    """Update a client's contact fields.

    Fields that are not given keep their current value.

    Examples:
        invoicekit client update "Jane Doe" --email jane@acme.example
        invoicekit client update 3 --name "Jane Smith"
    """
    service = ClientService(ctx.obj["db"])
    user_id = ctx.obj["user_id"]
    client_id = resolve_client_or_exit(ctx, service, client)
    current = service.require_client(client_id, user_id)

    try:
        service.update_client(
            client_id=client_id,
            user_id=user_id,
            name=name if name is not None else current.name,
            email=email if email is not None else current.email,
            company=company if company is not None else current.company,
            phone=phone if phone is not None else current.phone,
            address=address if address is not None else current.address,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated client {client_id}")


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def delete_client(ctx, client: str) -> None:
    """Delete a client.

    Invoices addressed to the client are not deleted.
    """
    service = ClientService(ctx.obj["db"])
    client_id = resolve_client_or_exit(ctx, service, client)
    client_obj = service.require_client(client_id, ctx.obj["user_id"])

    # Confirm deletion
    if not click.confirm(
        f"Are you sure you want to delete client '{client_obj.name}' (ID: {client_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_client(client_id, ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted client '{client_obj.name}'")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
