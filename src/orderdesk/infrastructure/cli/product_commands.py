"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.delete_product import DeleteProductHandler
from orderdesk.application.list_products import ListProductsHandler
from orderdesk.application.show_order import DEFAULT_PAGE_SIZE
from orderdesk.application.update_product import UpdateProductHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.cli.context import CliContext, pass_cli


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--currency", default=None, help="Currency code (default: configured currency).")
@pass_cli
def product_add(ctx: CliContext, name: str, price: str, currency: str | None) -> None:
    """Add a new product to the catalog."""
    c = ctx.container
    handler = AddProductHandler(
        product_repo=c.product_repo,
        id_generator=c.id_generator,
        notifications=c.notifications,
        currency=c.settings.currency,
    )

    try:
        dto = handler.handle(name=name, price=price, user_id=ctx.user_id, currency=currency)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at {dto.price}")


@click.command("list")
@click.option("--query", "-q", default="", help="Filter by id or name.")
@click.option("--limit", default=DEFAULT_PAGE_SIZE, show_default=True, type=int)
@click.option("--offset", default=0, show_default=True, type=int)
@pass_cli
def product_list(ctx: CliContext, query: str, limit: int, offset: int) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=ctx.container.product_repo)

    try:
        page = handler.handle(query=query, limit=limit, offset=offset)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not page.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<8} {'Name':<30} {'Price':>14}")
    click.echo("-" * 54)
    for p in page.products:
        click.echo(f"{p.id:<8} {p.name:<30} {p.price:>14}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@pass_cli
def product_update(
    ctx: CliContext, product_id: str, name: str | None, price: str | None
) -> None:
    """Rename or reprice a product."""
    if name is None and price is None:
        raise click.UsageError("Nothing to update: pass --name and/or --price")

    handler = UpdateProductHandler(
        product_repo=ctx.container.product_repo,
        notifications=ctx.container.notifications,
    )

    try:
        dto = handler.handle(product_id, user_id=ctx.user_id, name=name, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} is now '{dto.name}' at {dto.price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_cli
def product_delete(ctx: CliContext, product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = DeleteProductHandler(
        product_repo=ctx.container.product_repo,
        notifications=ctx.container.notifications,
    )

    try:
        handler.handle(product_id, user_id=ctx.user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
