"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderdesk.application.change_order_status import ChangeOrderStatusHandler
from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.delete_order import DeleteOrderHandler
from orderdesk.application.dto import OrderDTO, OrderItemSpec
from orderdesk.application.manage_order_items import (
    AddOrderItemHandler,
    RemoveOrderItemHandler,
    UpdateOrderItemHandler,
)
from orderdesk.application.show_order import (
    DEFAULT_PAGE_SIZE,
    ListOrdersHandler,
    ShowOrderHandler,
)
from orderdesk.application.update_order import UpdateOrderHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.order import OrderAction
from orderdesk.infrastructure.cli.context import CliContext, pass_cli


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '123456:3,654321:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}  tax no. {dto.tax_number}  <{dto.email}>")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Updated:  {dto.updated_at}")
    click.echo()

    click.echo(f"  {'Item':<12} {'Product':<10} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*59}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<12} {item.product_id:<10} {item.quantity:>5} "
            f"{item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*59}")
    click.echo(f"  {'Order Total':<30} {dto.total:>29}")

    if dto.available_actions:
        click.echo()
        click.echo(f"Next: {', '.join(dto.available_actions)}")


@click.command("create")
@click.option("--customer", required=True, help="Customer (company) name.")
@click.option("--tax-number", required=True, help="Customer tax/VAT number.")
@click.option("--email", required=True, help="Customer contact email.")
@click.option("--items", default=None, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@pass_cli
def order_create(
    ctx: CliContext, customer: str, tax_number: str, email: str, items: str | None
) -> None:
    """Create a new order."""
    specs = _parse_items(items) if items else []
    c = ctx.container

    handler = CreateOrderHandler(
        order_repo=c.order_repo,
        product_repo=c.product_repo,
        id_generator=c.id_generator,
        notifications=c.notifications,
        currency=c.settings.currency,
    )

    try:
        dto = handler.handle(
            customer_name=customer,
            tax_number=tax_number,
            email=email,
            user_id=ctx.user_id,
            item_specs=specs,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} created  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Total:    {dto.total}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@pass_cli
def order_show(ctx: CliContext, order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=ctx.container.order_repo)

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--query", "-q", default="", help="Filter by id, customer, tax number or email.")
@click.option("--limit", default=DEFAULT_PAGE_SIZE, show_default=True, type=int)
@click.option("--offset", default=0, show_default=True, type=int)
@pass_cli
def order_list(ctx: CliContext, query: str, limit: int, offset: int) -> None:
    """List orders, one page at a time."""
    handler = ListOrdersHandler(order_repo=ctx.container.order_repo)

    try:
        page = handler.handle(query=query, limit=limit, offset=offset)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not page.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<12} {'Customer':<30} {'Status':<26} {'Total':>14}")
    click.echo("-" * 85)
    for dto in page.orders:
        click.echo(
            f"{dto.id:<12} {dto.customer_name:<30} {dto.status:<26} {dto.total:>14}"
        )
    shown_to = offset + len(page.orders)
    click.echo(f"Showing {offset + 1}-{shown_to} of {page.total}")


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--customer", required=True, help="Customer (company) name.")
@click.option("--tax-number", required=True, help="Customer tax/VAT number.")
@click.option("--email", required=True, help="Customer contact email.")
@pass_cli
def order_update(
    ctx: CliContext, order_id: str, customer: str, tax_number: str, email: str
) -> None:
    """Replace an order's customer details."""
    handler = UpdateOrderHandler(
        order_repo=ctx.container.order_repo,
        notifications=ctx.container.notifications,
    )

    try:
        handler.handle(order_id, customer, tax_number, email, user_id=ctx.user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} updated.")


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
@pass_cli
def order_delete(ctx: CliContext, order_id: str) -> None:
    """Delete an order."""
    handler = DeleteOrderHandler(
        order_repo=ctx.container.order_repo,
        notifications=ctx.container.notifications,
    )

    try:
        handler.handle(order_id, user_id=ctx.user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} deleted.")


@click.command("add-item")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Number of units.")
@click.option("--price", default=None, help="Unit price override (default: catalog price).")
@pass_cli
def order_add_item(
    ctx: CliContext, order_id: str, product_id: str, quantity: int, price: str | None
) -> None:
    """Add a product to an order."""
    c = ctx.container
    handler = AddOrderItemHandler(
        order_repo=c.order_repo,
        product_repo=c.product_repo,
        id_generator=c.id_generator,
        notifications=c.notifications,
    )

    try:
        dto = handler.handle(order_id, product_id, quantity, user_id=ctx.user_id, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item added to order {order_id}. New total: {dto.total}")


@click.command("update-item")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--item", "item_id", required=True, help="Order item ID to change.")
@click.option("--quantity", default=None, type=int, help="New number of units.")
@click.option("--price", default=None, help="New unit price.")
@pass_cli
def order_update_item(
    ctx: CliContext, order_id: str, item_id: str, quantity: int | None, price: str | None
) -> None:
    """Change the quantity or unit price of a line item."""
    if quantity is None and price is None:
        raise click.UsageError("Nothing to update: pass --quantity and/or --price")

    handler = UpdateOrderItemHandler(
        order_repo=ctx.container.order_repo,
        notifications=ctx.container.notifications,
    )

    try:
        dto = handler.handle(
            order_id, item_id, user_id=ctx.user_id, quantity=quantity, price=price
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item {item_id} updated in order {order_id}. New total: {dto.total}")


@click.command("remove-item")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--item", "item_id", required=True, help="Order item ID to remove.")
@pass_cli
def order_remove_item(ctx: CliContext, order_id: str, item_id: str) -> None:
    """Remove a line item from an order."""
    handler = RemoveOrderItemHandler(
        order_repo=ctx.container.order_repo,
        notifications=ctx.container.notifications,
    )

    try:
        dto = handler.handle(order_id, item_id, user_id=ctx.user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item {item_id} removed from order {order_id}. New total: {dto.total}")


# --- Lifecycle transitions ------------------------------------------------------

_TRANSITION_COMMANDS = (
    ("confirm", OrderAction.CONFIRM, "Confirm a newly created order."),
    ("pay", OrderAction.MARK_PAYMENT_RECEIVED, "Record the advance payment."),
    ("produce", OrderAction.START_PRODUCTION, "Start production and packaging."),
    ("deliver", OrderAction.START_DELIVERY, "Start delivery."),
    ("bill", OrderAction.COMPLETE_BILLING, "Complete project billing."),
    ("cancel", OrderAction.CANCEL, "Cancel an order (not once it is in delivery)."),
)


def _transition_command(name: str, action: OrderAction, help_text: str) -> click.Command:

    @click.command(name, help=help_text)
    @click.option("--id", "order_id", required=True, help="Order ID.")
    @pass_cli
    def command(ctx: CliContext, order_id: str) -> None:
        handler = ChangeOrderStatusHandler(
            order_repo=ctx.container.order_repo,
            notifications=ctx.container.notifications,
        )

        try:
            dto = handler.handle(order_id, action, user_id=ctx.user_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

        click.echo(f"Order {order_id} is now {dto.status}.")

    return command


def order_transition_commands() -> list[click.Command]:
    return [_transition_command(*spec) for spec in _TRANSITION_COMMANDS]
