import click

from orderdesk.infrastructure.bootstrap import build_container
from orderdesk.infrastructure.cli.context import CliContext
from orderdesk.infrastructure.cli.order_commands import (
    order_add_item,
    order_create,
    order_delete,
    order_list,
    order_remove_item,
    order_show,
    order_transition_commands,
    order_update,
    order_update_item,
)
from orderdesk.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from orderdesk.infrastructure.config import Settings
from orderdesk.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--user",
    "user_id",
    default="cli",
    show_default=True,
    envvar="ORDERDESK_USER",
    help="Acting user; other users' subscribers are notified of changes.",
)
@click.pass_context
def cli(ctx: click.Context, user_id: str) -> None:
    """orderdesk: orders, products and their lifecycle"""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.ClickException(str(exc))
    configure_logging(settings.log_level)
    ctx.obj = CliContext(container=build_container(settings), user_id=user_id)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_add_item)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_remove_item)
order.add_command(order_show)
order.add_command(order_update)
order.add_command(order_update_item)
for command in order_transition_commands():
    order.add_command(command)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
