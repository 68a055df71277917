import click

from stockflow.infrastructure.bootstrap import db_engine, settings
from stockflow.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_show,
    order_total,
    order_update,
)
from stockflow.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_show,
)
from stockflow.infrastructure.cli.user_commands import (
    user_list,
    user_register,
    user_show,
)
from stockflow.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """stockflow — orders against a finite product inventory"""
    try:
        config = settings()
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    configure_logging(config.log_level, config.log_json)


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def user() -> None:
    """Manage users."""


@db.command("init")
def db_init() -> None:
    """Create the schema if it does not exist yet."""
    engine = db_engine()
    click.echo(f"Database ready at {engine.url.render_as_string(hide_password=True)}")


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_total)
order.add_command(order_update)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
user.add_command(user_list)
user.add_command(user_register)
user.add_command(user_show)
