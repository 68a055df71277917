"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from stockflow.application.add_product import AddProductHandler
from stockflow.application.show_product import ListProductsHandler, ShowProductHandler
from stockflow.infrastructure.bootstrap import unit_of_work_factory
from stockflow.infrastructure.cli.errors import domain_errors


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Units in stock.")
def product_add(name: str, description: str, price: str, stock: int) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(unit_of_work_factory())

    with domain_errors():
        product = handler.handle(
            name=name, description=description, price=price, stock=stock
        )

    click.echo(
        f"Product #{product.id} '{product.name}' added at "
        f"{product.price:.2f} with {product.stock} in stock"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(unit_of_work_factory()).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>8}")
    click.echo("-" * 47)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.price:>10.2f} {p.stock:>8}")


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show one product."""
    with domain_errors():
        p = ShowProductHandler(unit_of_work_factory()).handle(product_id)

    click.echo(f"Product #{p.id} '{p.name}'")
    if p.description:
        click.echo(f"  {p.description}")
    click.echo(f"Price: {p.price:.2f}")
    click.echo(f"Stock: {p.stock}")
