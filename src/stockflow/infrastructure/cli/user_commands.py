"""CLI commands for the User aggregate."""

from __future__ import annotations

import click

from stockflow.application.register_user import RegisterUserHandler
from stockflow.application.show_user import ListUsersHandler, ShowUserHandler
from stockflow.infrastructure.bootstrap import unit_of_work_factory
from stockflow.infrastructure.cli.errors import domain_errors


@click.command("register")
@click.option("--username", required=True, help="Login name.")
@click.option("--email", required=True, help="Contact e-mail address.")
def user_register(username: str, email: str) -> None:
    """Register a new user."""
    with domain_errors():
        user = RegisterUserHandler(unit_of_work_factory()).handle(username, email)

    click.echo(f"User #{user.id} '{user.username}' registered")


@click.command("list")
def user_list() -> None:
    """List all users."""
    users = ListUsersHandler(unit_of_work_factory()).handle()

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<6} {'Username':<20} {'Email':<30}")
    click.echo("-" * 58)
    for u in users:
        click.echo(f"{u.id:<6} {u.username:<20} {u.email:<30}")


@click.command("show")
@click.option("--id", "user_id", required=True, type=int, help="User ID.")
def user_show(user_id: int) -> None:
    """Show one user."""
    with domain_errors():
        user = ShowUserHandler(unit_of_work_factory()).handle(user_id)

    click.echo(f"User #{user.id} '{user.username}' <{user.email}>")
