import click
import uvicorn

from bos.infrastructure.bootstrap import Container, default_container
from bos.infrastructure.cli.book_commands import author_add, book_add, book_list, book_price
from bos.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
)


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """BOS - Bookstore Order System"""
    if ctx.obj is None:
        ctx.obj = default_container()


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def book() -> None:
    """Manage the book catalog."""


@cli.group()
def author() -> None:
    """Manage authors."""


@cli.group()
def db() -> None:
    """Manage the database."""


@db.command("init")
@click.pass_obj
def db_init(container: Container) -> None:
    """Create any missing tables."""
    container.init_schema()
    click.echo("Database schema is up to date.")


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port.")
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    uvicorn.run("bos.infrastructure.web.app:create_app", factory=True, host=host, port=port)


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
book.add_command(book_add)
book.add_command(book_list)
book.add_command(book_price)
author.add_command(author_add)
