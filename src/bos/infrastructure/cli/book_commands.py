"""CLI commands for the catalog."""

from __future__ import annotations

import click

from bos.application.catalog import (
    AddAuthorHandler,
    AddBookHandler,
    ListBooksHandler,
    UpdateBookPriceHandler,
)
from bos.domain.outcome import handle
from bos.infrastructure.bootstrap import Container


def _fail(message: str):
    raise click.ClickException(message)


@click.command("add")
@click.option("--first-name", required=True, help="Author first name.")
@click.option("--last-name", required=True, help="Author last name.")
@click.pass_obj
def author_add(container: Container, first_name: str, last_name: str) -> None:
    """Add a new author."""
    outcome = AddAuthorHandler(container.unit_of_work()).handle(first_name, last_name)
    author_id = handle(outcome, lambda value: value, _fail)
    click.echo(f"Author #{author_id} '{first_name} {last_name}' added")


@click.command("add")
@click.option("--title", required=True, help="Book title.")
@click.option("--year", required=True, type=int, help="Publication year.")
@click.option("--price", required=True, help="Price (e.g. 49.90).")
@click.option("--available", required=True, type=int, help="Units in stock.")
@click.option("--author", "author_ids", multiple=True, type=int, help="Author ID (repeatable).")
@click.pass_obj
def book_add(
    container: Container,
    title: str,
    year: int,
    price: str,
    available: int,
    author_ids: tuple[int, ...],
) -> None:
    """Add a new book to the catalog."""
    outcome = AddBookHandler(container.unit_of_work()).handle(
        title=title,
        year=year,
        price=price,
        available=available,
        author_ids=list(author_ids),
    )
    book_id = handle(outcome, lambda value: value, _fail)
    click.echo(f"Book #{book_id} '{title}' added at {price} ({available} available)")


@click.command("list")
@click.pass_obj
def book_list(container: Container) -> None:
    """List all books in the catalog."""
    books = ListBooksHandler(container.unit_of_work()).handle()

    if not books:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<6} {'Title':<30} {'Price':>10} {'Available':>10}")
    click.echo("-" * 59)
    for b in books:
        click.echo(f"{b.id:<6} {b.title[:30]:<30} {b.price:>10} {b.available:>10}")


@click.command("price")
@click.option("--id", "book_id", required=True, type=int, help="Book ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.pass_obj
def book_price(container: Container, book_id: int, price: str) -> None:
    """Update a book's price (existing orders keep theirs)."""
    outcome = UpdateBookPriceHandler(container.unit_of_work()).handle(book_id, price)
    handle(outcome, lambda value: value, _fail)
    click.echo(f"Book #{book_id} price updated to {price}")
