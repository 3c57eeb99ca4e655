"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from bos.application.create_order import CreateOrderHandler
from bos.application.delete_order import DeleteOrderHandler
from bos.application.dto import OrderItemSpec, RecipientDTO, RichOrderDTO
from bos.application.show_order import ListOrdersHandler, ShowOrderHandler
from bos.application.update_order_status import UpdateOrderStatusHandler
from bos.domain.exceptions import DomainException
from bos.domain.outcome import handle
from bos.infrastructure.bootstrap import Container


def _fail(message: str):
    raise click.ClickException(message)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,4:5' (book id : quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'BookId:Quantity'."
            )
        book_id, qty_str = pair.split(":", 1)
        try:
            specs.append(OrderItemSpec(book_id=int(book_id), quantity=int(qty_str)))
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Book id and quantity must be integers."
            )
    return specs


def _display_order(dto: RichOrderDTO) -> None:
    """Shared formatting for displaying an order."""
    r = dto.recipient
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Recipient: {r.name}, {r.phone}, {r.email}")
    click.echo(f"           {r.street}, {r.zip_code} {r.city}")
    click.echo(f"Created:   {dto.created_at}")
    click.echo(f"Updated:   {dto.updated_at}")
    click.echo()
    click.echo(f"  {'Book':<30} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*57}")
    for item in dto.items:
        title = item.title if item.title is not None else f"<book #{item.book_id}>"
        click.echo(
            f"  {title[:30]:<30} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*57}")
    click.echo(f"  {'Order Total':<37} {dto.total:>20}")


@click.command("create")
@click.option("--name", required=True, help="Recipient name.")
@click.option("--phone", required=True, help="Recipient phone.")
@click.option("--street", required=True, help="Recipient street.")
@click.option("--city", required=True, help="Recipient city.")
@click.option("--zip", "zip_code", required=True, help="Recipient zip code.")
@click.option("--email", required=True, help="Recipient email.")
@click.option("--items", required=True, help="Items as 'BookId:Qty,BookId:Qty'.")
@click.pass_obj
def order_create(
    container: Container,
    name: str,
    phone: str,
    street: str,
    city: str,
    zip_code: str,
    email: str,
    items: str,
) -> None:
    """Place a new order (reserves stock)."""
    specs = _parse_items(items)
    recipient = RecipientDTO(
        name=name, phone=phone, street=street, city=city, zip_code=zip_code, email=email
    )

    try:
        outcome = CreateOrderHandler(container.unit_of_work()).handle(recipient, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    order_id = handle(outcome, lambda value: value, _fail)
    _display_order(ShowOrderHandler(container.unit_of_work()).handle(order_id))


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(container: Container, order_id: int) -> None:
    """Show details of an existing order."""
    dto = ShowOrderHandler(container.unit_of_work()).handle(order_id)
    if dto is None:
        raise click.ClickException(f"Order #{order_id} not found")
    _display_order(dto)


@click.command("list")
@click.pass_obj
def order_list(container: Container) -> None:
    """List all orders."""
    orders = ListOrdersHandler(container.unit_of_work()).handle()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<10} {'Recipient':<25} {'Total':>10}")
    click.echo("-" * 54)
    for o in orders:
        click.echo(f"{o.id:<6} {o.status:<10} {o.recipient.name[:25]:<25} {o.total:>10}")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", required=True, help="New status, e.g. ACCEPTED.")
@click.pass_obj
def order_status(container: Container, order_id: int, status: str) -> None:
    """Change the status of an order."""
    handler = UpdateOrderStatusHandler(container.unit_of_work(), container.status_policy)

    try:
        outcome = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    dto = handle(outcome, lambda value: value, _fail)
    click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.pass_obj
def order_delete(container: Container, order_id: int) -> None:
    """Delete an order (restocks books if it is still NEW)."""
    try:
        DeleteOrderHandler(container.unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")
