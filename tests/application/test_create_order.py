"""Integration tests for the CreateOrder use case.

Uses the in-memory unit of work, no database.
"""

from returns.pipeline import is_successful

from bos.application.create_order import CreateOrderHandler
from bos.application.dto import OrderItemSpec
from bos.domain.model.order import MAX_LINE_ITEMS
from bos.domain.model.order_status import OrderStatus
from bos.domain.model.value_objects import Money
from tests.application.builders import catalog, recipient
from tests.fakes import FakeUnitOfWork


def _setup() -> tuple[CreateOrderHandler, FakeUnitOfWork]:
    books, authors = catalog()
    uow = FakeUnitOfWork(books, authors)
    return CreateOrderHandler(uow), uow


class TestCreateOrderHappyPath:

    def test_creates_order_and_reserves_stock(self):
        handler, uow = _setup()
        outcome = handler.handle(
            recipient(), [OrderItemSpec(1, 10), OrderItemSpec(2, 5)]
        )

        assert is_successful(outcome)
        order = uow.orders.get_by_id(outcome.unwrap())
        assert order.status == OrderStatus.NEW
        assert order.total == Money.of("1075.00")
        assert uow.stock(1) == 0
        assert uow.stock(2) == 5
        assert uow.commits == 1

    def test_sequential_ids(self):
        handler, _ = _setup()
        first = handler.handle(recipient(), [OrderItemSpec(1, 1)]).unwrap()
        second = handler.handle(recipient(), [OrderItemSpec(2, 1)]).unwrap()
        assert second == first + 1

    def test_recipient_is_stored_trimmed(self):
        handler, uow = _setup()
        order_id = handler.handle(
            recipient(city="  Gdansk "), [OrderItemSpec(1, 1)]
        ).unwrap()
        assert uow.orders.get_by_id(order_id).recipient.city == "Gdansk"

    def test_duplicate_lines_are_merged(self):
        handler, uow = _setup()
        order_id = handler.handle(
            recipient(), [OrderItemSpec(1, 2), OrderItemSpec(2, 1), OrderItemSpec(1, 3)]
        ).unwrap()

        order = uow.orders.get_by_id(order_id)
        assert order.reserved_quantities == {1: 5, 2: 1}
        assert uow.stock(1) == 5

    def test_price_is_snapshotted(self):
        handler, uow = _setup()
        order_id = handler.handle(recipient(), [OrderItemSpec(1, 2)]).unwrap()

        book = uow.books.get_by_id(1)
        book.update_price(Money.of("999.00"))
        uow.books.save(book)

        order = uow.orders.get_by_id(order_id)
        assert order.items[0].unit_price == Money.of("49.90")
        assert order.total == Money.of("99.80")


class TestCreateOrderRejected:

    def test_unknown_book(self):
        handler, uow = _setup()
        outcome = handler.handle(recipient(), [OrderItemSpec(1, 1), OrderItemSpec(42, 1)])

        assert outcome.failure() == "Can not find a book with id: 42"
        assert uow.order_count() == 0
        assert uow.stock(1) == 10

    def test_out_of_stock_leaves_everything_untouched(self):
        handler, uow = _setup()
        outcome = handler.handle(recipient(), [OrderItemSpec(1, 3), OrderItemSpec(2, 11)])

        assert not is_successful(outcome)
        assert "Not enough books available" in outcome.failure()
        assert "'Java Puzzlers'" in outcome.failure()
        assert uow.stock(1) == 10
        assert uow.stock(2) == 10
        assert uow.order_count() == 0
        assert uow.commits == 0

    def test_merged_quantity_checked_against_stock(self):
        handler, uow = _setup()
        outcome = handler.handle(recipient(), [OrderItemSpec(1, 6), OrderItemSpec(1, 5)])
        assert "requested 11, available 10" in outcome.failure()
        assert uow.stock(1) == 10

    def test_empty_items(self):
        handler, uow = _setup()
        outcome = handler.handle(recipient(), [])
        assert outcome.failure() == "Order must contain at least one item"
        assert uow.order_count() == 0

    def test_too_many_items(self):
        handler, _ = _setup()
        specs = [OrderItemSpec(i, 1) for i in range(1, MAX_LINE_ITEMS + 2)]
        outcome = handler.handle(recipient(), specs)
        assert outcome.failure() == f"Maximum {MAX_LINE_ITEMS} items per order"

    def test_non_positive_quantity(self):
        handler, uow = _setup()
        outcome = handler.handle(recipient(), [OrderItemSpec(1, 0)])
        assert "must be positive" in outcome.failure()
        assert uow.stock(1) == 10

    def test_blank_recipient_fields(self):
        handler, uow = _setup()
        outcome = handler.handle(recipient(name="", phone=" "), [OrderItemSpec(1, 1)])
        assert outcome.failure() == "Recipient name, phone is required"
        assert uow.order_count() == 0

    def test_invalid_email(self):
        handler, _ = _setup()
        outcome = handler.handle(recipient(email="nope"), [OrderItemSpec(1, 1)])
        assert "email is invalid" in outcome.failure()


class TestStockConservation:

    def test_reserved_plus_available_is_constant(self):
        handler, uow = _setup()
        handler.handle(recipient(), [OrderItemSpec(1, 4)])
        handler.handle(recipient(), [OrderItemSpec(1, 3), OrderItemSpec(2, 2)])
        handler.handle(recipient(), [OrderItemSpec(1, 4)])  # rejected, only 3 left

        reserved = {1: 0, 2: 0}
        for order in uow.orders.list_all():
            for book_id, qty in order.reserved_quantities.items():
                reserved[book_id] += qty

        assert uow.order_count() == 2
        assert uow.stock(1) + reserved[1] == 10
        assert uow.stock(2) + reserved[2] == 10


class TestSellOutExample:

    def test_two_books_sold_out_then_rejected(self):
        books, authors = catalog()
        books[0].price, books[0].available = Money.of("120.00"), 5
        books[1].price, books[1].available = Money.of("95.00"), 5
        uow = FakeUnitOfWork(books, authors)
        handler = CreateOrderHandler(uow)

        order_id = handler.handle(
            recipient(), [OrderItemSpec(1, 5), OrderItemSpec(2, 5)]
        ).unwrap()

        assert uow.orders.get_by_id(order_id).total == Money.of("1075.00")
        assert uow.stock(1) == 0
        assert uow.stock(2) == 0

        outcome = handler.handle(recipient(), [OrderItemSpec(1, 1)])
        assert "Not enough books available" in outcome.failure()
        assert uow.order_count() == 1
