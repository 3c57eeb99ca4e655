"""Tests for the order query handlers."""

from bos.application.show_order import ListOrdersHandler, ShowOrderHandler
from tests.application.builders import catalog, place_order
from tests.fakes import FakeUnitOfWork


def _setup() -> FakeUnitOfWork:
    books, authors = catalog()
    return FakeUnitOfWork(books, authors)


class TestShowOrder:

    def test_rich_view(self):
        uow = _setup()
        order_id = place_order(uow, (1, 10), (2, 5))

        view = ShowOrderHandler(uow).handle(order_id)

        assert view.id == order_id
        assert view.status == "NEW"
        assert view.total == "1075.00"
        assert view.recipient.email == "jan@example.com"
        first = view.items[0]
        assert (first.book_id, first.title, first.quantity) == (1, "Effective Java", 10)
        assert first.unit_price == "49.90"
        assert first.line_total == "499.00"

    def test_missing_order(self):
        assert ShowOrderHandler(_setup()).handle(7) is None

    def test_line_of_removed_book_keeps_snapshot(self):
        uow = _setup()
        order_id = place_order(uow, (1, 1))
        uow.books._store.pop(1)

        item = ShowOrderHandler(uow).handle(order_id).items[0]

        assert item.title is None
        assert item.authors == []
        assert item.unit_price == "49.90"


class TestListOrders:

    def test_empty(self):
        assert ListOrdersHandler(_setup()).handle() == []

    def test_in_id_order(self):
        uow = _setup()
        first = place_order(uow, (1, 1))
        second = place_order(uow, (2, 1))
        assert [o.id for o in ListOrdersHandler(uow).handle()] == [first, second]
