"""Integration tests for the UpdateOrderStatus use case."""

import pytest
from returns.pipeline import is_successful

from bos.application.update_order_status import UpdateOrderStatusHandler
from bos.domain.model.order_status import OrderStatus, StatusPolicy
from tests.application.builders import catalog, place_order
from tests.fakes import FakeUnitOfWork


def _setup(policy: StatusPolicy | None = None):
    books, authors = catalog()
    uow = FakeUnitOfWork(books, authors)
    order_id = place_order(uow, (1, 3), (2, 2))
    return UpdateOrderStatusHandler(uow, policy or StatusPolicy()), uow, order_id


class TestStatusChange:

    def test_accept_returns_rich_view(self):
        handler, uow, order_id = _setup()
        outcome = handler.handle(order_id, "ACCEPTED")

        assert is_successful(outcome)
        view = outcome.unwrap()
        assert view.status == "ACCEPTED"
        assert view.items[0].title == "Effective Java"
        assert view.items[0].authors == ["Joshua Bloch"]
        assert uow.orders.get_by_id(order_id).status == OrderStatus.ACCEPTED

    def test_status_label_is_case_insensitive(self):
        handler, _, order_id = _setup()
        assert handler.handle(order_id, "accepted").unwrap().status == "ACCEPTED"

    def test_updated_at_moves_forward(self):
        handler, uow, order_id = _setup()
        before = uow.orders.get_by_id(order_id).updated_at
        view = handler.handle(order_id, "ACCEPTED").unwrap()
        assert view.updated_at >= before.isoformat()

    def test_accept_does_not_touch_stock(self):
        handler, uow, order_id = _setup()
        handler.handle(order_id, "ACCEPTED")
        assert uow.stock(1) == 7
        assert uow.stock(2) == 8


class TestStatusRejected:

    @pytest.mark.parametrize("raw", [None, "", "  "])
    def test_missing_status(self, raw):
        handler, _, order_id = _setup()
        assert handler.handle(order_id, raw).failure() == "status incorrect input data"

    def test_unknown_status(self):
        handler, _, order_id = _setup()
        assert handler.handle(order_id, "LOST").failure() == "Unknown order status: 'LOST'"

    def test_unknown_order(self):
        handler, _, _ = _setup()
        assert handler.handle(999, "ACCEPTED").failure() == "Order #999 not found"

    def test_illegal_transition_leaves_status(self):
        handler, uow, order_id = _setup()
        outcome = handler.handle(order_id, "SENT")

        assert "from NEW to SENT" in outcome.failure()
        assert uow.orders.get_by_id(order_id).status == OrderStatus.NEW

    def test_no_way_back_to_new(self):
        handler, uow, order_id = _setup()
        handler.handle(order_id, "ACCEPTED")
        assert not is_successful(handler.handle(order_id, "NEW"))
        assert uow.orders.get_by_id(order_id).status == OrderStatus.ACCEPTED

    def test_canceled_is_final(self):
        handler, uow, order_id = _setup()
        handler.handle(order_id, "CANCELED")
        outcome = handler.handle(order_id, "ACCEPTED")

        assert "no further status changes" in outcome.failure()
        assert uow.orders.get_by_id(order_id).status == OrderStatus.CANCELED


class TestCancelRestock:

    def test_cancel_new_order_restocks(self):
        handler, uow, order_id = _setup()
        handler.handle(order_id, "CANCELED")
        assert uow.stock(1) == 10
        assert uow.stock(2) == 10

    def test_cancel_accepted_order_restocks(self):
        handler, uow, order_id = _setup()
        handler.handle(order_id, "ACCEPTED")
        handler.handle(order_id, "CANCELED")
        assert uow.stock(1) == 10

    def test_cancel_sent_order_keeps_stock(self):
        handler, uow, order_id = _setup()
        handler.handle(order_id, "ACCEPTED")
        handler.handle(order_id, "SENT")
        handler.handle(order_id, "CANCELED")
        assert uow.stock(1) == 7
        assert uow.stock(2) == 8

    def test_restock_states_follow_policy(self):
        policy = StatusPolicy.from_mapping(
            {"NEW": ["ACCEPTED", "CANCELED"], "ACCEPTED": ["CANCELED"]}, ["NEW"]
        )
        handler, uow, order_id = _setup(policy)
        handler.handle(order_id, "ACCEPTED")
        handler.handle(order_id, "CANCELED")
        assert uow.stock(1) == 7
