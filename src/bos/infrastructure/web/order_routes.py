"""HTTP routes for the Order aggregate."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from bos.application.create_order import CreateOrderHandler
from bos.application.delete_order import DeleteOrderHandler
from bos.application.show_order import ListOrdersHandler, ShowOrderHandler
from bos.application.update_order_status import UpdateOrderStatusHandler
from bos.domain.outcome import handle
from bos.infrastructure.bootstrap import Container
from bos.infrastructure.web.responses import error_response, get_container, to_json
from bos.infrastructure.web.schemas import CreateOrderPayload, UpdateStatusPayload

order_router = APIRouter(prefix="/orders", tags=["orders"])


def _not_found(order_id: int) -> JSONResponse:
    return error_response(404, f"Order #{order_id} not found")


@order_router.get("")
def get_all_orders(container: Container = Depends(get_container)):
    return [to_json(order) for order in ListOrdersHandler(container.unit_of_work()).handle()]


@order_router.get("/{order_id}")
def get_order_by_id(order_id: int, container: Container = Depends(get_container)):
    order = ShowOrderHandler(container.unit_of_work()).handle(order_id)
    if order is None:
        return _not_found(order_id)
    return to_json(order)


@order_router.post("", status_code=201)
def create_order(payload: CreateOrderPayload, container: Container = Depends(get_container)):
    outcome = CreateOrderHandler(container.unit_of_work()).handle(
        payload.recipient.to_dto(), payload.item_specs()
    )

    def created(order_id: int) -> JSONResponse:
        order = ShowOrderHandler(container.unit_of_work()).handle(order_id)
        return JSONResponse(
            status_code=201,
            content=to_json(order),
            headers={"Location": f"/orders/{order_id}"},
        )

    return handle(outcome, created, lambda message: error_response(400, message))


@order_router.patch("/{order_id}/status")
def update_order_status(
    order_id: int,
    payload: UpdateStatusPayload,
    container: Container = Depends(get_container),
):
    if ShowOrderHandler(container.unit_of_work()).handle(order_id) is None:
        return _not_found(order_id)

    outcome = UpdateOrderStatusHandler(
        container.unit_of_work(), container.status_policy
    ).handle(order_id, payload.status)
    return handle(outcome, to_json, lambda message: error_response(400, message))


@order_router.delete("/{order_id}", status_code=204)
def delete_order(order_id: int, container: Container = Depends(get_container)):
    DeleteOrderHandler(container.unit_of_work()).handle(order_id)
    return Response(status_code=204)
