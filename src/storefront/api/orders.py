"""FastAPI endpoints for orders."""

import json

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from storefront.api.schemas import OrderListResponse, OrderResponse, PlaceOrderRequest, UpdateOrderStatusRequest
from storefront.auth.dependencies import require_admin
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus

router = APIRouter(prefix="/orders", tags=["orders"])


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(**order.as_dict())


@router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest) -> OrderResponse:
    command = PlaceOrder(
        user_id=body.user_id,
        products=json.dumps([line.model_dump() for line in body.products]),
        address_id=body.address_id,
        payment_id=body.payment_id,
        total_amount=body.total_amount,
        order_number=body.order_number,
    )
    order_number = current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get_by_order_number(order_number))


@router.get("", response_model=OrderListResponse)
async def list_orders(_admin: dict = Depends(require_admin)) -> OrderListResponse:
    orders = current_domain.repository_for(Order).list_all()
    return OrderListResponse(orders=[_order_response(o) for o in orders])


@router.get("/{user_id}", response_model=OrderListResponse)
async def list_user_orders(user_id: str) -> OrderListResponse:
    orders = current_domain.repository_for(Order).for_user(user_id)
    return OrderListResponse(orders=[_order_response(o) for o in orders])


@router.put("/{order_number}", response_model=OrderResponse)
async def update_order_status(
    order_number: str,
    body: UpdateOrderStatusRequest,
    request: Request,
    _admin: dict = Depends(require_admin),
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_number=order_number,
        status=body.status,
        strict=request.app.state.settings.strict_order_status,
    )
    current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get_by_order_number(order_number))
