from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..container import get_container
from ..services import OrderService
from .schemas import (
    CreateOrderIn,
    OrderIdOut,
    OrderOut,
    OrderSummaryOut,
    UpdateOrderIn,
)

router = APIRouter(prefix="/order", tags=["orders"])


def get_order_service() -> OrderService:
    return get_container().resolve(OrderService)


@router.get("/not-approved", response_model=List[OrderSummaryOut])
def get_not_approved_orders(service: OrderService = Depends(get_order_service)):
    return [OrderSummaryOut.model_validate(o) for o in service.get_not_approved_orders()]


@router.get("/user-orders/{user_id}", response_model=List[OrderSummaryOut])
def get_user_orders(user_id: int, service: OrderService = Depends(get_order_service)):
    return [OrderSummaryOut.model_validate(o) for o in service.get_user_orders(user_id)]


@router.get("/{order_id}", response_model=OrderSummaryOut)
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    summary = service.get_order(order_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderSummaryOut.model_validate(summary)


@router.put("/{order_id}/approve", response_model=OrderIdOut)
def approve_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return OrderIdOut(id=service.approve_order(order_id))


@router.put("/{order_id}/decline", response_model=OrderIdOut)
def decline_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return OrderIdOut(id=service.decline_order(order_id))


# cargo lines are changed through the cargo registrar, not here
@router.put("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: int,
    payload: UpdateOrderIn,
    service: OrderService = Depends(get_order_service),
):
    return OrderOut.model_validate(service.update_order(order_id, payload.to_domain()))


@router.post("", response_model=OrderOut, status_code=201)
@router.post("/", response_model=OrderOut, status_code=201, include_in_schema=False)
def create_order(
    payload: CreateOrderIn, service: OrderService = Depends(get_order_service)
):
    return OrderOut.model_validate(service.create_order(payload.to_domain()))
