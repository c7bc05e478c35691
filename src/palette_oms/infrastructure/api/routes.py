"""Order, agenda and catalog endpoints."""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from palette_oms.application.cancel_order import CancelOrderHandler
from palette_oms.application.confirm_order import ConfirmOrderHandler
from palette_oms.application.delete_order import DeleteOrderHandler
from palette_oms.application.deliver_order import DeliverOrderHandler
from palette_oms.application.dto import OrderDTO, PaletteTypeDTO, TimeSlotDTO
from palette_oms.application.generate_slots import GenerateSlotsHandler
from palette_oms.application.list_orders import ListOrdersHandler
from palette_oms.application.show_agenda import ShowAgendaHandler
from palette_oms.application.show_order import ShowOrderHandler
from palette_oms.application.show_palette_types import ShowPaletteTypesHandler
from palette_oms.application.submit_order import SubmitOrderHandler
from palette_oms.domain.repository.unit_of_work import UnitOfWork
from palette_oms.infrastructure.api.auth import Identity, get_current_identity, require_admin
from palette_oms.infrastructure.api.schemas import (
    GenerateSlotsRequest,
    GenerateSlotsResponse,
    OrderCreate,
)
from palette_oms.infrastructure.bootstrap import slot_failure_policy

logger = logging.getLogger(__name__)

orders_router = APIRouter(prefix="/commandes", tags=["Orders"])
agenda_router = APIRouter(tags=["Agenda"])


def get_uow(request: Request) -> UnitOfWork:
    """Dependency injection for a fresh unit of work"""
    return request.app.state.uow_factory()


# ============================================================================
# ORDERS
# ============================================================================


@orders_router.post("", response_model=OrderDTO, status_code=status.HTTP_201_CREATED)
def submit_order(
    payload: OrderCreate,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_uow),
):
    """Admit a new provisional order and reserve its delivery slot"""
    handler = SubmitOrderHandler(uow, slot_failure_policy(request.app.state.settings))
    dto = handler.handle(payload.to_request())
    logger.info(f"User {identity.user_id} submitted order #{dto.id}")
    return dto


@orders_router.post("/generate-slots", response_model=GenerateSlotsResponse)
def generate_slots(
    request: Request,
    payload: Optional[GenerateSlotsRequest] = None,
    _identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_uow),
):
    """Create the delivery slots of a forward-looking window (idempotent)"""
    settings = request.app.state.settings
    payload = payload or GenerateSlotsRequest()
    start_date = payload.start_date or date.today()
    days_ahead = (
        payload.days_ahead if payload.days_ahead is not None else settings.DEFAULT_DAYS_AHEAD
    )

    created = GenerateSlotsHandler(uow, settings.SLOT_CAPACITY).handle(start_date, days_ahead)
    return GenerateSlotsResponse(created=created, start_date=start_date, days_ahead=days_ahead)


@orders_router.get("", response_model=list[OrderDTO])
def list_orders(
    status_filter: Optional[str] = Query(None, alias="status"),
    _identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_uow),
):
    """List orders, newest first"""
    return ListOrdersHandler(uow).handle(status_filter)


@orders_router.get("/{order_id}", response_model=OrderDTO)
def get_order(
    order_id: int,
    _identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_uow),
):
    return ShowOrderHandler(uow).handle(order_id)


@orders_router.put("/{order_id}/valider", response_model=OrderDTO)
def confirm_order(
    order_id: int,
    _identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_uow),
):
    """Confirm a provisional order"""
    return ConfirmOrderHandler(uow).handle(order_id)


@orders_router.put("/{order_id}/livrer", response_model=OrderDTO)
def deliver_order(
    order_id: int,
    _identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_uow),
):
    """Mark an order as delivered"""
    return DeliverOrderHandler(uow).handle(order_id)


@orders_router.delete("/{order_id}", response_model=OrderDTO)
def cancel_order(
    order_id: int,
    _identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_uow),
):
    """Cancel an order and give its slot unit back"""
    return CancelOrderHandler(uow).handle(order_id)


@orders_router.delete("/{order_id}/supprimer", status_code=status.HTTP_200_OK)
def delete_order(
    order_id: int,
    identity: Identity = Depends(require_admin),
    uow: UnitOfWork = Depends(get_uow),
):
    """Remove a cancelled order for good (administrators only)"""
    DeleteOrderHandler(uow).handle(order_id)
    logger.info(f"Admin {identity.user_id} deleted order #{order_id}")
    return {"id": order_id, "deleted": True}


# ============================================================================
# AGENDA & CATALOG
# ============================================================================


@agenda_router.get("/agenda", response_model=list[TimeSlotDTO])
def agenda(
    _identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_uow),
):
    """Available delivery slots from today on, by date"""
    return ShowAgendaHandler(uow).handle(date.today())


@agenda_router.get("/palette-types", response_model=list[PaletteTypeDTO])
def palette_types(
    _identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_uow),
):
    return ShowPaletteTypesHandler(uow).handle()
