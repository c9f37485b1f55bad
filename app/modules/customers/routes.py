# -*- coding: utf-8 -*-
"""
backend/app/modules/customers/routes.py

Rutas de Admin → Clientes pendientes.

- GET  /api/admin/pending-customers
- POST /api/admin/pending-customers (solo editores)

Autor: Zoomi
Fecha: 2026-09-06
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.shared.admin_auth import AdminAccess, AdminEditAccess
from app.shared.storage import StoreUnavailableError
from app.shared.utils.json_response import UTF8JSONResponse

from .errors import InvalidPendingCustomerError
from .services import PendingCustomersService, get_pending_customers_service, parse_pending_input

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/pending-customers", tags=["admin-customers"])


@router.get("")
async def list_pending_customers(
    _role: AdminAccess,
    service: PendingCustomersService = Depends(get_pending_customers_service),
):
    """Clientes capturados por un admin que aún no se registran."""
    items = await service.list_all()
    return UTF8JSONResponse(
        {"pendingCustomers": [p.model_dump(by_alias=True, exclude_none=True) for p in items]}
    )


@router.post("")
async def add_pending_customer(
    _role: AdminEditAccess,
    body: dict[str, Any] = Body(...),
    service: PendingCustomersService = Depends(get_pending_customers_service),
):
    """Alta o actualización (por email) de un cliente pendiente."""
    try:
        data = parse_pending_input(body)
        item = await service.add(data)
    except InvalidPendingCustomerError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError as e:
        logger.error(f"[pending_customers] {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.to_dict()["message"],
        )

    return UTF8JSONResponse({"pendingCustomer": item.model_dump(by_alias=True, exclude_none=True)})


# Fin del archivo backend/app/modules/customers/routes.py
