# -*- coding: utf-8 -*-
"""
backend/app/modules/customers/services.py

Alta, búsqueda y baja de clientes pendientes sobre JsonBlobStore
(zoomi:pending-customers / pending-customers.json).

- Alta = upsert por email (sin distinguir mayúsculas). En una
  actualización, los campos vacíos conservan el valor previo.
- Sin locks: la última escritura gana.

Autor: Zoomi
Fecha: 2026-09-06
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError

from app.shared.storage import JsonBlobStore

from .errors import InvalidPendingCustomerError
from .models import PendingCustomer, PendingCustomerInput

logger = logging.getLogger(__name__)

PENDING_CUSTOMERS_KEY = "zoomi:pending-customers"
PENDING_CUSTOMERS_FILE = "pending-customers.json"

_INPUT_FIELDS = ("firstName", "lastName", "email", "address", "street", "city", "state", "zip")


def combine_address(street: str = "", city: str = "", state: str = "", zip: str = "") -> str:
    """
    "street, city, state zip" omitiendo partes vacías.

    >>> combine_address("1 Main St", "Austin", "TX", "78701")
    '1 Main St, Austin, TX 78701'
    """
    parts = [p.strip() for p in (street, city, state, zip) if p and p.strip()]
    if len(parts) == 4:
        return f"{parts[0]}, {parts[1]}, {parts[2]} {parts[3]}"
    return ", ".join(parts)


def parse_pending_input(body: dict[str, Any]) -> PendingCustomerInput:
    """
    Normaliza el cuerpo del formulario: solo cadenas, recortadas.

    Raises:
        InvalidPendingCustomerError: ningún campo con valor.
    """
    values = {
        name: body[name].strip() if isinstance(body.get(name), str) else ""
        for name in _INPUT_FIELDS
    }
    data = PendingCustomerInput.model_validate(values)
    if data.is_empty():
        raise InvalidPendingCustomerError()
    return data


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class PendingCustomersService:
    """Operaciones sobre la lista de clientes pendientes."""

    def __init__(self, blob: Optional[JsonBlobStore] = None):
        self.blob = blob or JsonBlobStore(PENDING_CUSTOMERS_KEY, PENDING_CUSTOMERS_FILE)

    async def list_all(self) -> list[PendingCustomer]:
        items: list[PendingCustomer] = []
        for raw in await self.blob.read_all():
            if not isinstance(raw, dict):
                continue
            try:
                items.append(PendingCustomer.model_validate(raw))
            except ValidationError as e:
                logger.warning("pending_customer_skipped id=%s error=%s", raw.get("id"), e)
        return items

    async def _save(self, items: list[PendingCustomer]) -> None:
        await self.blob.write_all(
            [p.model_dump(by_alias=True, exclude_none=True) for p in items]
        )

    async def add(self, data: PendingCustomerInput) -> PendingCustomer:
        """
        Crea o actualiza (por email) un cliente pendiente.

        La dirección combinada sale de street/city/state/zip; si ninguno
        viene, se usa `address` tal cual.
        """
        items = await self.list_all()
        has_parts = any((data.street, data.city, data.state, data.zip))
        combined = (
            combine_address(data.street, data.city, data.state, data.zip)
            if has_parts
            else data.address
        )

        existing = None
        if data.email:
            wanted = _normalize_email(data.email)
            existing = next((p for p in items if _normalize_email(p.email) == wanted), None)

        if existing is not None:
            updated = existing.model_copy(
                update={
                    "first_name": data.first_name or existing.first_name,
                    "last_name": data.last_name or existing.last_name,
                    "street": data.street or existing.street,
                    "city": data.city or existing.city,
                    "state": data.state or existing.state,
                    "zip": data.zip or existing.zip,
                    "address": combined or existing.address,
                }
            )
            await self._save([updated if p.id == existing.id else p for p in items])
            logger.info("pending_customer_updated id=%s", updated.id)
            return updated

        item = PendingCustomer(
            id=str(uuid.uuid4()),
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            street=data.street or None,
            city=data.city or None,
            state=data.state or None,
            zip=data.zip or None,
            address=combined,
            created_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        )
        items.append(item)
        await self._save(items)
        logger.info("pending_customer_created id=%s", item.id)
        return item

    async def find_by_email(self, email: str) -> Optional[PendingCustomer]:
        wanted = _normalize_email(email)
        for item in await self.list_all():
            if _normalize_email(item.email) == wanted:
                return item
        return None

    async def remove_by_email(self, email: str) -> bool:
        """Elimina por email; solo escribe si algo cambió."""
        wanted = _normalize_email(email)
        items = await self.list_all()
        remaining = [p for p in items if _normalize_email(p.email) != wanted]
        if len(remaining) == len(items):
            return False
        await self._save(remaining)
        return True


def get_pending_customers_service() -> PendingCustomersService:
    return PendingCustomersService()


__all__ = [
    "PENDING_CUSTOMERS_KEY",
    "PENDING_CUSTOMERS_FILE",
    "combine_address",
    "parse_pending_input",
    "PendingCustomersService",
    "get_pending_customers_service",
]
