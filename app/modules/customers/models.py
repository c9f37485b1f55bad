# -*- coding: utf-8 -*-
"""
backend/app/modules/customers/models.py

Clientes pendientes: capturados por un admin antes de que el cliente
se registre. Se enlazan al registrarse por email.

Autor: Zoomi
Fecha: 2026-09-06
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PendingCustomer(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    # Para listados; se arma desde street/city/state/zip cuando existen
    address: str = ""
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    created_at: str


class PendingCustomerInput(BaseModel):
    """Entrada normalizada (cadenas recortadas, vacías = sin valor)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: str = ""
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""

    def is_empty(self) -> bool:
        return not any(
            (
                self.first_name,
                self.last_name,
                self.email,
                self.street,
                self.city,
                self.state,
                self.zip,
                self.address,
            )
        )


__all__ = ["PendingCustomer", "PendingCustomerInput"]
