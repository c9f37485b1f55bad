# -*- coding: utf-8 -*-
"""
backend/app/modules/finances/models.py

Modelos de dominio de Finanzas: unidades (lavadora + secadora) con sus
costos y gastos manuales. Se persisten como JSON en camelCase.

Autor: Zoomi
Fecha: 2026-09-06
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _StoredModel(BaseModel):
    # JSON almacenado en camelCase; campos extra (modelo, notas...) se ignoran
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CostEntry(_StoredModel):
    """Costo adicional de una máquina (reparación, refacciones...)."""
    amount: float = 0
    description: str = ""
    date: Optional[str] = None


class MachineInfo(_StoredModel):
    purchase_cost: float = 0
    repair_costs: float = 0
    acquisition_date: Optional[str] = None
    # Si hay entradas, repair_costs se ignora en los totales
    additional_costs: list[CostEntry] = Field(default_factory=list)


class Unit(_StoredModel):
    id: str
    created_at: str
    washer: MachineInfo = Field(default_factory=MachineInfo)
    dryer: MachineInfo = Field(default_factory=MachineInfo)


class ManualExpense(_StoredModel):
    id: str
    date: str  # YYYY-MM-DD
    amount: float
    description: str
    created_at: str  # ISO


class ExpenseTransaction(_StoredModel):
    date: str
    amount: float
    description: str
    unit_id: str = ""


__all__ = ["CostEntry", "MachineInfo", "Unit", "ManualExpense", "ExpenseTransaction"]
