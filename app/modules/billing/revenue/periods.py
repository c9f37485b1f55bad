# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/revenue/periods.py

Fronteras de mes para los reportes de ingresos y periodos de finanzas.

- get_month_bounds(offset): [inicio, fin] inclusivos en segundos unix,
  del día 1 a las 00:00:00 al último día a las 23:59:59, en hora local
  (o en REVENUE_TIMEZONE si está configurada).
- get_month_name(offset): etiqueta en inglés ("July") para el panel.
- get_period_date_range(period): rango YYYY-MM-DD para ytd / this / last.

Autor: Zoomi
Fecha: 2026-09-04
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Literal, Optional
from zoneinfo import ZoneInfo

MonthKey = Literal["last", "this", "next"]
FinancesPeriod = Literal["ytd", "this", "last"]

MONTH_KEYS: tuple[MonthKey, ...] = ("last", "this", "next")
FINANCES_PERIODS: tuple[FinancesPeriod, ...] = ("ytd", "this", "last")

_MONTH_OFFSETS: dict[str, int] = {"last": -1, "this": 0, "next": 1}


@dataclass(frozen=True)
class MonthBounds:
    """Mes calendario como rango inclusivo de timestamps unix."""
    start: int
    end: int

    def contains(self, ts: Optional[int]) -> bool:
        return ts is not None and self.start <= ts <= self.end


def month_offset(key: MonthKey) -> int:
    """'last' -> -1, 'this' -> 0, 'next' -> 1."""
    return _MONTH_OFFSETS[key]


def resolve_timezone(tz: Optional[tzinfo | str] = None) -> Optional[tzinfo]:
    """
    Zona horaria para las fronteras de mes.

    None -> REVENUE_TIMEZONE de settings; si tampoco existe, hora local del servidor.
    """
    if isinstance(tz, str):
        return ZoneInfo(tz)
    if tz is not None:
        return tz
    from app.core.settings import get_settings

    name = get_settings().revenue_timezone
    return ZoneInfo(name) if name else None


def _local_now(now: Optional[datetime], tz: Optional[tzinfo]) -> datetime:
    if now is None:
        return datetime.now(tz) if tz is not None else datetime.now().astimezone()
    if now.tzinfo is None:
        return now.replace(tzinfo=tz) if tz is not None else now.astimezone()
    return now.astimezone(tz) if tz is not None else now.astimezone()


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def _timestamp(day: date, at: time, tz: Optional[tzinfo]) -> int:
    moment = datetime.combine(day, at)
    if tz is not None:
        moment = moment.replace(tzinfo=tz)
    # Naive = hora local del servidor
    return int(moment.timestamp())


def get_month_bounds(
    offset: int,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo | str] = None,
) -> MonthBounds:
    """
    Fronteras del mes `offset` meses respecto a `now`.

    Args:
        offset: -1 (mes pasado), 0 (mes actual), 1 (mes siguiente)
        now: instante de referencia (default: ahora)
        tz: zona horaria (default: REVENUE_TIMEZONE u hora local)
    """
    zone = resolve_timezone(tz)
    current = _local_now(now, zone)
    year, month = _shift_month(current.year, current.month, offset)
    last_day = calendar.monthrange(year, month)[1]

    start = _timestamp(date(year, month, 1), time(0, 0, 0), zone)
    end = _timestamp(date(year, month, last_day), time(23, 59, 59), zone)
    return MonthBounds(start=start, end=end)


def get_month_name(
    offset: int,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo | str] = None,
) -> str:
    """
    Nombre del mes en inglés ("July").

    La etiqueta se calcula en MONTH_LABEL_TIMEZONE salvo que se indique `tz`.
    """
    if tz is None:
        from app.core.settings import get_settings
        tz = get_settings().month_label_timezone
    zone = resolve_timezone(tz)
    current = _local_now(now, zone)
    _, month = _shift_month(current.year, current.month, offset)
    return calendar.month_name[month]


def get_period_date_range(
    period: FinancesPeriod,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo | str] = None,
) -> tuple[str, str]:
    """
    Rango YYYY-MM-DD inclusivo para el selector de periodo de finanzas.

    - ytd: 1 de enero hasta hoy
    - this: mes actual completo
    - last: mes anterior completo
    """
    current = _local_now(now, resolve_timezone(tz))
    if period == "ytd":
        return date(current.year, 1, 1).isoformat(), current.date().isoformat()

    year, month = _shift_month(current.year, current.month, -1 if period == "last" else 0)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1).isoformat(), date(year, month, last_day).isoformat()


def get_period_label(
    period: FinancesPeriod,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo | str] = None,
) -> str:
    """Etiqueta legible: 'Year to date', 'This month (July)', 'Last month (June)'."""
    if period == "ytd":
        return "Year to date"
    if period == "this":
        return f"This month ({get_month_name(0, now, tz)})"
    return f"Last month ({get_month_name(-1, now, tz)})"


__all__ = [
    "MonthKey",
    "FinancesPeriod",
    "MONTH_KEYS",
    "FINANCES_PERIODS",
    "MonthBounds",
    "month_offset",
    "resolve_timezone",
    "get_month_bounds",
    "get_month_name",
    "get_period_date_range",
    "get_period_label",
]
# Fin del archivo backend/app/modules/billing/revenue/periods.py
