"""Currency tracking routes."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from api.deps import get_currency_service, get_logbook_service, get_readonly_logbook_service
from core.models import Currency
from domain.currency import CurrencyService
from domain.logbook import LogbookService

router = APIRouter()


class CurrencyCreate(BaseModel):
    """Request body for tracking a currency."""

    currency_type_id: int = Field(..., description="See /lookups/currency-types")
    is_night_currency: bool = False


def _currency_dict(currency: Currency) -> Dict[str, Any]:
    data = currency.to_dict()
    data["currency_type"] = currency.currency_type.label if currency.currency_type else None
    return data


@router.get("")
async def list_currencies(
    logbook_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> List[Dict[str, Any]]:
    """Tracked currencies with their last computed state."""
    return [_currency_dict(currency) for currency in service.list_currencies(logbook_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_currency(
    logbook_id: int,
    body: CurrencyCreate,
    service: LogbookService = Depends(get_logbook_service),
    currencies: CurrencyService = Depends(get_currency_service),
) -> Dict[str, Any]:
    """Track a currency and compute its state immediately."""
    currency = service.create_currency(logbook_id, body.currency_type_id, body.is_night_currency)
    return _currency_dict(currencies.refresh_currency(logbook_id, currency.currency_id))


@router.post("/refresh")
async def refresh_currencies(
    logbook_id: int,
    as_of: Optional[date] = Query(default=None, description="Evaluate as of this date (default today)"),
    currencies: CurrencyService = Depends(get_currency_service),
) -> List[Dict[str, Any]]:
    """Recompute every tracked currency from the flight history."""
    return [_currency_dict(currency) for currency in currencies.refresh_logbook(logbook_id, as_of)]


@router.get("/{currency_id}")
async def get_currency(
    logbook_id: int,
    currency_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> Dict[str, Any]:
    return _currency_dict(service.get_currency(logbook_id, currency_id))


@router.delete("/{currency_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_currency(
    logbook_id: int,
    currency_id: int,
    service: LogbookService = Depends(get_logbook_service),
) -> None:
    service.delete_currency(logbook_id, currency_id)
