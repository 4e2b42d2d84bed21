"""Flight and approach routes."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from api.deps import get_logbook_service, get_readonly_logbook_service
from domain.logbook import LogbookService

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================


class FlightCreate(BaseModel):
    """Request body for logging a flight."""

    aircraft_id: int = Field(..., description="Aircraft from the same logbook")
    flight_date: date
    departure_code: str = Field(..., min_length=1, max_length=5)
    destination_code: str = Field(..., min_length=1, max_length=5)
    route: Optional[str] = None
    remarks: Optional[str] = None

    flight_time_actual_instrument: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    flight_time_cross_country: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    flight_time_day: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    flight_time_dual: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    flight_time_night: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    flight_time_pic: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    flight_time_simulated_instrument: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    flight_time_solo: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    flight_time_total: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)

    number_of_holds: int = Field(0, ge=0)
    number_of_landings_day: int = Field(0, ge=0)
    number_of_landings_night: int = Field(0, ge=0)

    is_check_ride: bool = False
    is_flight_review: bool = False
    is_instrument_proficiency_check: bool = False


class FlightUpdate(BaseModel):
    """Request body for updating a flight."""

    aircraft_id: Optional[int] = None
    flight_date: Optional[date] = None
    departure_code: Optional[str] = Field(None, min_length=1, max_length=5)
    destination_code: Optional[str] = Field(None, min_length=1, max_length=5)
    route: Optional[str] = None
    remarks: Optional[str] = None

    flight_time_actual_instrument: Optional[Decimal] = Field(None, ge=0)
    flight_time_cross_country: Optional[Decimal] = Field(None, ge=0)
    flight_time_day: Optional[Decimal] = Field(None, ge=0)
    flight_time_dual: Optional[Decimal] = Field(None, ge=0)
    flight_time_night: Optional[Decimal] = Field(None, ge=0)
    flight_time_pic: Optional[Decimal] = Field(None, ge=0)
    flight_time_simulated_instrument: Optional[Decimal] = Field(None, ge=0)
    flight_time_solo: Optional[Decimal] = Field(None, ge=0)
    flight_time_total: Optional[Decimal] = Field(None, ge=0)

    number_of_holds: Optional[int] = Field(None, ge=0)
    number_of_landings_day: Optional[int] = Field(None, ge=0)
    number_of_landings_night: Optional[int] = Field(None, ge=0)

    is_check_ride: Optional[bool] = None
    is_flight_review: Optional[bool] = None
    is_instrument_proficiency_check: Optional[bool] = None


class ApproachCreate(BaseModel):
    """Request body for recording an approach."""

    airport_code: str = Field(..., min_length=1)
    approach_type: str = Field(..., min_length=1, description="e.g. ILS, RNAV (GPS)")
    runway: str = Field(..., min_length=1)
    is_circle_to_land: bool = False
    remarks: Optional[str] = None


class ApproachUpdate(BaseModel):
    airport_code: Optional[str] = Field(None, min_length=1)
    approach_type: Optional[str] = Field(None, min_length=1)
    runway: Optional[str] = Field(None, min_length=1)
    is_circle_to_land: Optional[bool] = None
    remarks: Optional[str] = None


# =============================================================================
# Flight Routes
# =============================================================================


@router.get("")
async def list_flights(
    logbook_id: int,
    since: Optional[date] = Query(default=None, description="Earliest flight date"),
    until: Optional[date] = Query(default=None, description="Latest flight date"),
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> List[Dict[str, Any]]:
    """List flights, most recent first."""
    return [flight.to_dict() for flight in service.list_flights(logbook_id, since, until)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_flight(
    logbook_id: int,
    body: FlightCreate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    return service.create_flight(logbook_id, body.model_dump()).to_dict()


@router.get("/{flight_id}")
async def get_flight(
    logbook_id: int,
    flight_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> Dict[str, Any]:
    return service.get_flight(logbook_id, flight_id).to_dict()


@router.put("/{flight_id}")
async def update_flight(
    logbook_id: int,
    flight_id: int,
    body: FlightUpdate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    data = body.model_dump(exclude_unset=True)
    return service.update_flight(logbook_id, flight_id, data).to_dict()


@router.delete("/{flight_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_flight(
    logbook_id: int,
    flight_id: int,
    service: LogbookService = Depends(get_logbook_service),
) -> None:
    service.delete_flight(logbook_id, flight_id)


# =============================================================================
# Approach Routes
# =============================================================================


@router.get("/{flight_id}/approaches")
async def list_approaches(
    logbook_id: int,
    flight_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> List[Dict[str, Any]]:
    return [approach.to_dict() for approach in service.list_approaches(logbook_id, flight_id)]


@router.post("/{flight_id}/approaches", status_code=status.HTTP_201_CREATED)
async def create_approach(
    logbook_id: int,
    flight_id: int,
    body: ApproachCreate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    return service.create_approach(logbook_id, flight_id, body.model_dump()).to_dict()


@router.get("/{flight_id}/approaches/{approach_id}")
async def get_approach(
    logbook_id: int,
    flight_id: int,
    approach_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> Dict[str, Any]:
    return service.get_approach(logbook_id, flight_id, approach_id).to_dict()


@router.put("/{flight_id}/approaches/{approach_id}")
async def update_approach(
    logbook_id: int,
    flight_id: int,
    approach_id: int,
    body: ApproachUpdate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    data = body.model_dump(exclude_unset=True)
    return service.update_approach(logbook_id, flight_id, approach_id, data).to_dict()


@router.delete("/{flight_id}/approaches/{approach_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_approach(
    logbook_id: int,
    flight_id: int,
    approach_id: int,
    service: LogbookService = Depends(get_logbook_service),
) -> None:
    service.delete_approach(logbook_id, flight_id, approach_id)
