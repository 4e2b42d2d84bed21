"""Aircraft routes."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from api.deps import get_logbook_service, get_readonly_logbook_service
from domain.logbook import LogbookService

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================


class AircraftCreate(BaseModel):
    """Request body for adding an aircraft."""

    aircraft_identifier: str = Field(..., min_length=1, max_length=10, description="Registration, e.g. N12345")
    aircraft_type: str = Field(..., min_length=1, max_length=10, description="Type designator, e.g. C172")
    aircraft_category: Optional[str] = Field(None, description="e.g. Airplane")
    aircraft_class: Optional[str] = Field(None, description="e.g. Single-Engine Land")
    aircraft_make: Optional[str] = None
    aircraft_model: Optional[str] = None
    aircraft_year: int = Field(0, ge=0)
    engine_type: Optional[str] = None
    gear_type: Optional[str] = None
    is_complex: bool = False
    is_high_performance: bool = False
    is_pressurized: bool = False


class AircraftUpdate(BaseModel):
    """Request body for updating an aircraft."""

    aircraft_identifier: Optional[str] = Field(None, min_length=1, max_length=10)
    aircraft_type: Optional[str] = Field(None, min_length=1, max_length=10)
    aircraft_category: Optional[str] = None
    aircraft_class: Optional[str] = None
    aircraft_make: Optional[str] = None
    aircraft_model: Optional[str] = None
    aircraft_year: Optional[int] = Field(None, ge=0)
    engine_type: Optional[str] = None
    gear_type: Optional[str] = None
    is_complex: Optional[bool] = None
    is_high_performance: Optional[bool] = None
    is_pressurized: Optional[bool] = None


# =============================================================================
# Routes
# =============================================================================


@router.get("")
async def list_aircraft(
    logbook_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> List[Dict[str, Any]]:
    return [aircraft.to_dict() for aircraft in service.list_aircraft(logbook_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_aircraft(
    logbook_id: int,
    body: AircraftCreate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    return service.create_aircraft(logbook_id, body.model_dump()).to_dict()


@router.get("/{aircraft_id}")
async def get_aircraft(
    logbook_id: int,
    aircraft_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> Dict[str, Any]:
    return service.get_aircraft(logbook_id, aircraft_id).to_dict()


@router.put("/{aircraft_id}")
async def update_aircraft(
    logbook_id: int,
    aircraft_id: int,
    body: AircraftUpdate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    data = body.model_dump(exclude_unset=True)
    return service.update_aircraft(logbook_id, aircraft_id, data).to_dict()


@router.delete("/{aircraft_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_aircraft(
    logbook_id: int,
    aircraft_id: int,
    service: LogbookService = Depends(get_logbook_service),
) -> None:
    """Delete an aircraft and the flights logged in it."""
    service.delete_aircraft(logbook_id, aircraft_id)
