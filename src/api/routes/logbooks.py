"""Logbook and pilot routes."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from api.deps import get_logbook_service, get_readonly_logbook_service
from core.logging_config import get_logger
from domain.logbook import LogbookService

router = APIRouter()
LOGGER = get_logger(__name__)


# =============================================================================
# Pydantic Models
# =============================================================================


class LogbookCreate(BaseModel):
    """Request body for creating a logbook."""

    title: str = Field(..., min_length=1, description="Logbook title")
    remarks: Optional[str] = Field(None, description="Free-form remarks")


class LogbookUpdate(BaseModel):
    """Request body for updating a logbook."""

    title: Optional[str] = Field(None, min_length=1)
    remarks: Optional[str] = None


class PilotFields(BaseModel):
    """Pilot personal details; every field is optional."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state_or_province: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    email_address: Optional[str] = None
    home_phone_number: Optional[str] = None
    cell_phone_number: Optional[str] = None


# =============================================================================
# Logbook Routes
# =============================================================================


@router.get("")
async def list_logbooks(
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> List[Dict[str, Any]]:
    """List the caller's logbooks."""
    return [logbook.to_dict() for logbook in service.list_logbooks()]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_logbook(
    body: LogbookCreate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    return service.create_logbook(body.model_dump()).to_dict()


@router.get("/{logbook_id}")
async def get_logbook(
    logbook_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> Dict[str, Any]:
    return service.get_logbook(logbook_id).to_dict()


@router.put("/{logbook_id}")
async def update_logbook(
    logbook_id: int,
    body: LogbookUpdate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    return service.update_logbook(logbook_id, body.model_dump(exclude_unset=True)).to_dict()


@router.delete("/{logbook_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_logbook(
    logbook_id: int,
    service: LogbookService = Depends(get_logbook_service),
) -> None:
    """Delete a logbook and every record in it."""
    service.delete_logbook(logbook_id)


# =============================================================================
# Pilot Routes
# =============================================================================


@router.get("/{logbook_id}/pilot")
async def get_pilot(
    logbook_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> Dict[str, Any]:
    return service.get_pilot(logbook_id).to_dict()


@router.post("/{logbook_id}/pilot", status_code=status.HTTP_201_CREATED)
async def create_pilot(
    logbook_id: int,
    body: PilotFields,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    """Create the logbook's pilot; a logbook has at most one."""
    return service.create_pilot(logbook_id, body.model_dump()).to_dict()


@router.put("/{logbook_id}/pilot")
async def update_pilot(
    logbook_id: int,
    body: PilotFields,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    return service.update_pilot(logbook_id, body.model_dump(exclude_unset=True)).to_dict()


@router.delete("/{logbook_id}/pilot", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pilot(
    logbook_id: int,
    service: LogbookService = Depends(get_logbook_service),
) -> None:
    service.delete_pilot(logbook_id)
