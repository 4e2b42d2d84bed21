"""Endorsement routes."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from api.deps import get_logbook_service, get_readonly_logbook_service
from domain.logbook import LogbookService

router = APIRouter()


class EndorsementCreate(BaseModel):
    """Request body for entering an instructor endorsement."""

    title: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, description="Endorsement wording")
    endorsement_date: date
    cfi_name: Optional[str] = None
    cfi_number: Optional[str] = None
    cfi_expiration: Optional[str] = None


class EndorsementUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    text: Optional[str] = Field(None, min_length=1)
    endorsement_date: Optional[date] = None
    cfi_name: Optional[str] = None
    cfi_number: Optional[str] = None
    cfi_expiration: Optional[str] = None


@router.get("")
async def list_endorsements(
    logbook_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> List[Dict[str, Any]]:
    return [endorsement.to_dict() for endorsement in service.list_endorsements(logbook_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_endorsement(
    logbook_id: int,
    body: EndorsementCreate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    return service.create_endorsement(logbook_id, body.model_dump()).to_dict()


@router.get("/{endorsement_id}")
async def get_endorsement(
    logbook_id: int,
    endorsement_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> Dict[str, Any]:
    return service.get_endorsement(logbook_id, endorsement_id).to_dict()


@router.put("/{endorsement_id}")
async def update_endorsement(
    logbook_id: int,
    endorsement_id: int,
    body: EndorsementUpdate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    data = body.model_dump(exclude_unset=True)
    return service.update_endorsement(logbook_id, endorsement_id, data).to_dict()


@router.delete("/{endorsement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_endorsement(
    logbook_id: int,
    endorsement_id: int,
    service: LogbookService = Depends(get_logbook_service),
) -> None:
    service.delete_endorsement(logbook_id, endorsement_id)
