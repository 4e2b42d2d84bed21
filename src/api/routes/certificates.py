"""Certificate and rating routes."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from api.deps import get_logbook_service, get_readonly_logbook_service
from domain.logbook import LogbookService

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================


class CertificateCreate(BaseModel):
    """Request body for adding a certificate."""

    certificate_number: str = Field(..., min_length=1, max_length=20)
    certificate_type: str = Field(..., min_length=1, max_length=50, description="e.g. Private Pilot")
    certificate_date: date
    expiration_date: Optional[date] = None
    remarks: Optional[str] = None


class CertificateUpdate(BaseModel):
    certificate_number: Optional[str] = Field(None, min_length=1, max_length=20)
    certificate_type: Optional[str] = Field(None, min_length=1, max_length=50)
    certificate_date: Optional[date] = None
    expiration_date: Optional[date] = None
    remarks: Optional[str] = None


class RatingCreate(BaseModel):
    """Request body for adding a rating to a certificate."""

    rating_type: str = Field(..., min_length=1, max_length=50)
    rating_date: date
    remarks: Optional[str] = None


class RatingUpdate(BaseModel):
    rating_type: Optional[str] = Field(None, min_length=1, max_length=50)
    rating_date: Optional[date] = None
    remarks: Optional[str] = None


# =============================================================================
# Certificate Routes
# =============================================================================


@router.get("")
async def list_certificates(
    logbook_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> List[Dict[str, Any]]:
    return [certificate.to_dict() for certificate in service.list_certificates(logbook_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_certificate(
    logbook_id: int,
    body: CertificateCreate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    return service.create_certificate(logbook_id, body.model_dump()).to_dict()


@router.get("/{certificate_id}")
async def get_certificate(
    logbook_id: int,
    certificate_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> Dict[str, Any]:
    return service.get_certificate(logbook_id, certificate_id).to_dict()


@router.put("/{certificate_id}")
async def update_certificate(
    logbook_id: int,
    certificate_id: int,
    body: CertificateUpdate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    data = body.model_dump(exclude_unset=True)
    return service.update_certificate(logbook_id, certificate_id, data).to_dict()


@router.delete("/{certificate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_certificate(
    logbook_id: int,
    certificate_id: int,
    service: LogbookService = Depends(get_logbook_service),
) -> None:
    """Delete a certificate and its ratings."""
    service.delete_certificate(logbook_id, certificate_id)


# =============================================================================
# Rating Routes
# =============================================================================


@router.get("/{certificate_id}/ratings")
async def list_ratings(
    logbook_id: int,
    certificate_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> List[Dict[str, Any]]:
    return [rating.to_dict() for rating in service.list_ratings(logbook_id, certificate_id)]


@router.post("/{certificate_id}/ratings", status_code=status.HTTP_201_CREATED)
async def create_rating(
    logbook_id: int,
    certificate_id: int,
    body: RatingCreate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    return service.create_rating(logbook_id, certificate_id, body.model_dump()).to_dict()


@router.get("/{certificate_id}/ratings/{rating_id}")
async def get_rating(
    logbook_id: int,
    certificate_id: int,
    rating_id: int,
    service: LogbookService = Depends(get_readonly_logbook_service),
) -> Dict[str, Any]:
    return service.get_rating(logbook_id, certificate_id, rating_id).to_dict()


@router.put("/{certificate_id}/ratings/{rating_id}")
async def update_rating(
    logbook_id: int,
    certificate_id: int,
    rating_id: int,
    body: RatingUpdate,
    service: LogbookService = Depends(get_logbook_service),
) -> Dict[str, Any]:
    data = body.model_dump(exclude_unset=True)
    return service.update_rating(logbook_id, certificate_id, rating_id, data).to_dict()


@router.delete("/{certificate_id}/ratings/{rating_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rating(
    logbook_id: int,
    certificate_id: int,
    rating_id: int,
    service: LogbookService = Depends(get_logbook_service),
) -> None:
    service.delete_rating(logbook_id, certificate_id, rating_id)
