"""Reference data (lookup table) routes."""
from __future__ import annotations

from typing import Any, Dict, List, Type

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from api.deps import get_readonly_db
from core.models import (
    ApproachType,
    CategoryAndClass,
    CertificateType,
    CurrencyType,
    EndorsementType,
    EngineType,
    GearType,
    RatingType,
)

router = APIRouter()

# URL name -> (model, ordering column)
LOOKUPS: Dict[str, Any] = {
    "approach-types": (ApproachType, ApproachType.sort_order),
    "categories-and-classes": (CategoryAndClass, CategoryAndClass.category_and_class_id),
    "certificate-types": (CertificateType, CertificateType.sort_order),
    "currency-types": (CurrencyType, CurrencyType.sort_order),
    "endorsement-types": (EndorsementType, EndorsementType.sort_order),
    "engine-types": (EngineType, EngineType.sort_order),
    "gear-types": (GearType, GearType.sort_order),
    "rating-types": (RatingType, RatingType.sort_order),
}


@router.get("")
async def list_lookup_kinds() -> List[str]:
    return sorted(LOOKUPS)


@router.get("/{kind}")
async def list_lookup(kind: str, db: Session = Depends(get_readonly_db)) -> List[Dict[str, Any]]:
    """All rows of one lookup table, in display order."""
    if kind not in LOOKUPS:
        raise HTTPException(status_code=404, detail=f"Unknown lookup '{kind}'")
    model, order_by = LOOKUPS[kind]
    return [row.to_dict() for row in db.scalars(select(model).order_by(order_by))]
