"""Required reference data for the lookup tables.

``ensure_seed_data`` inserts every reference row that is missing (matched by
label) and leaves existing rows untouched, so it is safe to run on every start.
"""
from __future__ import annotations

from typing import Any, Dict, List, Type

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .exceptions import SeedDataError
from .logging_config import get_logger
from .models import (
    ApproachType,
    CalculationType,
    CategoryAndClass,
    CertificateType,
    CurrencyType,
    EndorsementType,
    EngineType,
    GearType,
    RatingType,
)

LOGGER = get_logger(__name__)


def _ordered(labels: List[str]) -> List[Dict[str, Any]]:
    return [{"label": label, "sort_order": index} for index, label in enumerate(labels, start=1)]


APPROACH_TYPES = _ordered([
    "ILS",
    "LOC",
    "LOC BC",
    "LDA",
    "SDF",
    "VOR",
    "VOR/DME",
    "NDB",
    "RNAV (GPS)",
    "RNAV (GPS) LPV",
    "RNAV (RNP)",
    "GLS",
    "ASR",
    "PAR",
    "Contact",
    "Visual",
])

CERTIFICATE_TYPES = _ordered([
    "Student Pilot",
    "Sport Pilot",
    "Recreational Pilot",
    "Private Pilot",
    "Commercial Pilot",
    "Airline Transport Pilot",
    "Flight Instructor",
    "Ground Instructor",
    "Medical",
])

ENGINE_TYPES = _ordered([
    "Reciprocating",
    "Diesel",
    "Turboprop",
    "Turboshaft",
    "Turbojet",
    "Turbofan",
    "Electric",
    "None",
])

RATING_TYPES = _ordered([
    "Airplane Single-Engine Land",
    "Airplane Single-Engine Sea",
    "Airplane Multiengine Land",
    "Airplane Multiengine Sea",
    "Rotorcraft Helicopter",
    "Rotorcraft Gyroplane",
    "Glider",
    "Lighter-Than-Air Airship",
    "Lighter-Than-Air Balloon",
    "Powered Lift",
    "Instrument Airplane",
    "Instrument Helicopter",
    "Instrument Powered Lift",
    "Type Rating",
])

GEAR_TYPES: List[Dict[str, Any]] = [
    {"label": "Fixed Tricycle", "abbreviation": "FT", "sort_order": 1},
    {"label": "Fixed Conventional", "abbreviation": "FC", "sort_order": 2},
    {"label": "Retractable Tricycle", "abbreviation": "RT", "sort_order": 3},
    {"label": "Retractable Conventional", "abbreviation": "RC", "sort_order": 4},
    {"label": "Amphibian", "abbreviation": "AM", "sort_order": 5},
    {"label": "Floats", "abbreviation": "FL", "sort_order": 6},
    {"label": "Skids", "abbreviation": "SK", "sort_order": 7},
    {"label": "Skis", "abbreviation": "SKI", "sort_order": 8},
]

CATEGORIES_AND_CLASSES: List[Dict[str, Any]] = [
    {"category": "Airplane", "class_name": "Single-Engine Land", "abbreviation": "ASEL",
     "label": "Airplane Single-Engine Land"},
    {"category": "Airplane", "class_name": "Single-Engine Sea", "abbreviation": "ASES",
     "label": "Airplane Single-Engine Sea"},
    {"category": "Airplane", "class_name": "Multiengine Land", "abbreviation": "AMEL",
     "label": "Airplane Multiengine Land"},
    {"category": "Airplane", "class_name": "Multiengine Sea", "abbreviation": "AMES",
     "label": "Airplane Multiengine Sea"},
    {"category": "Rotorcraft", "class_name": "Helicopter", "abbreviation": "RH",
     "label": "Rotorcraft Helicopter"},
    {"category": "Rotorcraft", "class_name": "Gyroplane", "abbreviation": "RG",
     "label": "Rotorcraft Gyroplane"},
    {"category": "Glider", "class_name": "Glider", "abbreviation": "GL", "label": "Glider"},
    {"category": "Lighter-Than-Air", "class_name": "Airship", "abbreviation": "LA",
     "label": "Lighter-Than-Air Airship"},
    {"category": "Lighter-Than-Air", "class_name": "Balloon", "abbreviation": "LB",
     "label": "Lighter-Than-Air Balloon"},
    {"category": "Powered Lift", "class_name": "Powered Lift", "abbreviation": "PL",
     "label": "Powered Lift"},
]


def _passenger(abbreviation: str, category: str, class_name: str, sort_order: int,
               tailwheel: bool = False) -> Dict[str, Any]:
    label = f"{abbreviation} Passenger Carrying" + (" (Tailwheel)" if tailwheel else "")
    return {
        "label": label,
        "category": "Passenger Carrying",
        "abbreviation": abbreviation,
        "aircraft_category": category,
        "aircraft_class": class_name,
        "calculation_type": CalculationType.PASSENGER.value,
        "requires_tailwheel": tailwheel,
        "sort_order": sort_order,
    }


CURRENCY_TYPES: List[Dict[str, Any]] = [
    _passenger("ASEL", "Airplane", "Single-Engine Land", 1),
    _passenger("ASEL", "Airplane", "Single-Engine Land", 2, tailwheel=True),
    _passenger("ASES", "Airplane", "Single-Engine Sea", 3),
    _passenger("AMEL", "Airplane", "Multiengine Land", 4),
    _passenger("AMES", "Airplane", "Multiengine Sea", 5),
    _passenger("RH", "Rotorcraft", "Helicopter", 6),
    _passenger("RG", "Rotorcraft", "Gyroplane", 7),
    _passenger("GL", "Glider", "Glider", 8),
    {
        "label": "Instrument Airplane",
        "category": "Instrument",
        "abbreviation": "IA",
        "aircraft_category": "Airplane",
        "aircraft_class": None,
        "calculation_type": CalculationType.INSTRUMENT.value,
        "requires_tailwheel": False,
        "sort_order": 20,
    },
    {
        "label": "Instrument Helicopter",
        "category": "Instrument",
        "abbreviation": "IH",
        "aircraft_category": "Rotorcraft",
        "aircraft_class": "Helicopter",
        "calculation_type": CalculationType.INSTRUMENT.value,
        "requires_tailwheel": False,
        "sort_order": 21,
    },
    {
        "label": "Flight Review",
        "category": "Flight Review",
        "abbreviation": "BFR",
        "aircraft_category": None,
        "aircraft_class": None,
        "calculation_type": CalculationType.FLIGHT_REVIEW.value,
        "requires_tailwheel": False,
        "sort_order": 30,
    },
]

ENDORSEMENT_TYPES: List[Dict[str, Any]] = [
    {
        "category": "Student Pilot",
        "label": "Pre-solo aeronautical knowledge: 14 CFR 61.87(b)",
        "template": (
            "I certify that {student} has satisfactorily completed the pre-solo knowledge "
            "test of 14 CFR 61.87(b) for the {make_model}."
        ),
        "sort_order": 1,
    },
    {
        "category": "Student Pilot",
        "label": "Pre-solo flight training: 14 CFR 61.87(c)",
        "template": (
            "I certify that {student} has received and logged pre-solo flight training for "
            "the maneuvers and procedures that are appropriate to the {make_model}. I have "
            "determined that {student} has demonstrated satisfactory proficiency and safety "
            "on the maneuvers and procedures required by 14 CFR 61.87 in this or similar "
            "make and model of aircraft to be flown."
        ),
        "sort_order": 2,
    },
    {
        "category": "Student Pilot",
        "label": "Solo flight (first 90-day period): 14 CFR 61.87(n)",
        "template": (
            "I certify that {student} has received the required training to qualify for "
            "solo flying. I have determined that {student} meets the applicable "
            "requirements of 14 CFR 61.87(n) and is proficient to make solo flights in "
            "{make_model}."
        ),
        "sort_order": 3,
    },
    {
        "category": "Student Pilot",
        "label": "Solo cross-country flight: 14 CFR 61.93(c)(2)",
        "template": (
            "I have reviewed the cross-country planning of {student}. I find the planning "
            "and preparation to be correct to make the solo flight from {departure} to "
            "{destination} via {route}, with landings at {landings} in a {make_model} on "
            "{date}."
        ),
        "sort_order": 4,
    },
    {
        "category": "Additional",
        "label": "Complex airplane: 14 CFR 61.31(e)",
        "template": (
            "I certify that {pilot}, {grade} pilot {certificate_number}, has received the "
            "required training of 14 CFR 61.31(e) in a {make_model} complex airplane. I "
            "have determined that {pilot} is proficient in the operation and systems of a "
            "complex airplane."
        ),
        "sort_order": 10,
    },
    {
        "category": "Additional",
        "label": "High-performance airplane: 14 CFR 61.31(f)",
        "template": (
            "I certify that {pilot}, {grade} pilot {certificate_number}, has received the "
            "required training of 14 CFR 61.31(f) in a {make_model} high-performance "
            "airplane. I have determined that {pilot} is proficient in the operation and "
            "systems of a high-performance airplane."
        ),
        "sort_order": 11,
    },
    {
        "category": "Additional",
        "label": "Tailwheel airplane: 14 CFR 61.31(i)",
        "template": (
            "I certify that {pilot}, {grade} pilot {certificate_number}, has received the "
            "required training of 14 CFR 61.31(i) in a {make_model} of tailwheel airplane. "
            "I have determined that {pilot} is proficient in the operation of a tailwheel "
            "airplane."
        ),
        "sort_order": 12,
    },
    {
        "category": "Currency",
        "label": "Flight review: 14 CFR 61.56(a)",
        "template": (
            "I certify that {pilot}, {grade} pilot {certificate_number}, has satisfactorily "
            "completed a flight review of 14 CFR 61.56(a) on {date}."
        ),
        "sort_order": 20,
    },
    {
        "category": "Currency",
        "label": "Instrument proficiency check: 14 CFR 61.57(d)",
        "template": (
            "I certify that {pilot}, {grade} pilot {certificate_number}, has satisfactorily "
            "completed the instrument proficiency check of 14 CFR 61.57(d) in a "
            "{make_model} on {date}."
        ),
        "sort_order": 21,
    },
]

# Lookup model -> required rows, in the order they are inserted
SEED_DATA: Dict[Type[Any], List[Dict[str, Any]]] = {
    ApproachType: APPROACH_TYPES,
    CategoryAndClass: CATEGORIES_AND_CLASSES,
    CertificateType: CERTIFICATE_TYPES,
    CurrencyType: CURRENCY_TYPES,
    EndorsementType: ENDORSEMENT_TYPES,
    EngineType: ENGINE_TYPES,
    GearType: GEAR_TYPES,
    RatingType: RATING_TYPES,
}


def ensure_seed_data(session: Session) -> Dict[str, int]:
    """
    Insert any missing reference rows.

    Rows are matched on ``label``; existing rows are never modified.

    Returns:
        Number of rows inserted, keyed by table name.

    Raises:
        SeedDataError: If the reference data cannot be written.
    """
    inserted: Dict[str, int] = {}
    try:
        for model, rows in SEED_DATA.items():
            existing = set(session.scalars(select(model.label)))
            missing = [row for row in rows if row["label"] not in existing]
            session.add_all(model(**row) for row in missing)
            inserted[model.__tablename__] = len(missing)
        session.flush()
    except SQLAlchemyError as exc:
        raise SeedDataError(f"Failed to insert seed data: {exc}") from exc

    total = sum(inserted.values())
    if total:
        LOGGER.info("Inserted %d reference rows", total, extra={"extra_data": inserted})
    else:
        LOGGER.debug("Reference data already present")
    return inserted
