"""SQLAlchemy ORM models for the FlightBook logbook schema.

Every owned record carries ``user_id`` for tenant isolation and is removed
together with its parent (``ON DELETE CASCADE`` in the database, mirrored by
the ORM relationship cascades).
"""
from __future__ import annotations

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base

# decimal(18, 2), the precision flight times are stored with
FlightTime = Numeric(18, 2)


# =============================================================================
# Enums
# =============================================================================


class CalculationType(int, enum.Enum):
    """How a CurrencyType is evaluated."""
    PASSENGER = 1       # takeoffs and landings in the preceding 90 days
    INSTRUMENT = 2      # approaches and holding within 6 calendar months
    FLIGHT_REVIEW = 3   # flight review or check ride within 24 calendar months


# =============================================================================
# Mixins
# =============================================================================


class RecordMixin:
    """Serialization helper shared by all models."""

    def to_dict(self) -> Dict[str, Any]:
        """Column values keyed by attribute name."""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}


class TimestampMixin:
    """Creation and last-modification timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


# =============================================================================
# Logbook
# =============================================================================


class Logbook(RecordMixin, TimestampMixin, Base):
    """A pilot's top-level record container, owned by one user."""
    __tablename__ = "logbooks"

    logbook_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    pilot: Mapped[Optional["Pilot"]] = relationship(
        "Pilot",
        back_populates="logbook",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    aircraft: Mapped[list["Aircraft"]] = relationship(
        "Aircraft", back_populates="logbook", cascade="all, delete-orphan", passive_deletes=True
    )
    flights: Mapped[list["Flight"]] = relationship(
        "Flight", back_populates="logbook", cascade="all, delete-orphan", passive_deletes=True
    )
    certificates: Mapped[list["Certificate"]] = relationship(
        "Certificate", back_populates="logbook", cascade="all, delete-orphan", passive_deletes=True
    )
    endorsements: Mapped[list["Endorsement"]] = relationship(
        "Endorsement", back_populates="logbook", cascade="all, delete-orphan", passive_deletes=True
    )
    currencies: Mapped[list["Currency"]] = relationship(
        "Currency", back_populates="logbook", cascade="all, delete-orphan", passive_deletes=True
    )


class Pilot(RecordMixin, TimestampMixin, Base):
    """Personal details of the logbook's pilot (exactly one per logbook)."""
    __tablename__ = "pilots"

    pilot_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    logbook_id: Mapped[int] = mapped_column(
        ForeignKey("logbooks.logbook_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    first_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    address_line1: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    address_line2: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    state_or_province: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    email_address: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    home_phone_number: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    cell_phone_number: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    logbook: Mapped["Logbook"] = relationship("Logbook", back_populates="pilot")


# =============================================================================
# Aircraft, Flight, Approach
# =============================================================================


class Aircraft(RecordMixin, TimestampMixin, Base):
    """An aircraft flown by the pilot."""
    __tablename__ = "aircraft"

    aircraft_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    logbook_id: Mapped[int] = mapped_column(
        ForeignKey("logbooks.logbook_id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    aircraft_identifier: Mapped[str] = mapped_column(String(10), nullable=False)
    aircraft_type: Mapped[str] = mapped_column(String(10), nullable=False)
    aircraft_category: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    aircraft_class: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    aircraft_make: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    aircraft_model: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    aircraft_year: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    engine_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    gear_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    is_complex: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_high_performance: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_pressurized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    logbook: Mapped["Logbook"] = relationship("Logbook", back_populates="aircraft")
    flights: Mapped[list["Flight"]] = relationship(
        "Flight", back_populates="aircraft", cascade="all, delete-orphan", passive_deletes=True
    )


class Flight(RecordMixin, TimestampMixin, Base):
    """A logged flight with its time-category breakdown."""
    __tablename__ = "flights"

    flight_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    aircraft_id: Mapped[int] = mapped_column(
        ForeignKey("aircraft.aircraft_id", ondelete="CASCADE"), nullable=False, index=True
    )
    logbook_id: Mapped[int] = mapped_column(
        ForeignKey("logbooks.logbook_id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    flight_date: Mapped[date] = mapped_column(Date, nullable=False)
    departure_code: Mapped[str] = mapped_column(String(5), nullable=False)
    destination_code: Mapped[str] = mapped_column(String(5), nullable=False)
    route: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    flight_time_actual_instrument: Mapped[Decimal] = mapped_column(FlightTime, nullable=False, default=Decimal("0"))
    flight_time_cross_country: Mapped[Decimal] = mapped_column(FlightTime, nullable=False, default=Decimal("0"))
    flight_time_day: Mapped[Decimal] = mapped_column(FlightTime, nullable=False, default=Decimal("0"))
    flight_time_dual: Mapped[Decimal] = mapped_column(FlightTime, nullable=False, default=Decimal("0"))
    flight_time_night: Mapped[Decimal] = mapped_column(FlightTime, nullable=False, default=Decimal("0"))
    flight_time_pic: Mapped[Decimal] = mapped_column(FlightTime, nullable=False, default=Decimal("0"))
    flight_time_simulated_instrument: Mapped[Decimal] = mapped_column(FlightTime, nullable=False, default=Decimal("0"))
    flight_time_solo: Mapped[Decimal] = mapped_column(FlightTime, nullable=False, default=Decimal("0"))
    flight_time_total: Mapped[Decimal] = mapped_column(FlightTime, nullable=False, default=Decimal("0"))

    number_of_holds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    number_of_landings_day: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    number_of_landings_night: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_check_ride: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_flight_review: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_instrument_proficiency_check: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    aircraft: Mapped["Aircraft"] = relationship("Aircraft", back_populates="flights")
    logbook: Mapped["Logbook"] = relationship("Logbook", back_populates="flights")
    approaches: Mapped[list["Approach"]] = relationship(
        "Approach", back_populates="flight", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        Index("ix_flights_logbook_id_flight_date", "logbook_id", "flight_date"),
    )


class Approach(RecordMixin, TimestampMixin, Base):
    """An instrument approach flown during a flight."""
    __tablename__ = "approaches"

    approach_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    flight_id: Mapped[int] = mapped_column(
        ForeignKey("flights.flight_id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    airport_code: Mapped[str] = mapped_column(String, nullable=False)
    approach_type: Mapped[str] = mapped_column(String, nullable=False)
    runway: Mapped[str] = mapped_column(String, nullable=False)
    is_circle_to_land: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    flight: Mapped["Flight"] = relationship("Flight", back_populates="approaches")


# =============================================================================
# Certificate, Rating
# =============================================================================


class Certificate(RecordMixin, TimestampMixin, Base):
    """A pilot certificate (private, commercial, instructor...)."""
    __tablename__ = "certificates"

    certificate_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    logbook_id: Mapped[int] = mapped_column(
        ForeignKey("logbooks.logbook_id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    certificate_number: Mapped[str] = mapped_column(String(20), nullable=False)
    certificate_type: Mapped[str] = mapped_column(String(50), nullable=False)
    certificate_date: Mapped[date] = mapped_column(Date, nullable=False)
    expiration_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    logbook: Mapped["Logbook"] = relationship("Logbook", back_populates="certificates")
    ratings: Mapped[list["Rating"]] = relationship(
        "Rating", back_populates="certificate", cascade="all, delete-orphan", passive_deletes=True
    )


class Rating(RecordMixin, TimestampMixin, Base):
    """A rating held on a certificate."""
    __tablename__ = "ratings"

    rating_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    certificate_id: Mapped[int] = mapped_column(
        ForeignKey("certificates.certificate_id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    rating_type: Mapped[str] = mapped_column(String(50), nullable=False)
    rating_date: Mapped[date] = mapped_column(Date, nullable=False)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    certificate: Mapped["Certificate"] = relationship("Certificate", back_populates="ratings")


# =============================================================================
# Endorsement, Currency
# =============================================================================


class Endorsement(RecordMixin, TimestampMixin, Base):
    """An instructor endorsement entered in the logbook."""
    __tablename__ = "endorsements"

    endorsement_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    logbook_id: Mapped[int] = mapped_column(
        ForeignKey("logbooks.logbook_id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    title: Mapped[str] = mapped_column(String, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    endorsement_date: Mapped[date] = mapped_column(Date, nullable=False)
    cfi_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    cfi_number: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    cfi_expiration: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    logbook: Mapped["Logbook"] = relationship("Logbook", back_populates="endorsements")


class Currency(RecordMixin, TimestampMixin, Base):
    """A tracked currency and its last computed state."""
    __tablename__ = "currencies"

    currency_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    logbook_id: Mapped[int] = mapped_column(
        ForeignKey("logbooks.logbook_id", ondelete="CASCADE"), nullable=False, index=True
    )
    currency_type_id: Mapped[int] = mapped_column(
        ForeignKey("currency_types.currency_type_id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    is_night_currency: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    days_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    logbook: Mapped["Logbook"] = relationship("Logbook", back_populates="currencies")
    currency_type: Mapped["CurrencyType"] = relationship("CurrencyType")


# =============================================================================
# Lookup / reference tables
# =============================================================================


class ApproachType(RecordMixin, Base):
    __tablename__ = "approach_types"

    approach_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class CertificateType(RecordMixin, Base):
    __tablename__ = "certificate_types"

    certificate_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class CurrencyType(RecordMixin, Base):
    """Definition of a currency requirement (category, class and calculation)."""
    __tablename__ = "currency_types"

    currency_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    abbreviation: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    aircraft_category: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    aircraft_class: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    calculation_type: Mapped[int] = mapped_column(Integer, nullable=False)
    requires_tailwheel: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class EndorsementType(RecordMixin, Base):
    """Endorsement template text, keyed by category."""
    __tablename__ = "endorsement_types"

    endorsement_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category: Mapped[str] = mapped_column(String, nullable=False)
    label: Mapped[str] = mapped_column(String, nullable=False)
    template: Mapped[str] = mapped_column(Text, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class EngineType(RecordMixin, Base):
    __tablename__ = "engine_types"

    engine_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class GearType(RecordMixin, Base):
    __tablename__ = "gear_types"

    gear_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String, nullable=False)
    abbreviation: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class RatingType(RecordMixin, Base):
    __tablename__ = "rating_types"

    rating_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class CategoryAndClass(RecordMixin, Base):
    """Aircraft category/class combination (e.g. Airplane Single-Engine Land)."""
    __tablename__ = "categories_and_classes"

    category_and_class_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category: Mapped[str] = mapped_column(String, nullable=False)
    class_name: Mapped[str] = mapped_column(String, nullable=False)
    label: Mapped[str] = mapped_column(String, nullable=False)
    abbreviation: Mapped[Optional[str]] = mapped_column(String, nullable=True)


__all__ = [
    "Base",
    "CalculationType",
    "Logbook",
    "Pilot",
    "Aircraft",
    "Flight",
    "Approach",
    "Certificate",
    "Rating",
    "Endorsement",
    "Currency",
    "ApproachType",
    "CertificateType",
    "CurrencyType",
    "EndorsementType",
    "EngineType",
    "GearType",
    "RatingType",
    "CategoryAndClass",
]
