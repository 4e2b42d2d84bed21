"""Logbook domain service - tenant-scoped access to logbook records.

Every lookup is filtered by the caller's ``user_id``; a record that exists but
belongs to someone else is reported exactly like a missing one.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import DuplicateRecordError, RecordNotFoundError
from core.logging_config import get_logger
from core.models import (
    Aircraft,
    Approach,
    Certificate,
    Currency,
    CurrencyType,
    Endorsement,
    Flight,
    Logbook,
    Pilot,
    Rating,
)

LOGGER = get_logger(__name__)

T = TypeVar("T")


class LogbookService:
    """CRUD over one user's logbooks and everything they contain."""

    def __init__(self, session: Session, user_id: str):
        self.session = session
        self.user_id = user_id

    # -------------------------------------------------------------------------
    # Generic helpers
    # -------------------------------------------------------------------------

    def _get(self, model: Type[T], record_id: int, **scope: Any) -> T:
        """Load a record owned by the user, optionally also matching ``scope``."""
        record = self.session.get(model, record_id)
        if (
            record is None
            or record.user_id != self.user_id
            or any(getattr(record, key) != value for key, value in scope.items())
        ):
            raise RecordNotFoundError(model.__name__, record_id)
        return record

    def _list(self, model: Type[T], *criteria: Any, order_by: Any = None) -> List[T]:
        stmt = select(model).where(model.user_id == self.user_id, *criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        return list(self.session.scalars(stmt))

    def _create(self, model: Type[T], data: Dict[str, Any], **keys: Any) -> T:
        record = model(**data, **keys, user_id=self.user_id)
        self.session.add(record)
        self.session.flush()
        LOGGER.debug(
            "Created %s",
            model.__name__,
            extra={"extra_data": {"user_id": self.user_id, **keys}},
        )
        return record

    def _update(self, record: T, data: Dict[str, Any]) -> T:
        for key, value in data.items():
            setattr(record, key, value)
        self.session.flush()
        return record

    def _delete(self, record: Any) -> None:
        self.session.delete(record)
        self.session.flush()

    # -------------------------------------------------------------------------
    # Logbooks
    # -------------------------------------------------------------------------

    def list_logbooks(self) -> List[Logbook]:
        return self._list(Logbook, order_by=Logbook.logbook_id)

    def get_logbook(self, logbook_id: int) -> Logbook:
        return self._get(Logbook, logbook_id)

    def create_logbook(self, data: Dict[str, Any]) -> Logbook:
        logbook = self._create(Logbook, data)
        LOGGER.info(
            "Logbook created",
            extra={"extra_data": {"user_id": self.user_id, "logbook_id": logbook.logbook_id}},
        )
        return logbook

    def update_logbook(self, logbook_id: int, data: Dict[str, Any]) -> Logbook:
        return self._update(self.get_logbook(logbook_id), data)

    def delete_logbook(self, logbook_id: int) -> None:
        """Delete a logbook; the database cascades to every child record."""
        self._delete(self.get_logbook(logbook_id))
        LOGGER.info(
            "Logbook deleted",
            extra={"extra_data": {"user_id": self.user_id, "logbook_id": logbook_id}},
        )

    # -------------------------------------------------------------------------
    # Pilot (one per logbook)
    # -------------------------------------------------------------------------

    def get_pilot(self, logbook_id: int) -> Pilot:
        logbook = self.get_logbook(logbook_id)
        if logbook.pilot is None:
            raise RecordNotFoundError("Pilot", f"for logbook {logbook_id}")
        return logbook.pilot

    def create_pilot(self, logbook_id: int, data: Dict[str, Any]) -> Pilot:
        """
        Attach the pilot record to a logbook.

        Raises:
            DuplicateRecordError: If the logbook already has a pilot.
        """
        logbook = self.get_logbook(logbook_id)
        if logbook.pilot is not None:
            raise DuplicateRecordError(f"Logbook {logbook_id} already has a pilot")
        try:
            return self._create(Pilot, data, logbook_id=logbook_id)
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateRecordError(f"Logbook {logbook_id} already has a pilot") from exc

    def update_pilot(self, logbook_id: int, data: Dict[str, Any]) -> Pilot:
        return self._update(self.get_pilot(logbook_id), data)

    def delete_pilot(self, logbook_id: int) -> None:
        self._delete(self.get_pilot(logbook_id))

    # -------------------------------------------------------------------------
    # Aircraft
    # -------------------------------------------------------------------------

    def list_aircraft(self, logbook_id: int) -> List[Aircraft]:
        self.get_logbook(logbook_id)
        return self._list(
            Aircraft, Aircraft.logbook_id == logbook_id, order_by=Aircraft.aircraft_identifier
        )

    def get_aircraft(self, logbook_id: int, aircraft_id: int) -> Aircraft:
        return self._get(Aircraft, aircraft_id, logbook_id=logbook_id)

    def create_aircraft(self, logbook_id: int, data: Dict[str, Any]) -> Aircraft:
        self.get_logbook(logbook_id)
        return self._create(Aircraft, data, logbook_id=logbook_id)

    def update_aircraft(self, logbook_id: int, aircraft_id: int, data: Dict[str, Any]) -> Aircraft:
        return self._update(self.get_aircraft(logbook_id, aircraft_id), data)

    def delete_aircraft(self, logbook_id: int, aircraft_id: int) -> None:
        """Delete an aircraft together with the flights logged in it."""
        self._delete(self.get_aircraft(logbook_id, aircraft_id))

    # -------------------------------------------------------------------------
    # Flights
    # -------------------------------------------------------------------------

    def list_flights(
        self,
        logbook_id: int,
        since: Optional[date] = None,
        until: Optional[date] = None,
    ) -> List[Flight]:
        """Flights in a logbook, most recent first, optionally within a date window."""
        self.get_logbook(logbook_id)
        criteria = [Flight.logbook_id == logbook_id]
        if since is not None:
            criteria.append(Flight.flight_date >= since)
        if until is not None:
            criteria.append(Flight.flight_date <= until)
        stmt = (
            select(Flight)
            .where(Flight.user_id == self.user_id, *criteria)
            .order_by(Flight.flight_date.desc(), Flight.flight_id.desc())
        )
        return list(self.session.scalars(stmt))

    def get_flight(self, logbook_id: int, flight_id: int) -> Flight:
        return self._get(Flight, flight_id, logbook_id=logbook_id)

    def create_flight(self, logbook_id: int, data: Dict[str, Any]) -> Flight:
        # The aircraft must be one of this logbook's aircraft
        self.get_aircraft(logbook_id, data["aircraft_id"])
        return self._create(Flight, data, logbook_id=logbook_id)

    def update_flight(self, logbook_id: int, flight_id: int, data: Dict[str, Any]) -> Flight:
        flight = self.get_flight(logbook_id, flight_id)
        if "aircraft_id" in data:
            self.get_aircraft(logbook_id, data["aircraft_id"])
        return self._update(flight, data)

    def delete_flight(self, logbook_id: int, flight_id: int) -> None:
        self._delete(self.get_flight(logbook_id, flight_id))

    # -------------------------------------------------------------------------
    # Approaches
    # -------------------------------------------------------------------------

    def list_approaches(self, logbook_id: int, flight_id: int) -> List[Approach]:
        self.get_flight(logbook_id, flight_id)
        return self._list(Approach, Approach.flight_id == flight_id, order_by=Approach.approach_id)

    def get_approach(self, logbook_id: int, flight_id: int, approach_id: int) -> Approach:
        self.get_flight(logbook_id, flight_id)
        return self._get(Approach, approach_id, flight_id=flight_id)

    def create_approach(self, logbook_id: int, flight_id: int, data: Dict[str, Any]) -> Approach:
        self.get_flight(logbook_id, flight_id)
        return self._create(Approach, data, flight_id=flight_id)

    def update_approach(
        self, logbook_id: int, flight_id: int, approach_id: int, data: Dict[str, Any]
    ) -> Approach:
        return self._update(self.get_approach(logbook_id, flight_id, approach_id), data)

    def delete_approach(self, logbook_id: int, flight_id: int, approach_id: int) -> None:
        self._delete(self.get_approach(logbook_id, flight_id, approach_id))

    # -------------------------------------------------------------------------
    # Certificates and ratings
    # -------------------------------------------------------------------------

    def list_certificates(self, logbook_id: int) -> List[Certificate]:
        self.get_logbook(logbook_id)
        return self._list(
            Certificate, Certificate.logbook_id == logbook_id, order_by=Certificate.certificate_date
        )

    def get_certificate(self, logbook_id: int, certificate_id: int) -> Certificate:
        return self._get(Certificate, certificate_id, logbook_id=logbook_id)

    def create_certificate(self, logbook_id: int, data: Dict[str, Any]) -> Certificate:
        self.get_logbook(logbook_id)
        return self._create(Certificate, data, logbook_id=logbook_id)

    def update_certificate(
        self, logbook_id: int, certificate_id: int, data: Dict[str, Any]
    ) -> Certificate:
        return self._update(self.get_certificate(logbook_id, certificate_id), data)

    def delete_certificate(self, logbook_id: int, certificate_id: int) -> None:
        self._delete(self.get_certificate(logbook_id, certificate_id))

    def list_ratings(self, logbook_id: int, certificate_id: int) -> List[Rating]:
        self.get_certificate(logbook_id, certificate_id)
        return self._list(Rating, Rating.certificate_id == certificate_id, order_by=Rating.rating_date)

    def get_rating(self, logbook_id: int, certificate_id: int, rating_id: int) -> Rating:
        self.get_certificate(logbook_id, certificate_id)
        return self._get(Rating, rating_id, certificate_id=certificate_id)

    def create_rating(self, logbook_id: int, certificate_id: int, data: Dict[str, Any]) -> Rating:
        self.get_certificate(logbook_id, certificate_id)
        return self._create(Rating, data, certificate_id=certificate_id)

    def update_rating(
        self, logbook_id: int, certificate_id: int, rating_id: int, data: Dict[str, Any]
    ) -> Rating:
        return self._update(self.get_rating(logbook_id, certificate_id, rating_id), data)

    def delete_rating(self, logbook_id: int, certificate_id: int, rating_id: int) -> None:
        self._delete(self.get_rating(logbook_id, certificate_id, rating_id))

    # -------------------------------------------------------------------------
    # Endorsements
    # -------------------------------------------------------------------------

    def list_endorsements(self, logbook_id: int) -> List[Endorsement]:
        self.get_logbook(logbook_id)
        return self._list(
            Endorsement,
            Endorsement.logbook_id == logbook_id,
            order_by=Endorsement.endorsement_date,
        )

    def get_endorsement(self, logbook_id: int, endorsement_id: int) -> Endorsement:
        return self._get(Endorsement, endorsement_id, logbook_id=logbook_id)

    def create_endorsement(self, logbook_id: int, data: Dict[str, Any]) -> Endorsement:
        self.get_logbook(logbook_id)
        return self._create(Endorsement, data, logbook_id=logbook_id)

    def update_endorsement(
        self, logbook_id: int, endorsement_id: int, data: Dict[str, Any]
    ) -> Endorsement:
        return self._update(self.get_endorsement(logbook_id, endorsement_id), data)

    def delete_endorsement(self, logbook_id: int, endorsement_id: int) -> None:
        self._delete(self.get_endorsement(logbook_id, endorsement_id))

    # -------------------------------------------------------------------------
    # Currencies
    # -------------------------------------------------------------------------

    def list_currencies(self, logbook_id: int) -> List[Currency]:
        self.get_logbook(logbook_id)
        return self._list(Currency, Currency.logbook_id == logbook_id, order_by=Currency.currency_id)

    def get_currency(self, logbook_id: int, currency_id: int) -> Currency:
        return self._get(Currency, currency_id, logbook_id=logbook_id)

    def create_currency(
        self, logbook_id: int, currency_type_id: int, is_night_currency: bool = False
    ) -> Currency:
        """Start tracking a currency; its state is filled in by a refresh."""
        self.get_logbook(logbook_id)
        if self.session.get(CurrencyType, currency_type_id) is None:
            raise RecordNotFoundError("CurrencyType", currency_type_id)
        return self._create(
            Currency,
            {"currency_type_id": currency_type_id, "is_night_currency": is_night_currency},
            logbook_id=logbook_id,
        )

    def delete_currency(self, logbook_id: int, currency_id: int) -> None:
        self._delete(self.get_currency(logbook_id, currency_id))
