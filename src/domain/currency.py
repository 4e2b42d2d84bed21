"""Currency service - recent-experience calculations from flight history.

Three calculations are supported, selected by ``CurrencyType.calculation_type``:

* PASSENGER: three takeoffs and landings within the preceding 90 days in the
  same category and class (tailwheel where required). Night currency counts
  night landings only.
* INSTRUMENT: six approaches plus holding within the preceding six calendar
  months, or an instrument proficiency check.
* FLIGHT_REVIEW: a flight review or check ride within the preceding 24
  calendar months.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from core.exceptions import CurrencyError
from core.logging_config import get_logger
from core.models import Aircraft, Approach, CalculationType, Currency, CurrencyType, Flight
from core.utils import add_months, end_of_month, utctoday
from domain.logbook import LogbookService

LOGGER = get_logger(__name__)

PASSENGER_LANDINGS = 3
PASSENGER_PERIOD_DAYS = 90
INSTRUMENT_APPROACHES = 6
INSTRUMENT_PERIOD_MONTHS = 6
FLIGHT_REVIEW_PERIOD_MONTHS = 24

TAILWHEEL_GEAR_ABBREVIATIONS = {"FC", "RC"}

# Approaches flown without reference to instruments
NON_INSTRUMENT_APPROACH_TYPES = {"visual", "contact"}


@dataclass
class CurrencyResult:
    """Outcome of one currency calculation."""

    is_current: bool
    days_remaining: int
    # Last day on which the currency is still held
    expires_on: Optional[date] = None
    qualifying_date: Optional[date] = None


def is_tailwheel(aircraft: Aircraft) -> bool:
    gear = (aircraft.gear_type or "").strip()
    return "conventional" in gear.lower() or gear.upper() in TAILWHEEL_GEAR_ABBREVIATIONS


def _same(value: Optional[str], required: Optional[str]) -> bool:
    if not required:
        return True
    return (value or "").strip().lower() == required.strip().lower()


def matching_flights(
    currency_type: CurrencyType, flights: Iterable[Flight], as_of: date
) -> List[Flight]:
    """Flights on or before ``as_of`` that count toward the currency, newest first."""
    matched = []
    for flight in flights:
        if flight.flight_date > as_of:
            continue
        aircraft = flight.aircraft
        if aircraft is None:
            continue
        if not _same(aircraft.aircraft_category, currency_type.aircraft_category):
            continue
        if not _same(aircraft.aircraft_class, currency_type.aircraft_class):
            continue
        if currency_type.requires_tailwheel and not is_tailwheel(aircraft):
            continue
        matched.append(flight)
    matched.sort(key=lambda f: (f.flight_date, f.flight_id or 0), reverse=True)
    return matched


def _result(qualifying: Optional[date], expires: Optional[date], as_of: date) -> CurrencyResult:
    if expires is None or expires < as_of:
        return CurrencyResult(False, 0, expires, qualifying)
    # The expiry day itself still counts
    return CurrencyResult(True, (expires - as_of).days + 1, expires, qualifying)


def is_instrument_approach(approach: Approach) -> bool:
    return (approach.approach_type or "").strip().lower() not in NON_INSTRUMENT_APPROACH_TYPES


def passenger_currency(
    flights: Sequence[Flight], as_of: date, night: bool = False
) -> CurrencyResult:
    """Date of the third most recent landing (night landings only for night currency)."""
    landings = 0
    for flight in flights:
        landings += flight.number_of_landings_night or 0
        if not night:
            landings += flight.number_of_landings_day or 0
        if landings >= PASSENGER_LANDINGS:
            qualifying = flight.flight_date
            return _result(qualifying, qualifying + timedelta(days=PASSENGER_PERIOD_DAYS), as_of)
    return CurrencyResult(False, 0)


def instrument_currency(flights: Sequence[Flight], as_of: date) -> CurrencyResult:
    """
    Instrument currency runs six calendar months past the month of the
    qualifying experience.

    Experience qualifies on the earlier of the sixth most recent instrument
    approach and the most recent holding; visual and contact approaches do not
    count. An instrument proficiency check qualifies on its own, and the later
    expiry wins.
    """
    best: Optional[CurrencyResult] = None

    approach_dates = [
        flight.flight_date
        for flight in flights
        for approach in flight.approaches
        if is_instrument_approach(approach)
    ]
    hold_dates = [flight.flight_date for flight in flights if (flight.number_of_holds or 0) > 0]
    if len(approach_dates) >= INSTRUMENT_APPROACHES and hold_dates:
        qualifying = min(approach_dates[INSTRUMENT_APPROACHES - 1], hold_dates[0])
        best = _result(
            qualifying, end_of_month(add_months(qualifying, INSTRUMENT_PERIOD_MONTHS)), as_of
        )

    checks = [flight.flight_date for flight in flights if flight.is_instrument_proficiency_check]
    if checks:
        ipc = _result(
            checks[0], end_of_month(add_months(checks[0], INSTRUMENT_PERIOD_MONTHS)), as_of
        )
        if best is None or (ipc.expires_on and best.expires_on and ipc.expires_on > best.expires_on):
            best = ipc

    return best or CurrencyResult(False, 0)


def flight_review_currency(flights: Sequence[Flight], as_of: date) -> CurrencyResult:
    """Most recent flight review or check ride, valid through the 24th calendar month."""
    for flight in flights:
        if flight.is_flight_review or flight.is_check_ride:
            qualifying = flight.flight_date
            return _result(
                qualifying,
                end_of_month(add_months(qualifying, FLIGHT_REVIEW_PERIOD_MONTHS)),
                as_of,
            )
    return CurrencyResult(False, 0)


def evaluate_currency(
    currency_type: CurrencyType,
    flights: Iterable[Flight],
    as_of: date,
    night: bool = False,
) -> CurrencyResult:
    """
    Compute a currency from a logbook's flights.

    Raises:
        CurrencyError: If the currency type has an unknown calculation type.
    """
    try:
        calculation = CalculationType(currency_type.calculation_type)
    except ValueError as exc:
        raise CurrencyError(
            f"Unknown calculation type {currency_type.calculation_type} "
            f"for currency type '{currency_type.label}'"
        ) from exc

    matched = matching_flights(currency_type, flights, as_of)
    if calculation is CalculationType.PASSENGER:
        return passenger_currency(matched, as_of, night=night)
    if calculation is CalculationType.INSTRUMENT:
        return instrument_currency(matched, as_of)
    return flight_review_currency(matched, as_of)


class CurrencyService:
    """Recomputes the stored state of a logbook's currencies."""

    def __init__(self, session: Session, user_id: str):
        self.session = session
        self.user_id = user_id
        self.logbooks = LogbookService(session, user_id)

    def _flights(self, logbook_id: int) -> List[Flight]:
        stmt = (
            select(Flight)
            .where(Flight.logbook_id == logbook_id, Flight.user_id == self.user_id)
            .options(selectinload(Flight.aircraft), selectinload(Flight.approaches))
            .order_by(Flight.flight_date.desc())
        )
        return list(self.session.scalars(stmt))

    def _apply(self, currency: Currency, flights: List[Flight], as_of: date) -> Currency:
        result = evaluate_currency(
            currency.currency_type, flights, as_of, night=currency.is_night_currency
        )
        currency.is_current = result.is_current
        currency.days_remaining = result.days_remaining
        return currency

    def refresh_currency(
        self, logbook_id: int, currency_id: int, as_of: Optional[date] = None
    ) -> Currency:
        currency = self.logbooks.get_currency(logbook_id, currency_id)
        self._apply(currency, self._flights(logbook_id), as_of or utctoday())
        self.session.flush()
        return currency

    def refresh_logbook(self, logbook_id: int, as_of: Optional[date] = None) -> List[Currency]:
        """Recompute every currency tracked in a logbook."""
        as_of = as_of or utctoday()
        currencies = self.logbooks.list_currencies(logbook_id)
        flights = self._flights(logbook_id)
        for currency in currencies:
            self._apply(currency, flights, as_of)
        self.session.flush()
        LOGGER.info(
            "Refreshed %d currencies",
            len(currencies),
            extra={"extra_data": {"user_id": self.user_id, "logbook_id": logbook_id}},
        )
        return currencies
