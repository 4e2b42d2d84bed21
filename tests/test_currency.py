"""Tests for currency calculations."""
from __future__ import annotations

from datetime import date

import pytest

from core.exceptions import CurrencyError
from core.models import Aircraft, Approach, CalculationType, CurrencyType, Flight
from core.utils import add_months, end_of_month
from domain.currency import evaluate_currency, is_tailwheel

AS_OF = date(2026, 6, 15)


def _aircraft(category="Airplane", class_name="Single-Engine Land", gear="FT") -> Aircraft:
    return Aircraft(
        aircraft_identifier="N12345",
        aircraft_type="C172",
        aircraft_category=category,
        aircraft_class=class_name,
        gear_type=gear,
    )


def _flight(day, aircraft, landings_day=0, landings_night=0, holds=0, approaches=0,
            review=False, check_ride=False, ipc=False, approach_type="ILS") -> Flight:
    flight = Flight(
        flight_date=day,
        departure_code="KPAO",
        destination_code="KPAO",
        number_of_landings_day=landings_day,
        number_of_landings_night=landings_night,
        number_of_holds=holds,
        is_flight_review=review,
        is_check_ride=check_ride,
        is_instrument_proficiency_check=ipc,
    )
    flight.aircraft = aircraft
    flight.approaches = [
        Approach(airport_code="KSQL", approach_type=approach_type, runway="30")
        for _ in range(approaches)
    ]
    return flight


def _currency_type(calculation, category="Airplane", class_name="Single-Engine Land",
                   tailwheel=False) -> CurrencyType:
    return CurrencyType(
        label="test",
        category="test",
        aircraft_category=category,
        aircraft_class=class_name,
        calculation_type=calculation.value,
        requires_tailwheel=tailwheel,
    )


PASSENGER = _currency_type(CalculationType.PASSENGER)
INSTRUMENT = _currency_type(CalculationType.INSTRUMENT, class_name=None)
FLIGHT_REVIEW = _currency_type(CalculationType.FLIGHT_REVIEW, category=None, class_name=None)


# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------


def test_add_months_clamps_day():
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)
    assert add_months(date(2024, 7, 1), 24) == date(2026, 7, 1)


def test_end_of_month():
    assert end_of_month(date(2024, 2, 3)) == date(2024, 2, 29)
    assert end_of_month(date(2026, 9, 30)) == date(2026, 9, 30)


# ---------------------------------------------------------------------------
# Passenger carrying
# ---------------------------------------------------------------------------


class TestPassengerCurrency:
    def test_three_recent_landings(self):
        aircraft = _aircraft()
        flights = [
            _flight(date(2026, 6, 1), aircraft, landings_day=2),
            _flight(date(2026, 5, 20), aircraft, landings_day=1),
            _flight(date(2026, 1, 1), aircraft, landings_day=10),
        ]

        result = evaluate_currency(PASSENGER, flights, AS_OF)

        assert result.is_current is True
        assert result.qualifying_date == date(2026, 5, 20)
        assert result.expires_on == date(2026, 8, 18)
        assert result.days_remaining == 65

    def test_old_landings_expired(self):
        flights = [_flight(date(2026, 1, 10), _aircraft(), landings_day=3)]

        result = evaluate_currency(PASSENGER, flights, AS_OF)

        assert result.is_current is False
        assert result.days_remaining == 0

    def test_current_on_ninetieth_day(self):
        flights = [_flight(date(2026, 3, 17), _aircraft(), landings_day=3)]

        assert evaluate_currency(PASSENGER, flights, date(2026, 6, 15)).days_remaining == 1
        assert evaluate_currency(PASSENGER, flights, date(2026, 6, 16)).is_current is False

    def test_not_enough_landings(self):
        flights = [_flight(date(2026, 6, 1), _aircraft(), landings_day=2)]

        assert evaluate_currency(PASSENGER, flights, AS_OF).is_current is False

    def test_night_currency_counts_night_landings_only(self):
        aircraft = _aircraft()
        day_only = [_flight(date(2026, 6, 1), aircraft, landings_day=5)]
        night = [_flight(date(2026, 6, 1), aircraft, landings_night=3)]

        assert evaluate_currency(PASSENGER, day_only, AS_OF, night=True).is_current is False
        assert evaluate_currency(PASSENGER, night, AS_OF, night=True).is_current is True

    def test_night_landings_count_toward_day_currency(self):
        flights = [_flight(date(2026, 6, 1), _aircraft(), landings_day=1, landings_night=2)]

        assert evaluate_currency(PASSENGER, flights, AS_OF).is_current is True

    def test_other_class_does_not_count(self):
        flights = [_flight(date(2026, 6, 1), _aircraft(class_name="Multiengine Land"), landings_day=3)]

        assert evaluate_currency(PASSENGER, flights, AS_OF).is_current is False

    def test_future_flights_ignored(self):
        flights = [_flight(date(2026, 7, 1), _aircraft(), landings_day=3)]

        assert evaluate_currency(PASSENGER, flights, AS_OF).is_current is False

    def test_tailwheel_required(self):
        tailwheel_type = _currency_type(CalculationType.PASSENGER, tailwheel=True)
        tricycle = [_flight(date(2026, 6, 1), _aircraft(gear="FT"), landings_day=3)]
        conventional = [_flight(date(2026, 6, 1), _aircraft(gear="FC"), landings_day=3)]

        assert evaluate_currency(tailwheel_type, tricycle, AS_OF).is_current is False
        assert evaluate_currency(tailwheel_type, conventional, AS_OF).is_current is True


@pytest.mark.parametrize("gear,expected", [
    ("FC", True),
    ("RC", True),
    ("Fixed Conventional", True),
    ("FT", False),
    ("Retractable Tricycle", False),
    (None, False),
])
def test_is_tailwheel(gear, expected):
    assert is_tailwheel(_aircraft(gear=gear)) is expected


# ---------------------------------------------------------------------------
# Instrument
# ---------------------------------------------------------------------------


class TestInstrumentCurrency:
    def test_six_approaches_and_holding(self):
        flights = [_flight(date(2026, 3, 10), _aircraft(), approaches=6, holds=1)]

        result = evaluate_currency(INSTRUMENT, flights, AS_OF)

        assert result.is_current is True
        assert result.expires_on == date(2026, 9, 30)
        assert result.days_remaining == 108

    def test_qualifies_on_earlier_of_sixth_approach_and_hold(self):
        aircraft = _aircraft()
        flights = [
            _flight(date(2026, 5, 1), aircraft, approaches=4),
            _flight(date(2026, 4, 1), aircraft, approaches=2),
            _flight(date(2025, 11, 20), aircraft, holds=1),
        ]

        result = evaluate_currency(INSTRUMENT, flights, AS_OF)

        assert result.qualifying_date == date(2025, 11, 20)
        assert result.expires_on == date(2026, 5, 31)
        assert result.is_current is False

    def test_five_approaches_not_enough(self):
        flights = [_flight(date(2026, 6, 1), _aircraft(), approaches=5, holds=1)]

        assert evaluate_currency(INSTRUMENT, flights, AS_OF).is_current is False

    def test_holding_required(self):
        flights = [_flight(date(2026, 6, 1), _aircraft(), approaches=6)]

        assert evaluate_currency(INSTRUMENT, flights, AS_OF).is_current is False

    def test_proficiency_check(self):
        flights = [_flight(date(2025, 12, 5), _aircraft(), ipc=True)]

        result = evaluate_currency(INSTRUMENT, flights, AS_OF)

        assert result.is_current is True
        assert result.expires_on == date(2026, 6, 30)
        assert result.days_remaining == 16

    def test_later_expiry_wins(self):
        aircraft = _aircraft()
        flights = [
            _flight(date(2026, 4, 2), aircraft, approaches=6, holds=1),
            _flight(date(2025, 12, 5), aircraft, ipc=True),
        ]

        assert evaluate_currency(INSTRUMENT, flights, AS_OF).expires_on == date(2026, 10, 31)

    def test_helicopter_does_not_count_for_airplane(self):
        flights = [_flight(date(2026, 6, 1), _aircraft("Rotorcraft", "Helicopter"), approaches=6, holds=1)]

    @pytest.mark.parametrize("approach_type", ["Visual", "Contact", " visual "])
    def test_visual_and_contact_approaches_do_not_count(self, approach_type):
        flights = [_flight(date(2026, 6, 1), _aircraft(), approaches=6, holds=1,
                           approach_type=approach_type)]

        assert evaluate_currency(INSTRUMENT, flights, AS_OF).is_current is False

    def test_mixed_approaches_count_instrument_only(self):
        aircraft = _aircraft()
        flights = [
            _flight(date(2026, 6, 1), aircraft, approaches=3, approach_type="Visual"),
            _flight(date(2026, 5, 1), aircraft, approaches=6, approach_type="RNAV (GPS)", holds=1),
        ]

        result = evaluate_currency(INSTRUMENT, flights, AS_OF)

        assert result.qualifying_date == date(2026, 5, 1)
        assert result.expires_on == date(2026, 11, 30)

    def test_current_through_last_day_of_month(self):
        flights = [_flight(date(2025, 12, 5), _aircraft(), ipc=True)]

        last_day = evaluate_currency(INSTRUMENT, flights, date(2026, 6, 30))
        next_day = evaluate_currency(INSTRUMENT, flights, date(2026, 7, 1))

        assert last_day.is_current is True
        assert last_day.days_remaining == 1
        assert next_day.is_current is False
        assert next_day.days_remaining == 0

        assert evaluate_currency(INSTRUMENT, flights, AS_OF).is_current is False


# ---------------------------------------------------------------------------
# Flight review
# ---------------------------------------------------------------------------


class TestFlightReviewCurrency:
    def test_review_within_24_calendar_months(self):
        flights = [_flight(date(2024, 7, 1), _aircraft(), review=True)]

        result = evaluate_currency(FLIGHT_REVIEW, flights, AS_OF)

        assert result.is_current is True
        assert result.expires_on == date(2026, 7, 31)
        assert result.days_remaining == 47

    def test_check_ride_counts(self):
        flights = [_flight(date(2025, 2, 1), _aircraft("Rotorcraft", "Helicopter"), check_ride=True)]

        assert evaluate_currency(FLIGHT_REVIEW, flights, AS_OF).is_current is True

    def test_review_expired(self):
        flights = [_flight(date(2024, 5, 1), _aircraft(), review=True)]

        result = evaluate_currency(FLIGHT_REVIEW, flights, AS_OF)

        assert result.is_current is False
        assert result.expires_on == date(2026, 5, 31)

    def test_current_through_last_day_of_24th_month(self):
        flights = [_flight(date(2024, 7, 1), _aircraft(), review=True)]

        last_day = evaluate_currency(FLIGHT_REVIEW, flights, date(2026, 7, 31))
        next_day = evaluate_currency(FLIGHT_REVIEW, flights, date(2026, 8, 1))

        assert last_day.is_current is True
        assert last_day.days_remaining == 1
        assert next_day.is_current is False

    def test_no_review(self):
        flights = [_flight(date(2026, 6, 1), _aircraft(), landings_day=3)]

        assert evaluate_currency(FLIGHT_REVIEW, flights, AS_OF).is_current is False


def test_unknown_calculation_type():
    currency_type = CurrencyType(label="Mystery", category="x", calculation_type=99)

    with pytest.raises(CurrencyError):
        evaluate_currency(currency_type, [], AS_OF)
