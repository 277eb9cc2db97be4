"""
Fare and seat surcharge pricing tests
"""

from datetime import timedelta
import pytest

from flightbook.services.pricing import PricingEngine, round_half_up


@pytest.fixture
def pricing():
    return PricingEngine()


@pytest.mark.unit
class TestFarePricing:
    """Test time and occupancy multipliers"""

    def test_close_departure_low_occupancy(self, pricing, flight_factory, now):
        """5 days out, 10 of 180 taken: 200 * 1.3 = 260.00"""
        flight = flight_factory(departure_time=now + timedelta(days=5), base_price=200.0)

        assert pricing.price_fare(flight, now=now) == 260.0

    @pytest.mark.parametrize("days,expected", [
        (1, 130.0),
        (7, 130.0),
        (8, 120.0),
        (14, 120.0),
        (15, 110.0),
        (30, 110.0),
        (31, 100.0),
        (90, 100.0),
    ])
    def test_time_bands(self, pricing, flight_factory, now, days, expected):
        """Band limits are inclusive"""
        flight = flight_factory(departure_time=now + timedelta(days=days), occupied_seats=[], base_price=100.0)

        assert pricing.price_fare(flight, now=now) == expected

    def test_partial_days_round_up(self, pricing, flight_factory, now):
        """7 days and one second is day 8"""
        flight = flight_factory(
            departure_time=now + timedelta(days=7, seconds=1),
            occupied_seats=[],
            base_price=100.0,
        )

        assert pricing.days_until_departure(flight.departure_time, now) == 8
        assert pricing.price_fare(flight, now=now) == 120.0

    def test_high_occupancy(self, pricing, flight_factory, now):
        """Over 80% taken: x1.4"""
        occupied = [f"{row}{letter}" for row in range(1, 26) for letter in "ABCDEF"]
        flight = flight_factory(departure_time=now + timedelta(days=60), occupied_seats=occupied, base_price=200.0)

        assert pricing.occupancy(flight) > 0.8
        assert pricing.price_fare(flight, now=now) == 280.0

    def test_occupancy_threshold_is_exclusive(self, pricing, flight_factory, now):
        """Exactly 80% taken falls in the 60% band"""
        occupied = [f"{row}{letter}" for row in range(1, 25) for letter in "ABCDEF"]
        flight = flight_factory(departure_time=now + timedelta(days=60), occupied_seats=occupied, base_price=100.0)

        assert pricing.occupancy(flight) == 0.8
        assert pricing.price_fare(flight, now=now) == 120.0

    def test_multipliers_compound(self, pricing, flight_factory, now):
        """Both adjustments apply together"""
        occupied = [f"{row}{letter}" for row in range(1, 28) for letter in "ABCDEF"]
        flight = flight_factory(departure_time=now + timedelta(days=5), occupied_seats=occupied, base_price=100.0)

        assert pricing.price_fare(flight, now=now) == 182.0

    def test_zero_total_seats(self, pricing, flight_factory, now):
        """No capacity means zero occupancy, not a division error"""
        flight = flight_factory(
            departure_time=now + timedelta(days=60),
            total_seats=0,
            occupied_seats=[],
            base_price=100.0,
        )

        assert pricing.occupancy(flight) == 0.0
        assert pricing.price_fare(flight, now=now) == 100.0

    def test_no_departure_time(self, pricing, flight_factory, now):
        """Only occupancy adjusts the fare"""
        flight = flight_factory(departure_time=None, occupied_seats=[], base_price=99.99)

        assert pricing.price_fare(flight, now=now) == 99.99

    def test_explicit_departure_time_overrides_record(self, pricing, flight_factory, now):
        flight = flight_factory(departure_time=now + timedelta(days=60), occupied_seats=[], base_price=100.0)

        assert pricing.price_fare(flight, departure_time=now + timedelta(days=3), now=now) == 130.0

    def test_naive_datetimes_are_utc(self, pricing, now):
        naive_now = now.replace(tzinfo=None)

        assert pricing.days_until_departure(naive_now + timedelta(days=3), now) == 3


@pytest.mark.unit
class TestRounding:

    def test_halves_round_up(self):
        assert round_half_up(0.125) == 0.13
        assert round_half_up(2.5) == 2.5
        assert round_half_up(10.0) == 10.0

    def test_rounds_to_cents(self):
        assert round_half_up(123.4567) == 123.46
        assert round_half_up(123.4549) == 123.45


@pytest.mark.unit
class TestSeatSurcharge:
    """Test premium seat pricing"""

    def test_premium_seats_are_charged(self, flight_factory):
        flight = flight_factory(premium_seats=["1A", "1B"], premium_seat_cost=50.0)

        assert PricingEngine.price_seats(["1A", "2C"], flight) == 50.0
        assert PricingEngine.price_seats(["1A", "1B"], flight) == 100.0

    def test_standard_seats_are_free(self, flight_factory):
        flight = flight_factory(premium_seats=["1A"], premium_seat_cost=50.0)

        assert PricingEngine.price_seats(["5C", "6D"], flight) == 0.0

    def test_empty_selection(self, flight_factory):
        assert PricingEngine.price_seats([], flight_factory()) == 0.0
