"""
Settings validation tests
"""

import pytest
from pydantic import ValidationError

from flightbook.config import Settings


@pytest.mark.unit
class TestSettings:

    @pytest.mark.parametrize("name", ["RESERVATION_MAX_RETRIES", "BOOKING_REF_MAX_ATTEMPTS", "MAX_PASSENGERS"])
    def test_limits_must_be_positive(self, monkeypatch, name):
        """A zero limit would disable the operation it bounds"""
        monkeypatch.setenv(name, "0")

        with pytest.raises(ValidationError):
            Settings()

    def test_comma_separated_lists(self, monkeypatch):
        monkeypatch.setenv("VALID_IATA_CODES", "CDG, LHR,,AMS")

        assert Settings().VALID_IATA_CODES == ["CDG", "LHR", "AMS"]

    def test_postgres_url_uses_asyncpg(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/flightbook")

        assert Settings().DATABASE_URL == "postgresql+asyncpg://u:p@db:5432/flightbook"
