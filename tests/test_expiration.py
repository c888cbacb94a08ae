"""Tests for card expiration parsing and century resolution."""

from datetime import date

import pytest

from cybersource_lite.errors import ValidationError
from cybersource_lite.models.expiration import parse_expiration, resolve_expiration_year


class TestYearResolution:
    def test_common_case_stays_in_current_century(self):
        assert resolve_expiration_year(25, today=date(2024, 6, 1)) == 2025

    def test_past_year_is_not_pushed_forward_early_in_century(self):
        assert resolve_expiration_year(2, today=date(2024, 6, 1)) == 2002

    def test_late_century_wraps_small_years_forward(self):
        # 2085: "03" is more than 20 years behind, so it means 2103
        assert resolve_expiration_year(3, today=date(2085, 1, 1)) == 2103

    def test_late_century_keeps_recent_years(self):
        assert resolve_expiration_year(70, today=date(2085, 1, 1)) == 2070

    def test_boundary_at_sixty_does_not_wrap(self):
        assert resolve_expiration_year(30, today=date(2060, 1, 1)) == 2030


class TestParseExpiration:
    def test_month_keeps_leading_zero(self):
        assert parse_expiration("09/27", today=date(2024, 6, 1)) == ("09", 2027)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_expiration(" 12/25 ", today=date(2024, 6, 1)) == ("12", 2025)

    @pytest.mark.parametrize("value", ["1225", "12/2025", "1/25", "ab/cd", "", None])
    def test_rejects_bad_format(self, value):
        with pytest.raises(ValidationError, match="MM/YY"):
            parse_expiration(value)

    def test_rejects_month_out_of_range(self):
        with pytest.raises(ValidationError, match="month"):
            parse_expiration("13/25")
