"""Unit tests for age derivation and profile helpers."""

from datetime import date, datetime
from uuid import uuid4

import pytest

from domain.entities.profile import Profile, calculate_age


class TestCalculateAge:
    def test_day_before_birthday(self):
        assert calculate_age(date(2000, 3, 15), today=date(2024, 3, 14)) == 23

    def test_on_birthday(self):
        assert calculate_age(date(2000, 3, 15), today=date(2024, 3, 15)) == 24

    def test_earlier_month_same_day(self):
        assert calculate_age(date(2000, 12, 1), today=date(2024, 11, 30)) == 23

    def test_leap_day_birthday_in_non_leap_year(self):
        # Feb 28 precedes Feb 29, so the birthday has not happened yet
        assert calculate_age(date(2004, 2, 29), today=date(2023, 2, 28)) == 18
        assert calculate_age(date(2004, 2, 29), today=date(2023, 3, 1)) == 19

    @pytest.mark.parametrize(
        "today",
        [date(2024, 1, 1), date(2024, 6, 30), date(2024, 12, 31)],
    )
    def test_age_is_never_negative_after_birth(self, today: date):
        assert calculate_age(date(2024, 1, 1), today=today) == 0


class TestProfile:
    def test_age_is_derived_from_birthdate(self):
        profile = Profile(id=uuid4(), birthdate=date(1999, 4, 2))

        assert profile.age(today=date(2024, 4, 2)) == 25

    def test_age_is_none_without_birthdate(self):
        assert Profile(id=uuid4()).age() is None

    def test_defaults(self):
        profile = Profile(id=uuid4())

        assert profile.location == "El Paso, TX"
        assert profile.interests == []
        assert profile.languages == []
        assert profile.verified is False

    @pytest.mark.parametrize("name,expected", [("", False), ("   ", False), ("Jane", True)])
    def test_is_onboarded_requires_a_name(self, name: str, expected: bool):
        assert Profile(id=uuid4(), full_name=name).is_onboarded is expected

    def test_updated_at_never_precedes_created_at(self):
        created = datetime(2026, 1, 2)
        profile = Profile(id=uuid4(), created_at=created, updated_at=datetime(2026, 1, 1))

        assert profile.updated_at == created
