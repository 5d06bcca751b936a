"""Unit tests for onboarding step validation."""

from datetime import date

import pytest

from core.exceptions import ErrorCode, UnderageError, ValidationError
from domain.entities.onboarding import (
    OnboardingData,
    normalize_tags,
    validate_all,
    validate_step,
)

TODAY = date(2024, 6, 1)


@pytest.fixture
def complete() -> OnboardingData:
    return OnboardingData(
        full_name="Jane Doe",
        birthdate=date(1999, 4, 2),
        gender="female",
        interests=["Music", "Travel"],
        languages=["English"],
    )


class TestValidateStep:
    def test_blank_name_fails_step_one(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_step(1, OnboardingData(full_name="  "), today=TODAY)

        assert exc_info.value.details == {"field": "full_name", "step": 1}

    def test_missing_birthdate_fails_step_two(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_step(2, OnboardingData(full_name="Jane"), today=TODAY)

        assert exc_info.value.details["step"] == 2

    def test_underage_fails_step_two(self):
        data = OnboardingData(birthdate=date(2006, 6, 2))

        with pytest.raises(UnderageError) as exc_info:
            validate_step(2, data, today=TODAY)

        assert exc_info.value.error_code == ErrorCode.UNDERAGE
        assert exc_info.value.details["step"] == 2

    def test_turning_eighteen_today_passes(self):
        validate_step(2, OnboardingData(birthdate=date(2006, 6, 1)), today=TODAY)

    def test_minimum_age_is_configurable(self):
        with pytest.raises(UnderageError):
            validate_step(
                2, OnboardingData(birthdate=date(2004, 1, 1)), minimum_age=21, today=TODAY
            )

    @pytest.mark.parametrize(
        "step,field",
        [(3, "gender"), (4, "interests"), (5, "languages")],
    )
    def test_empty_selection_fails(self, step: int, field: str):
        with pytest.raises(ValidationError) as exc_info:
            validate_step(step, OnboardingData(), today=TODAY)

        assert exc_info.value.details == {"field": field, "step": step}

    @pytest.mark.parametrize(
        "step,field,data",
        [
            (4, "interests", OnboardingData(interests=["   ", ""])),
            (5, "languages", OnboardingData(languages=[" "])),
        ],
    )
    def test_whitespace_only_tags_fail(self, step: int, field: str, data: OnboardingData):
        with pytest.raises(ValidationError) as exc_info:
            validate_step(step, data, today=TODAY)

        assert exc_info.value.details == {"field": field, "step": step}

    @pytest.mark.parametrize("step", [0, 6, -1])
    def test_unknown_step_is_rejected(self, step: int, complete: OnboardingData):
        with pytest.raises(ValidationError):
            validate_step(step, complete, today=TODAY)


class TestValidateAll:
    def test_complete_data_passes(self, complete: OnboardingData):
        validate_all(complete, today=TODAY)

    def test_first_failing_step_wins(self):
        data = OnboardingData(full_name="", gender="")

        with pytest.raises(ValidationError) as exc_info:
            validate_all(data, today=TODAY)

        assert exc_info.value.details["step"] == 1


class TestNormalizeTags:
    def test_strips_and_dedupes_in_order(self):
        assert normalize_tags([" Travel", "Music", "Travel ", "", "  "]) == ["Travel", "Music"]

    def test_blank_only_list_is_empty(self):
        assert normalize_tags(["   ", "\t"]) == []
