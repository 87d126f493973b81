"""Tests for business-hours configuration validation."""

from __future__ import annotations

from dataclasses import replace

import pytest

from backend.domain.constraints import BusinessHours, validate_business_hours_config
from backend.utils.config import get_settings


def valid_config(**overrides) -> BusinessHours:
    """Return a valid baseline BusinessHours, optionally overriding fields."""
    defaults = {
        "opening_hour": 8,
        "closing_hour": 18,
        "slot_granularity_minutes": 30,
        "availability_slot_minutes": 60,
    }
    defaults.update(overrides)
    return BusinessHours(**defaults)


def test_valid_config_passes() -> None:
    validate_business_hours_config(valid_config())


def test_contains_hour_excludes_closing_hour() -> None:
    config = valid_config()
    assert config.contains_hour(8)
    assert config.contains_hour(17)
    assert not config.contains_hour(7)
    assert not config.contains_hour(18)


def test_opening_after_closing_raises() -> None:
    with pytest.raises(ValueError):
        validate_business_hours_config(valid_config(opening_hour=18, closing_hour=8))


def test_equal_opening_and_closing_raises() -> None:
    with pytest.raises(ValueError):
        validate_business_hours_config(valid_config(opening_hour=9, closing_hour=9))


def test_opening_hour_out_of_range_raises() -> None:
    with pytest.raises(ValueError):
        validate_business_hours_config(valid_config(opening_hour=-1))


def test_closing_hour_out_of_range_raises() -> None:
    with pytest.raises(ValueError):
        validate_business_hours_config(valid_config(closing_hour=25))


def test_granularity_must_divide_an_hour() -> None:
    with pytest.raises(ValueError):
        validate_business_hours_config(valid_config(slot_granularity_minutes=25))


def test_granularity_zero_raises() -> None:
    with pytest.raises(ValueError):
        validate_business_hours_config(valid_config(slot_granularity_minutes=0))


def test_availability_slot_zero_raises() -> None:
    with pytest.raises(ValueError):
        validate_business_hours_config(valid_config(availability_slot_minutes=0))


def test_full_day_window_passes() -> None:
    validate_business_hours_config(valid_config(opening_hour=0, closing_hour=24))


def test_from_settings_uses_configured_window() -> None:
    settings = replace(get_settings(), business_opening_hour=9, business_closing_hour=17)
    config = BusinessHours.from_settings(settings)
    assert (config.opening_hour, config.closing_hour) == (9, 17)


def test_from_settings_rejects_invalid_window() -> None:
    settings = replace(get_settings(), business_opening_hour=17, business_closing_hour=9)
    with pytest.raises(ValueError):
        BusinessHours.from_settings(settings)
