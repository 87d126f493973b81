"""Business-hours window used by booking validation and slot listing."""

from __future__ import annotations

from dataclasses import dataclass

from backend.utils.config import Settings


@dataclass(frozen=True)
class BusinessHours:
    opening_hour: int = 8
    closing_hour: int = 18
    slot_granularity_minutes: int = 30
    availability_slot_minutes: int = 60

    @classmethod
    def from_settings(cls, settings: Settings) -> "BusinessHours":
        config = cls(
            opening_hour=settings.business_opening_hour,
            closing_hour=settings.business_closing_hour,
            slot_granularity_minutes=settings.slot_granularity_minutes,
            availability_slot_minutes=settings.availability_slot_minutes,
        )
        validate_business_hours_config(config)
        return config

    def contains_hour(self, hour: int) -> bool:
        # Closing hour is exclusive.
        return self.opening_hour <= hour < self.closing_hour

    def label(self) -> str:
        return f"{self.opening_hour}:00 - {self.closing_hour}:00"


def validate_business_hours_config(config: BusinessHours) -> None:
    if not 0 <= config.opening_hour <= 23:
        raise ValueError("opening_hour must be between 0 and 23")
    if not 1 <= config.closing_hour <= 24:
        raise ValueError("closing_hour must be between 1 and 24")
    if config.opening_hour >= config.closing_hour:
        raise ValueError("opening_hour must be earlier than closing_hour")
    if config.slot_granularity_minutes <= 0 or 60 % config.slot_granularity_minutes != 0:
        raise ValueError("slot_granularity_minutes must be a positive divisor of 60")
    if config.availability_slot_minutes <= 0:
        raise ValueError("availability_slot_minutes must be > 0")
