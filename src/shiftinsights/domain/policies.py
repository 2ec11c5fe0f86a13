"""Policy definitions for analytics rules.

This module contains configurable policies for the modeling assumptions
the engine makes: how revenue is derived from labor, and how start hours
map onto parts of the day. Policies are kept separate from the reducers
so they can be tested and replaced independently.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class DayPart(Enum):
    """Part of the day a shift starts in."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class RevenuePolicy(ABC):
    """Abstract base class for revenue estimation policies."""

    @abstractmethod
    def revenue_per_hour(self, average_hourly_wage: float) -> float:
        """Estimated revenue earned per worked hour.

        Args:
            average_hourly_wage: Mean hourly wage across employees.

        Returns:
            Revenue per hour (never negative).
        """
        pass


class DayPartPolicy(ABC):
    """Abstract base class for day-part bucketing policies."""

    @abstractmethod
    def classify(self, hour: int) -> DayPart:
        """Get the day part for a start hour (0-23)."""
        pass


@dataclass
class MarkupRevenuePolicy(RevenuePolicy):
    """Revenue as a fixed multiple of labor.

    There is no invoicing data behind the engine, so revenue is
    approximated as ``average wage x markup`` per worked hour. Service
    businesses typically sit between 2x and 4x.
    """

    markup_factor: float = 3.0

    def __post_init__(self) -> None:
        if self.markup_factor < 0:
            raise ValueError("markup_factor must not be negative")

    def revenue_per_hour(self, average_hourly_wage: float) -> float:
        return max(average_hourly_wage, 0.0) * self.markup_factor


@dataclass
class DefaultDayPartPolicy(DayPartPolicy):
    """Default day-part boundaries.

    - Morning: 5 AM - 12 PM
    - Afternoon: 12 PM - 5 PM
    - Evening: 5 PM - 10 PM
    - Night: everything else (wraps midnight)
    """

    morning_start: int = 5
    afternoon_start: int = 12
    evening_start: int = 17
    night_start: int = 22

    def __post_init__(self) -> None:
        bounds = [
            self.morning_start,
            self.afternoon_start,
            self.evening_start,
            self.night_start,
        ]
        if bounds != sorted(bounds) or bounds[0] < 0 or bounds[-1] > 24:
            raise ValueError("Day-part boundaries must be ascending hours in 0-24")

    def classify(self, hour: int) -> DayPart:
        if self.morning_start <= hour < self.afternoon_start:
            return DayPart.MORNING
        if self.afternoon_start <= hour < self.evening_start:
            return DayPart.AFTERNOON
        if self.evening_start <= hour < self.night_start:
            return DayPart.EVENING
        return DayPart.NIGHT
