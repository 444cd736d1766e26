"""
Reporting period and rate frequency enumerations.

This module defines the granularities used to bucket transactions into
report rows and to downsample FX rate series.
"""

from enum import StrEnum


class AggregateBy(StrEnum):
    """
    Report row granularity.

    Period keys are "YYYY" for years and "YYYY-Qn" for quarters.
    """

    YEAR = "year"
    QUARTER = "quarter"

    @property
    def periods_per_year(self) -> int:
        """Number of periods in one calendar year."""
        return 1 if self == self.YEAR else 4

    @classmethod
    def from_string(cls, value: str) -> "AggregateBy":
        """
        Convert string to AggregateBy enum.

        Raises:
            ValueError: If the granularity is not supported
        """
        value_lower = value.lower()
        for granularity in cls:
            if granularity.value == value_lower:
                return granularity

        raise ValueError(
            f"Unsupported aggregation: {value}. "
            f"Supported aggregations: {', '.join([g.value for g in cls])}"
        )


class RateFrequency(StrEnum):
    """
    Recording frequency of stored FX rates.
    """

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    @classmethod
    def from_string(cls, value: str) -> "RateFrequency":
        """
        Convert string to RateFrequency enum.

        Raises:
            ValueError: If the frequency is not supported
        """
        value_lower = value.lower()
        for frequency in cls:
            if frequency.value == value_lower:
                return frequency

        raise ValueError(
            f"Unsupported rate frequency: {value}. "
            f"Supported frequencies: {', '.join([f.value for f in cls])}"
        )
