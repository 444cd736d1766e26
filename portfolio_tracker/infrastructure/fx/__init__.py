"""
FX rate retrieval and aggregation.
"""

from .csv_rate_source import CsvRateSource
from .frankfurter_source import FrankfurterRateSource
from .rate_aggregator import RateAggregator, downsample_rates, find_date_range, rate_bucket_key

__all__ = [
    "CsvRateSource",
    "FrankfurterRateSource",
    "RateAggregator",
    "downsample_rates",
    "find_date_range",
    "rate_bucket_key",
]
