"""
BitAnalytics

Presence tracking of identifiers per event with Redis bitmaps, over hourly,
daily, ISO weekly and monthly buckets, with AND/OR/XOR composition.
"""

__version__ = "0.1.0"

from bitanalytics.analytics import BitAnalytics
from bitanalytics.exceptions import BitAnalyticsError, InvalidArgumentError
from bitanalytics.services.event_engine import (
    MAX_IDENTIFIER,
    BitmapBucket,
    BitOperator,
    DerivedBucket,
    EventBucket,
)
from bitanalytics.utils.redis_keys import Granularity

__all__ = [
    "BitAnalytics",
    "BitAnalyticsError",
    "InvalidArgumentError",
    "MAX_IDENTIFIER",
    "BitmapBucket",
    "BitOperator",
    "DerivedBucket",
    "EventBucket",
    "Granularity",
]
