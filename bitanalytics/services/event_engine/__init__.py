"""
Event Engine Service Module

This module provides presence tracking of identifiers per event using Redis bitmaps.

Services:
    - buckets: Event and derived bitmaps (mark, test, count, exists, delete)
    - event_recorder: Multi-granularity event marking and bulk cleanup
    - bit_operations: AND/OR/XOR composition of buckets with Redis BITOP
"""

from bitanalytics.services.event_engine.buckets import (
    MAX_IDENTIFIER,
    BitmapBucket,
    EventBucket,
    DerivedBucket,
    validate_identifier,
    month_events,
    week_events,
    day_events,
    hour_events,
    bucket_for,
)
from bitanalytics.services.event_engine.event_recorder import (
    to_utc,
    buckets_for_event,
    mark_event,
    delete_all_events,
    delete_temporary_bitop_keys,
)
from bitanalytics.services.event_engine.bit_operations import (
    BitOperator,
    resolve_operator,
    combine,
    bit_op_and,
    bit_op_or,
    bit_op_xor,
)

__all__ = [
    "MAX_IDENTIFIER",
    "BitmapBucket",
    "EventBucket",
    "DerivedBucket",
    "validate_identifier",
    "month_events",
    "week_events",
    "day_events",
    "hour_events",
    "bucket_for",
    "to_utc",
    "buckets_for_event",
    "mark_event",
    "delete_all_events",
    "delete_temporary_bitop_keys",
    "BitOperator",
    "resolve_operator",
    "combine",
    "bit_op_and",
    "bit_op_or",
    "bit_op_xor",
]
