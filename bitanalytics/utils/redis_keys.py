# Copyright (c) 2026, BitAnalytics and contributors
# For license information, please see license.txt

"""
Redis key patterns for event bitmaps

Every key lives under the `bitanalytics_` prefix. A bucket key is the prefix,
the event name and a time suffix whose shape depends on the granularity:

	Month: bitanalytics_{event}_{year}-{month}
	Week:  bitanalytics_{event}_W{iso_year}-{iso_week}
	Day:   bitanalytics_{event}_{year}-{month}-{day}
	Hour:  bitanalytics_{event}_{year}-{month}-{day}-{hour}

Results of bit operations are stored under
bitanalytics_bitop_{OPERATOR}_{source_key_1}-{source_key_2}-...
"""

from datetime import datetime
from enum import Enum
from typing import Iterable, Tuple

from bitanalytics.exceptions import InvalidArgumentError

KEY_PREFIX = "bitanalytics"
KEY_DELIMITER = "_"
BITOP_SEGMENT = "bitop"
SOURCE_KEY_SEPARATOR = "-"

ALL_KEYS_PATTERN = f"{KEY_PREFIX}{KEY_DELIMITER}*"
BITOP_KEYS_PATTERN = f"{KEY_PREFIX}{KEY_DELIMITER}{BITOP_SEGMENT}{KEY_DELIMITER}*"


class Granularity(Enum):
	"""Time resolution of a bucket"""

	HOUR = "hour"
	DAY = "day"
	WEEK = "week"
	MONTH = "month"


# Number of time parts each granularity is addressed by
TIME_PARTS_COUNT = {
	Granularity.MONTH: 2,
	Granularity.WEEK: 2,
	Granularity.DAY: 3,
	Granularity.HOUR: 4,
}


def validate_event_name(event_name: str) -> str:
	"""Check that an event name can be embedded in a key.

	Args:
		event_name: Name of the event, e.g. "active" or "tasks:completed"

	Returns:
		The event name unchanged

	Raises:
		InvalidArgumentError: If the name is empty, not a string, contains the
			key delimiter or is the reserved bit operation segment
	"""
	if not isinstance(event_name, str) or not event_name:
		raise InvalidArgumentError(f"Event name must be a non-empty string, got {event_name!r}")
	if KEY_DELIMITER in event_name:
		raise InvalidArgumentError(
			f"Event name {event_name!r} must not contain the key delimiter {KEY_DELIMITER!r}"
		)
	if event_name == BITOP_SEGMENT:
		raise InvalidArgumentError(f"Event name {event_name!r} is reserved for bit operation results")
	return event_name


def _time_suffix(granularity: Granularity, time_parts: Tuple[int, ...]) -> str:
	suffix = SOURCE_KEY_SEPARATOR.join(str(int(part)) for part in time_parts)
	if granularity is Granularity.WEEK:
		return f"W{suffix}"
	return suffix


def build_key(event_name: str, granularity: Granularity, *time_parts: int, prefix: str = KEY_PREFIX) -> str:
	"""Build the Redis key of an event bucket.

	Args:
		event_name: Name of the event
		granularity: Granularity of the bucket
		*time_parts: Time coordinates, (year, month) for MONTH,
			(iso_year, iso_week) for WEEK, (year, month, day) for DAY and
			(year, month, day, hour) for HOUR
		prefix: Key prefix

	Returns:
		Redis key of the bucket

	Raises:
		InvalidArgumentError: If the event name is invalid or the number of
			time parts does not match the granularity
	"""
	validate_event_name(event_name)
	if not isinstance(granularity, Granularity):
		raise InvalidArgumentError(f"Unknown granularity {granularity!r}")

	expected = TIME_PARTS_COUNT[granularity]
	if len(time_parts) != expected:
		raise InvalidArgumentError(
			f"{granularity.value} buckets take {expected} time parts, got {len(time_parts)}"
		)

	return KEY_DELIMITER.join((prefix, event_name, _time_suffix(granularity, time_parts)))


def build_temp_key(operator: str, source_keys: Iterable[str], prefix: str = KEY_PREFIX) -> str:
	"""Build the key a bit operation result is stored under.

	The source keys are joined in the order given, so AND(A, B) and AND(B, A)
	are stored under different keys.
	"""
	joined = SOURCE_KEY_SEPARATOR.join(source_keys)
	return KEY_DELIMITER.join((prefix, BITOP_SEGMENT, operator, joined))


def time_parts_for(granularity: Granularity, moment: datetime) -> Tuple[int, ...]:
	"""Get the time coordinates of a moment at a granularity.

	Weekly buckets use the ISO calendar, so the last days of December can
	belong to week 1 of the following ISO year.
	"""
	if granularity is Granularity.MONTH:
		return (moment.year, moment.month)
	if granularity is Granularity.WEEK:
		iso_year, iso_week, _ = moment.isocalendar()
		return (iso_year, iso_week)
	if granularity is Granularity.DAY:
		return (moment.year, moment.month, moment.day)
	if granularity is Granularity.HOUR:
		return (moment.year, moment.month, moment.day, moment.hour)
	raise InvalidArgumentError(f"Unknown granularity {granularity!r}")
