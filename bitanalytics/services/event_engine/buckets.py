# Copyright (c) 2026, BitAnalytics and contributors
# For license information, please see license.txt

"""
Buckets - Redis bitmaps holding the identifiers seen for an event.

A bucket is a Redis client plus one key. The bit at offset N is set when
identifier N was present, so membership is a GETBIT and the number of
distinct identifiers is a BITCOUNT.

Two kinds of buckets share the same read contract:
	- EventBucket: one event at one granularity and time, written by marking
	- DerivedBucket: the stored result of a bit operation over other buckets
"""

import logging
from datetime import datetime
from typing import Tuple

from bitanalytics.exceptions import InvalidArgumentError
from bitanalytics.utils import redis_keys
from bitanalytics.utils.redis_keys import Granularity

logger = logging.getLogger(__name__)

# Largest offset Redis SETBIT accepts; Redis allocates the bitmap up to the
# highest offset written, so a single large id costs up to 512MB.
MAX_IDENTIFIER = 2 ** 32 - 1


def validate_identifier(identifier: int) -> int:
	"""Check that an identifier can be used as a bit offset.

	Args:
		identifier: Non-negative integer id, typically a user id

	Returns:
		The identifier unchanged

	Raises:
		InvalidArgumentError: If the identifier is not an int, is negative or
			is larger than MAX_IDENTIFIER
	"""
	if isinstance(identifier, bool) or not isinstance(identifier, int):
		raise InvalidArgumentError(f"Identifier must be an integer, got {identifier!r}")
	if identifier < 0 or identifier > MAX_IDENTIFIER:
		raise InvalidArgumentError(
			f"Identifier {identifier} is outside the bit offset range 0..{MAX_IDENTIFIER}"
		)
	return identifier


class BitmapBucket:
	"""
	Read side of a bucket, shared by event and derived buckets

	Provides:
	- is_present / `in`: GETBIT
	- count / len(): BITCOUNT
	- exists: raw key existence
	- delete: DEL
	- &, |, ^: bit operations with another bucket
	"""

	def __init__(self, redis, key: str):
		if redis is None:
			raise InvalidArgumentError("A bucket needs a Redis client")
		if not key:
			raise InvalidArgumentError("A bucket needs a key")
		self.redis = redis
		self.key = key

	def is_present(self, identifier: int) -> bool:
		"""Check whether an identifier has been marked in this bucket"""
		validate_identifier(identifier)
		return self.redis.getbit(self.key, identifier) == 1

	def count(self) -> int:
		"""Number of identifiers marked in this bucket, 0 if the key is absent"""
		return self.redis.bitcount(self.key)

	def exists(self) -> bool:
		"""
		Check whether the key holds a value

		This is not the same as count() > 0: a bit operation whose result has
		no bits set still stores its (all-zero) bytes, and exists() is True.
		"""
		return self.redis.exists(self.key) > 0

	def delete(self) -> None:
		"""Remove the bucket's key, no-op if it is absent"""
		self.redis.delete(self.key)
		logger.debug(f"Deleted bucket key={self.key}")

	def __contains__(self, identifier: int) -> bool:
		return self.is_present(identifier)

	def __len__(self) -> int:
		return self.count()

	def __and__(self, other: "BitmapBucket") -> "DerivedBucket":
		from bitanalytics.services.event_engine import bit_operations
		return bit_operations.combine(self.redis, bit_operations.BitOperator.AND, [self, other])

	def __or__(self, other: "BitmapBucket") -> "DerivedBucket":
		from bitanalytics.services.event_engine import bit_operations
		return bit_operations.combine(self.redis, bit_operations.BitOperator.OR, [self, other])

	def __xor__(self, other: "BitmapBucket") -> "DerivedBucket":
		from bitanalytics.services.event_engine import bit_operations
		return bit_operations.combine(self.redis, bit_operations.BitOperator.XOR, [self, other])

	def __eq__(self, other) -> bool:
		if not isinstance(other, BitmapBucket):
			return NotImplemented
		return type(self) is type(other) and self.key == other.key

	def __hash__(self) -> int:
		return hash((type(self).__name__, self.key))

	def __repr__(self) -> str:
		return f"{type(self).__name__}({self.key!r})"


class EventBucket(BitmapBucket):
	"""
	Bitmap of one event at one granularity and time

	Example:
		EventBucket(redis, "active", Granularity.DAY, (2012, 10, 23))
	"""

	def __init__(self, redis, event_name: str, granularity: Granularity, time_parts: Tuple[int, ...]):
		key = redis_keys.build_key(event_name, granularity, *time_parts)
		super().__init__(redis, key)
		self.event_name = event_name
		self.granularity = granularity
		self.time_parts = tuple(time_parts)

	def mark_present(self, identifier: int) -> None:
		"""Set the identifier's bit. Marking twice leaves the bitmap unchanged."""
		validate_identifier(identifier)
		self.redis.setbit(self.key, identifier, 1)
		logger.debug(f"Marked identifier={identifier} in key={self.key}")


class DerivedBucket(BitmapBucket):
	"""
	Stored result of a bit operation

	Derived buckets are read and deleted but never marked. They can be used as
	sources of further bit operations.
	"""

	def __init__(self, redis, key: str, operator, sources):
		super().__init__(redis, key)
		self.operator = operator
		self.sources = tuple(sources)


def month_events(redis, event_name: str, year: int, month: int) -> EventBucket:
	"""Events for a month, e.g. month_events(redis, "active", 2012, 10)"""
	return EventBucket(redis, event_name, Granularity.MONTH, (year, month))


def week_events(redis, event_name: str, iso_year: int, iso_week: int) -> EventBucket:
	"""Events for an ISO week, e.g. week_events(redis, "active", 2012, 48)"""
	return EventBucket(redis, event_name, Granularity.WEEK, (iso_year, iso_week))


def day_events(redis, event_name: str, year: int, month: int, day: int) -> EventBucket:
	"""Events for a day, e.g. day_events(redis, "active", 2012, 10, 23)"""
	return EventBucket(redis, event_name, Granularity.DAY, (year, month, day))


def hour_events(redis, event_name: str, year: int, month: int, day: int, hour: int) -> EventBucket:
	"""Events for an hour, e.g. hour_events(redis, "active", 2012, 10, 23, 13)"""
	return EventBucket(redis, event_name, Granularity.HOUR, (year, month, day, hour))


def bucket_for(redis, event_name: str, granularity: Granularity, moment: datetime) -> EventBucket:
	"""Get the bucket of an event that a UTC moment falls into"""
	return EventBucket(redis, event_name, granularity, redis_keys.time_parts_for(granularity, moment))
