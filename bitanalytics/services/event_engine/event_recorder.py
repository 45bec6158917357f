# Copyright (c) 2026, BitAnalytics and contributors
# For license information, please see license.txt

"""
Event Recorder - Mark identifiers in every bucket an event falls into.

A single mark_event call sets the identifier's bit in the month, ISO week and
day buckets (and the hour bucket when hourly tracking is on). The SETBITs are
sent in one non-transactional pipeline: one round trip, but a concurrent
reader may see the month bucket updated before the day bucket, and an
interrupted pipeline may leave some buckets marked and others not.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from bitanalytics.exceptions import InvalidArgumentError
from bitanalytics.services.event_engine.buckets import EventBucket, bucket_for, validate_identifier
from bitanalytics.utils import redis_keys
from bitanalytics.utils.redis_keys import Granularity

logger = logging.getLogger(__name__)

DELETE_BATCH_SIZE = 500


def to_utc(now: Optional[datetime] = None) -> datetime:
	"""Resolve a reference point to an aware UTC datetime.

	Args:
		now: Reference point. None means the current time, naive datetimes
			are taken as UTC and dates as midnight UTC.

	Returns:
		Timezone-aware datetime in UTC
	"""
	if now is None:
		return datetime.now(timezone.utc)
	if isinstance(now, datetime):
		if now.tzinfo is None:
			return now.replace(tzinfo=timezone.utc)
		return now.astimezone(timezone.utc)
	if isinstance(now, date):
		return datetime(now.year, now.month, now.day, tzinfo=timezone.utc)
	raise InvalidArgumentError(f"Expected a datetime or date, got {now!r}")


def buckets_for_event(redis, event_name: str, now: datetime, track_hourly: bool = False) -> List[EventBucket]:
	"""Get the buckets an event at a UTC moment is recorded in, month first"""
	granularities = [Granularity.MONTH, Granularity.WEEK, Granularity.DAY]
	if track_hourly:
		granularities.append(Granularity.HOUR)
	return [bucket_for(redis, event_name, granularity, now) for granularity in granularities]


def mark_event(
	redis,
	event_name: str,
	identifier: int,
	now: Optional[datetime] = None,
	track_hourly: bool = False
) -> List[EventBucket]:
	"""Mark an event for months, weeks, days and optionally hours.

	Args:
		redis: Redis client
		event_name: Name of the event, e.g. "active" or "tasks:completed"
		identifier: Non-negative integer id, typically a user id. Keep ids
			small: Redis sizes a bitmap by its highest offset.
		now: Reference point, defaults to the current UTC time
		track_hourly: Also mark the hour bucket

	Returns:
		The buckets the identifier was marked in

	Examples:
		Mark id 1 as active:
			mark_event(redis, "active", 1)
		Mark task completed for id 252:
			mark_event(redis, "tasks:completed", 252)
	"""
	validate_identifier(identifier)
	moment = to_utc(now)
	buckets = buckets_for_event(redis, event_name, moment, track_hourly=track_hourly)

	pipe = redis.pipeline(transaction=False)
	for bucket in buckets:
		pipe.setbit(bucket.key, identifier, 1)
	pipe.execute()

	logger.debug(
		f"Marked event={event_name} identifier={identifier} at {moment.isoformat()} "
		f"in {len(buckets)} buckets"
	)
	return buckets


def _delete_matching(redis, pattern: str) -> int:
	"""Delete every key matching a pattern, listing all keys with SCAN first"""
	keys = list(redis.scan_iter(match=pattern, count=DELETE_BATCH_SIZE))
	deleted = 0
	for start in range(0, len(keys), DELETE_BATCH_SIZE):
		deleted += redis.delete(*keys[start:start + DELETE_BATCH_SIZE])
	return deleted


def delete_all_events(redis) -> int:
	"""Delete all event buckets and bit operation results.

	Returns:
		Number of keys deleted
	"""
	deleted = _delete_matching(redis, redis_keys.ALL_KEYS_PATTERN)
	logger.info(f"Deleted {deleted} event keys")
	return deleted


def delete_temporary_bitop_keys(redis) -> int:
	"""Delete the temporary keys bit operations store their results under.

	Returns:
		Number of keys deleted
	"""
	deleted = _delete_matching(redis, redis_keys.BITOP_KEYS_PATTERN)
	logger.info(f"Deleted {deleted} temporary bit operation keys")
	return deleted
