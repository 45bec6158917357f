# Copyright (c) 2026, BitAnalytics and contributors
# For license information, please see license.txt

"""
BitAnalytics

Entry point bundling a Redis client with the event engine. Buckets and
bit operation results created through it share its client.

	analytics = BitAnalytics()
	analytics.mark_event("active", 123)
	analytics.month_events("active", 2012, 10).is_present(123)
"""

from datetime import datetime
from typing import List, Optional, Union

from bitanalytics.services import redis_connection
from bitanalytics.services.event_engine import bit_operations, buckets, event_recorder
from bitanalytics.services.event_engine.bit_operations import BitOperator
from bitanalytics.services.event_engine.buckets import BitmapBucket, DerivedBucket, EventBucket
from bitanalytics.utils.redis_keys import Granularity


class BitAnalytics:
	"""
	Tracks identifiers per event in hourly, daily, weekly and monthly bitmaps

	This class provides methods for:
	- Marking events (SETBIT, pipelined)
	- Getting event buckets by time coordinates
	- Combining buckets with AND/OR/XOR (BITOP)
	- Deleting events and temporary bit operation keys
	"""

	def __init__(self, redis_client=None, redis_url: Optional[str] = None, track_hourly: bool = False):
		"""
		Args:
			redis_client: Redis client to use; built from redis_url when omitted
			redis_url: Redis URL, see redis_connection.resolve_redis_url()
			track_hourly: Default for mark_event's track_hourly
		"""
		if redis_client is None:
			redis_client = redis_connection.get_redis_connection(redis_url)
		self.redis = redis_client
		self.track_hourly = track_hourly

	def is_available(self) -> bool:
		"""Check if Redis is responsive"""
		return redis_connection.is_available(self.redis)

	# Events marking and deleting

	def mark_event(
		self,
		event_name: str,
		identifier: int,
		now: Optional[datetime] = None,
		track_hourly: Optional[bool] = None
	) -> List[EventBucket]:
		"""
		Mark an event for months, weeks, days and optionally hours

		Args:
			event_name: Name of the event, e.g. "active" or "tasks:completed"
			identifier: Non-negative integer id, typically a user id
			now: Reference point, defaults to the current UTC time
			track_hourly: Also mark the hour bucket, defaults to self.track_hourly

		Returns:
			List[EventBucket]: The buckets the identifier was marked in
		"""
		if track_hourly is None:
			track_hourly = self.track_hourly
		return event_recorder.mark_event(
			self.redis, event_name, identifier, now=now, track_hourly=track_hourly
		)

	def delete_all_events(self) -> int:
		"""Delete all events from the database"""
		return event_recorder.delete_all_events(self.redis)

	def delete_temporary_bitop_keys(self) -> int:
		"""Delete all temporary keys that are used when using bit operations"""
		return event_recorder.delete_temporary_bitop_keys(self.redis)

	# Events

	def month_events(self, event_name: str, year: int, month: int) -> EventBucket:
		return buckets.month_events(self.redis, event_name, year, month)

	def week_events(self, event_name: str, iso_year: int, iso_week: int) -> EventBucket:
		return buckets.week_events(self.redis, event_name, iso_year, iso_week)

	def day_events(self, event_name: str, year: int, month: int, day: int) -> EventBucket:
		return buckets.day_events(self.redis, event_name, year, month, day)

	def hour_events(self, event_name: str, year: int, month: int, day: int, hour: int) -> EventBucket:
		return buckets.hour_events(self.redis, event_name, year, month, day, hour)

	def events_at(self, event_name: str, granularity: Granularity, now: Optional[datetime] = None) -> EventBucket:
		"""Get the bucket of an event at a granularity that a moment falls into"""
		return buckets.bucket_for(self.redis, event_name, granularity, event_recorder.to_utc(now))

	# Bit operations

	def combine(self, operator: Union[BitOperator, str], sources: List[BitmapBucket]) -> DerivedBucket:
		return bit_operations.combine(self.redis, operator, sources)

	def bit_op_and(self, bucket: BitmapBucket, *others: BitmapBucket) -> DerivedBucket:
		return bit_operations.bit_op_and(self.redis, bucket, *others)

	def bit_op_or(self, bucket: BitmapBucket, *others: BitmapBucket) -> DerivedBucket:
		return bit_operations.bit_op_or(self.redis, bucket, *others)

	def bit_op_xor(self, bucket: BitmapBucket, *others: BitmapBucket) -> DerivedBucket:
		return bit_operations.bit_op_xor(self.redis, bucket, *others)
