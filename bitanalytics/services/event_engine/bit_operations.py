# Copyright (c) 2026, BitAnalytics and contributors
# For license information, please see license.txt

"""
Bit Operations - AND/OR/XOR over buckets with Redis BITOP.

The result of an operation is computed immediately and stored under a
temporary key derived from the operator and the source keys. The returned
DerivedBucket can itself be a source, so operations nest:

	active_both_months = bit_op_and(
		redis,
		bit_op_and(redis, last_month, this_month),
		this_month,
	)

Temporary keys stay in Redis until DerivedBucket.delete() or
event_recorder.delete_temporary_bitop_keys() removes them.
"""

import logging
from enum import Enum
from typing import Sequence, Union

from bitanalytics.exceptions import InvalidArgumentError
from bitanalytics.services.event_engine.buckets import BitmapBucket, DerivedBucket
from bitanalytics.utils import redis_keys

logger = logging.getLogger(__name__)


class BitOperator(Enum):
	"""Bitwise operators supported by Redis BITOP (NOT is left out)"""

	AND = "AND"
	OR = "OR"
	XOR = "XOR"


def resolve_operator(operator: Union[BitOperator, str]) -> BitOperator:
	"""Normalize an operator given as a BitOperator or a case-insensitive name.

	Raises:
		InvalidArgumentError: If the operator is empty or unsupported
	"""
	if isinstance(operator, BitOperator):
		return operator
	if isinstance(operator, str) and operator.strip():
		try:
			return BitOperator(operator.strip().upper())
		except ValueError:
			pass
	raise InvalidArgumentError(
		f"Unsupported bit operator {operator!r}, expected one of "
		f"{', '.join(op.value for op in BitOperator)}"
	)


def combine(redis, operator: Union[BitOperator, str], sources: Sequence[BitmapBucket]) -> DerivedBucket:
	"""Combine buckets with a bit operation and store the result.

	Args:
		redis: Redis client the result is written with
		operator: AND, OR or XOR
		sources: Ordered, non-empty list of buckets; derived buckets are accepted

	Returns:
		DerivedBucket bound to the temporary key holding the result

	Raises:
		InvalidArgumentError: If the operator is invalid, the source list is
			empty or a source is not a bucket
	"""
	bit_operator = resolve_operator(operator)

	sources = list(sources or [])
	if not sources:
		raise InvalidArgumentError("A bit operation needs at least one source bucket")
	for source in sources:
		if not isinstance(source, BitmapBucket):
			raise InvalidArgumentError(f"Bit operation source must be a bucket, got {source!r}")

	source_keys = [source.key for source in sources]
	dest_key = redis_keys.build_temp_key(bit_operator.value, source_keys)

	redis.bitop(bit_operator.value, dest_key, *source_keys)
	logger.debug(f"BITOP {bit_operator.value} into key={dest_key} from {len(source_keys)} sources")

	return DerivedBucket(redis, dest_key, bit_operator, sources)


def bit_op_and(redis, bucket: BitmapBucket, *buckets: BitmapBucket) -> DerivedBucket:
	"""Identifiers present in every bucket"""
	return combine(redis, BitOperator.AND, [bucket, *buckets])


def bit_op_or(redis, bucket: BitmapBucket, *buckets: BitmapBucket) -> DerivedBucket:
	"""Identifiers present in at least one bucket"""
	return combine(redis, BitOperator.OR, [bucket, *buckets])


def bit_op_xor(redis, bucket: BitmapBucket, *buckets: BitmapBucket) -> DerivedBucket:
	"""Identifiers present in an odd number of buckets"""
	return combine(redis, BitOperator.XOR, [bucket, *buckets])
