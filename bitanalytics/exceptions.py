# Copyright (c) 2026, BitAnalytics and contributors
# For license information, please see license.txt

"""
Exceptions raised by BitAnalytics.

Backend failures are not wrapped: redis.exceptions.ConnectionError and the
other redis.exceptions.RedisError subclasses reach the caller unchanged.
"""


class BitAnalyticsError(Exception):
	"""Base class for errors raised by BitAnalytics itself"""
	pass


class InvalidArgumentError(BitAnalyticsError, ValueError):
	"""Raised for a malformed event name, identifier, operator or source list"""
	pass
