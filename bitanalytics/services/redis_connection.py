# Copyright (c) 2026, BitAnalytics and contributors
# For license information, please see license.txt

"""
Redis Connection

Builds the Redis client BitAnalytics talks to. The URL is resolved in this
order:
1. An explicit redis_url argument
2. BITANALYTICS_REDIS_URL environment variable
3. REDIS_URL environment variable
4. redis://localhost:6379/0
"""

import logging
import os
from typing import Optional

import redis

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379/0"
REDIS_URL_ENV_VARS = ("BITANALYTICS_REDIS_URL", "REDIS_URL")


def resolve_redis_url(redis_url: Optional[str] = None) -> str:
	"""Pick the Redis URL from the argument, the environment or the default"""
	if redis_url:
		return redis_url
	for env_var in REDIS_URL_ENV_VARS:
		value = os.environ.get(env_var)
		if value:
			return value
	return DEFAULT_REDIS_URL


def get_redis_connection(redis_url: Optional[str] = None) -> redis.Redis:
	"""
	Create a Redis client

	No command is sent, so an unreachable server only surfaces as
	redis.exceptions.ConnectionError on first use.

	Args:
		redis_url: Redis URL, resolved with resolve_redis_url()

	Returns:
		redis.Redis: Client backed by its own connection pool

	Raises:
		ValueError: If the URL cannot be parsed
	"""
	url = resolve_redis_url(redis_url)
	try:
		return redis.from_url(url)
	except ValueError as e:
		logger.error(f"Failed to create Redis client for url={url}: {str(e)}")
		raise


def is_available(client: redis.Redis) -> bool:
	"""
	Check if Redis is available

	Returns:
		bool: True if Redis is responsive, False otherwise
	"""
	try:
		return bool(client.ping())
	except redis.exceptions.RedisError as e:
		logger.warning(f"Redis is not available: {str(e)}")
		return False
