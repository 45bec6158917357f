"""
Unit tests for the Redis connection helpers.
"""

import unittest
from unittest.mock import patch, MagicMock

import redis

from bitanalytics.services.redis_connection import (
	DEFAULT_REDIS_URL,
	get_redis_connection,
	is_available,
	resolve_redis_url,
)


class TestResolveRedisUrl(unittest.TestCase):
	"""Test URL resolution priority."""

	@patch.dict('os.environ', {"BITANALYTICS_REDIS_URL": "redis://env-specific:6379/1", "REDIS_URL": "redis://env-generic:6379/2"})
	def test_explicit_url_wins(self):
		"""Test an explicit URL overrides the environment."""
		self.assertEqual(resolve_redis_url("redis://explicit:6379/3"), "redis://explicit:6379/3")

	@patch.dict('os.environ', {"BITANALYTICS_REDIS_URL": "redis://env-specific:6379/1", "REDIS_URL": "redis://env-generic:6379/2"})
	def test_specific_env_var_before_generic(self):
		"""Test BITANALYTICS_REDIS_URL is preferred over REDIS_URL."""
		self.assertEqual(resolve_redis_url(), "redis://env-specific:6379/1")

	@patch.dict('os.environ', {"REDIS_URL": "redis://env-generic:6379/2"}, clear=True)
	def test_generic_env_var(self):
		"""Test REDIS_URL is used when the specific variable is missing."""
		self.assertEqual(resolve_redis_url(), "redis://env-generic:6379/2")

	@patch.dict('os.environ', {}, clear=True)
	def test_default_url(self):
		"""Test the fallback URL."""
		self.assertEqual(resolve_redis_url(), DEFAULT_REDIS_URL)


class TestGetRedisConnection(unittest.TestCase):
	"""Test client creation."""

	@patch('bitanalytics.services.redis_connection.redis.from_url')
	def test_builds_client_from_resolved_url(self, mock_from_url):
		"""Test the client is built with redis.from_url."""
		client = get_redis_connection("redis://explicit:6379/3")

		mock_from_url.assert_called_once_with("redis://explicit:6379/3")
		self.assertIs(client, mock_from_url.return_value)

	def test_invalid_url_raises(self):
		"""Test an unparseable URL is not swallowed."""
		with self.assertRaises(ValueError):
			get_redis_connection("not-a-redis-url")


class TestIsAvailable(unittest.TestCase):
	"""Test the availability check."""

	def test_available(self):
		"""Test a responsive server."""
		client = MagicMock()
		client.ping.return_value = True
		self.assertTrue(is_available(client))

	def test_unavailable(self):
		"""Test a connection error reports unavailability."""
		client = MagicMock()
		client.ping.side_effect = redis.exceptions.ConnectionError("refused")
		self.assertFalse(is_available(client))


if __name__ == "__main__":
	unittest.main()
