"""Unit tests for redis_keys key scheme."""

from datetime import datetime

import pytest

from bitanalytics.exceptions import InvalidArgumentError
from bitanalytics.utils.redis_keys import (
	Granularity,
	build_key,
	build_temp_key,
	time_parts_for,
	validate_event_name,
)


def test_month_key():
	"""Test month key format."""
	assert build_key("active", Granularity.MONTH, 2012, 10) == "bitanalytics_active_2012-10"


def test_week_key_has_marker():
	"""Test week key carries the W marker."""
	assert build_key("active", Granularity.WEEK, 2012, 48) == "bitanalytics_active_W2012-48"


def test_day_key():
	"""Test day key format."""
	assert build_key("active", Granularity.DAY, 2012, 10, 23) == "bitanalytics_active_2012-10-23"


def test_hour_key():
	"""Test hour key format."""
	assert build_key("active", Granularity.HOUR, 2012, 10, 23, 13) == "bitanalytics_active_2012-10-23-13"


def test_numbers_are_not_padded():
	"""Test that time parts are rendered without zero padding."""
	assert build_key("active", Granularity.DAY, 2014, 3, 7) == "bitanalytics_active_2014-3-7"


def test_granularities_do_not_collide():
	"""Test the same numbers at different granularities give different keys."""
	keys = {
		build_key("active", Granularity.MONTH, 2012, 10),
		build_key("active", Granularity.WEEK, 2012, 10),
	}
	assert len(keys) == 2


def test_event_names_do_not_collide():
	"""Test different events give different keys."""
	assert build_key("active", Granularity.MONTH, 2012, 10) != build_key("tasks:completed", Granularity.MONTH, 2012, 10)


def test_colon_in_event_name_allowed():
	"""Test namespaced event names are accepted."""
	assert build_key("tasks:completed", Granularity.MONTH, 2012, 10) == "bitanalytics_tasks:completed_2012-10"


@pytest.mark.parametrize("event_name", ["", None, 42, "new_signups"])
def test_invalid_event_names(event_name):
	"""Test empty, non-string and delimited event names are rejected."""
	with pytest.raises(InvalidArgumentError):
		build_key(event_name, Granularity.MONTH, 2012, 10)


def test_reserved_event_name():
	"""Test the bit operation segment cannot be used as an event name."""
	with pytest.raises(InvalidArgumentError):
		validate_event_name("bitop")


def test_wrong_number_of_time_parts():
	"""Test time parts must match the granularity."""
	with pytest.raises(InvalidArgumentError):
		build_key("active", Granularity.HOUR, 2012, 10, 23)


def test_invalid_error_is_value_error():
	"""Test InvalidArgumentError can be caught as ValueError."""
	with pytest.raises(ValueError):
		build_key("", Granularity.DAY, 2012, 10, 23)


def test_temp_key_keeps_source_order():
	"""Test temp keys concatenate sources in the order given."""
	a = "bitanalytics_active_2012-9"
	b = "bitanalytics_active_2012-10"
	assert build_temp_key("AND", [a, b]) == "bitanalytics_bitop_AND_bitanalytics_active_2012-9-bitanalytics_active_2012-10"
	assert build_temp_key("AND", [a, b]) != build_temp_key("AND", [b, a])


def test_time_parts_iso_week_year_boundary():
	"""Test the last days of December can belong to the next ISO year."""
	assert time_parts_for(Granularity.WEEK, datetime(2014, 12, 29)) == (2015, 1)
	assert time_parts_for(Granularity.MONTH, datetime(2014, 12, 29)) == (2014, 12)


def test_time_parts_iso_week_53():
	"""Test early January can belong to week 53 of the previous ISO year."""
	assert time_parts_for(Granularity.WEEK, datetime(2016, 1, 1)) == (2015, 53)


def test_time_parts_hour():
	"""Test hour coordinates."""
	assert time_parts_for(Granularity.HOUR, datetime(2012, 10, 23, 13, 45)) == (2012, 10, 23, 13)
	assert time_parts_for(Granularity.DAY, datetime(2012, 10, 23, 13, 45)) == (2012, 10, 23)


if __name__ == "__main__":
	pytest.main([__file__, "-v"])
