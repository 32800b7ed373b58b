import time
from email.utils import parsedate_to_datetime

import pytest

from globalchain.timeutil import format_timestamp_to_gmt_string, timestamp_now


def test_epoch_is_formatted_as_rfc2822():
    assert format_timestamp_to_gmt_string(0) == "Thu, 1 Jan 1970 00:00:00 +0000"


def test_two_digit_day():
    assert format_timestamp_to_gmt_string(1700000000) == "Tue, 14 Nov 2023 22:13:20 +0000"


@pytest.mark.parametrize("timestamp", [0, 1, 86399, 951782400, 1700000000, 4102444800])
def test_format_round_trips_through_email_parser(timestamp):
    text = format_timestamp_to_gmt_string(timestamp)
    assert text.endswith("+0000")
    assert parsedate_to_datetime(text).timestamp() == timestamp


def test_out_of_range_timestamp_raises():
    with pytest.raises(ValueError):
        format_timestamp_to_gmt_string(10**15)


def test_timestamp_now_matches_clock():
    before = int(time.time())
    now = timestamp_now()
    after = int(time.time())
    assert before <= now <= after