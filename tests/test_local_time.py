import time
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from tools.local_time import InvalidScheduleInput, encode_local_datetime, format_offset

SAIGON = ZoneInfo("Asia/Ho_Chi_Minh")
NEW_YORK = ZoneInfo("America/New_York")


def test_date_only_means_local_midnight():
    assert encode_local_datetime("2025-03-10", None, tz=SAIGON) == "2025-03-10T00:00:00+07:00"
    assert encode_local_datetime("2025-03-10", "", tz=SAIGON) == "2025-03-10T00:00:00+07:00"


def test_date_and_time():
    assert encode_local_datetime("2025-06-15", "08:30", tz=SAIGON) == "2025-06-15T08:30:00+07:00"


def test_result_is_the_chosen_instant():
    encoded = encode_local_datetime("2025-06-15", "08:30", tz=SAIGON)
    assert datetime.fromisoformat(encoded) == datetime(2025, 6, 15, 1, 30, tzinfo=timezone.utc)


def test_offset_follows_dst_on_selected_date():
    winter = encode_local_datetime("2025-01-15", "09:00", tz=NEW_YORK)
    summer = encode_local_datetime("2025-07-15", "09:00", tz=NEW_YORK)
    assert winter == "2025-01-15T09:00:00-05:00"
    assert summer == "2025-07-15T09:00:00-04:00"


def test_skipped_wall_time_moves_forward():
    # 02:30 does not exist on 2025-03-09 in New York
    assert encode_local_datetime("2025-03-09", "02:30", tz=NEW_YORK) == "2025-03-09T03:30:00-04:00"


def test_repeated_wall_time_takes_first_occurrence():
    assert encode_local_datetime("2025-11-02", "01:30", tz=NEW_YORK) == "2025-11-02T01:30:00-04:00"


def test_non_hour_offsets():
    assert encode_local_datetime("2025-01-10", "12:00", tz=ZoneInfo("Asia/Kolkata")) == "2025-01-10T12:00:00+05:30"
    assert encode_local_datetime("2025-01-10", "12:00", tz=ZoneInfo("America/St_Johns")) == "2025-01-10T12:00:00-03:30"


@pytest.mark.parametrize("minutes, expected", [(0, "+00:00"), (420, "+07:00"), (-210, "-03:30"), (345, "+05:45")])
def test_format_offset(minutes, expected):
    assert format_offset(minutes) == expected


@pytest.mark.parametrize(
    "date_str, time_str",
    [("2025/03/10", None), ("2025-02-30", None), ("", None), ("2025-03-10", "8:30"), ("2025-03-10", "24:00")],
)
def test_malformed_input(date_str, time_str):
    with pytest.raises(InvalidScheduleInput):
        encode_local_datetime(date_str, time_str, tz=SAIGON)


@pytest.mark.parametrize(
    "date_str, time_str, tz",
    [("0001-01-01", None, SAIGON), ("9999-12-31", "23:59", NEW_YORK)],
)
def test_dates_whose_instant_leaves_the_calendar_range(date_str, time_str, tz):
    with pytest.raises(InvalidScheduleInput):
        encode_local_datetime(date_str, time_str, tz=tz)


@pytest.fixture()
def process_tz(monkeypatch):
    """Switch the process-local zone using POSIX TZ rules (no tz database needed)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset not available on this platform")

    def _set(tz: str):
        monkeypatch.setenv("TZ", tz)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()


def test_process_local_zone_is_used_by_default(process_tz):
    process_tz("ICT-7")
    assert encode_local_datetime("2025-03-10") == "2025-03-10T00:00:00+07:00"
    assert encode_local_datetime("2025-06-15", "08:30") == "2025-06-15T08:30:00+07:00"


def test_process_local_zone_dst(process_tz):
    process_tz("EST5EDT,M3.2.0,M11.1.0")
    before = encode_local_datetime("2025-03-01", "10:00")
    after = encode_local_datetime("2025-03-20", "10:00")
    assert before == "2025-03-01T10:00:00-05:00"
    assert after == "2025-03-20T10:00:00-04:00"
