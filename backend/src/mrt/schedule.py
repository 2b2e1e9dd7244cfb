"""
Departure schedule parsing and filtering.
Schedules arrive as comma-separated "HH:MM:SS" strings, one per direction.
"""
import re
from datetime import datetime, time

from src.mrt.errors import InvalidTimeFormat
from src.mrt.records import ScheduleRecord

TIME_FORMAT = "%H:%M:%S"
LEBAK_BULUS_TRIP_NAME = "Stasiun Lebak Bulus Grab"
BUNDARAN_HI_TRIP_NAME = "Stasiun Bundaran HI Grab"

# Hour may be one or two digits; minutes and seconds are always two.
_TIME_PATTERN = re.compile(r"([0-9]{1,2}):([0-9]{2}):([0-9]{2})")


def parse_time_of_day(value: str) -> time:
    match = _TIME_PATTERN.fullmatch(value)
    if not match:
        raise InvalidTimeFormat(value)
    hour, minute, second = (int(g) for g in match.groups())
    try:
        return time(hour, minute, second)
    except ValueError as e:
        raise InvalidTimeFormat(value) from e


def parse_departure_times(schedule: str) -> list[time]:
    """Split a comma-separated schedule, skip blank entries, parse the rest. Order is kept."""
    times: list[time] = []
    for item in schedule.split(","):
        trimmed = item.strip()
        if not trimmed:
            continue
        times.append(parse_time_of_day(trimmed))
    return times


def format_time_of_day(value: time | datetime) -> str:
    return value.strftime(TIME_FORMAT)


def upcoming_departures(schedule: ScheduleRecord, now: datetime) -> list[tuple[str, str]]:
    """
    Return (trip_name, "HH:MM:SS") pairs later than now's time of day.
    Lebak Bulus departures first, then Bundaran HI. Both lists are parsed before
    any filtering, so a bad entry fails the whole schedule.
    """
    lebak_bulus = parse_departure_times(schedule.schedule_lebak_bulus)
    bundaran_hi = parse_departure_times(schedule.schedule_bundaran_hi)

    # Compare zero-padded strings, not time objects, so precision is exactly one second.
    now_str = format_time_of_day(now)
    result: list[tuple[str, str]] = []
    for trip_name, departures in ((LEBAK_BULUS_TRIP_NAME, lebak_bulus), (BUNDARAN_HI_TRIP_NAME, bundaran_hi)):
        for t in departures:
            formatted = format_time_of_day(t)
            if formatted > now_str:
                result.append((trip_name, formatted))
    return result
