import math
from datetime import date, datetime, time, timedelta, timezone
from parking_booking.config import Config
from parking_booking.errors import InvalidInputError


def to_storage_time(value: datetime) -> datetime:
    # NAIVE INPUT IS LOCAL TO THE LOT, STORAGE IS NAIVE UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=Config.get_timezone())
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def format_local_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(Config.get_timezone()).strftime("%I:%M %p")


def parse_start_time(start_time) -> time:
    if isinstance(start_time, time):
        return start_time
    try:
        return time.fromisoformat(start_time)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Invalid start time '{start_time}'. Use HH:MM.")


def build_time_window(day: date, start_time, duration_hours: int):
    if isinstance(duration_hours, bool) or not isinstance(duration_hours, int):
        raise InvalidInputError("Duration must be a whole number of hours.")
    if not Config.MIN_DURATION_HOURS <= duration_hours <= Config.MAX_DURATION_HOURS:
        raise InvalidInputError(
            f"Duration must be between {Config.MIN_DURATION_HOURS} and {Config.MAX_DURATION_HOURS} hours."
        )

    start = to_storage_time(datetime.combine(day, parse_start_time(start_time)))
    end = start + timedelta(hours=duration_hours)
    return start, end


def calculate_total_price(start_time: datetime, end_time: datetime, price_per_hour: float) -> float:
    duration = to_storage_time(end_time) - to_storage_time(start_time)
    hours_booked = math.ceil(duration.total_seconds() / Config.SECONDS_PER_HOUR)
    return round(hours_booked * price_per_hour, 2)
