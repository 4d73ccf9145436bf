from datetime import date, timedelta

DEADLINE_MONTH = 12
DEADLINE_DAY = 10
MONDAY = 0


def parse_date(value):
    """
    Parse a 'YYYY-MM-DD' string into a calendar date.
    Missing month or day components fall back to 1.
    """
    parts = [part for part in value.strip().split('-') if part]
    if not parts:
        raise ValueError(f"Invalid date: {value!r}")
    year = int(parts[0])
    month = int(parts[1]) if len(parts) > 1 else 1
    day = int(parts[2]) if len(parts) > 2 else 1
    return date(year, month or 1, day or 1)


def format_date_iso(day=None):
    """Zero-padded 'YYYY-MM-DD' using local calendar fields."""
    if day is None:
        day = date.today()
    return f'{day.year:04d}-{day.month:02d}-{day.day:02d}'


def next_monday(from_date=None):
    if from_date is None:
        from_date = date.today()
    diff = (MONDAY - from_date.weekday()) % 7
    return from_date + timedelta(days=diff)


def deadline(today=None, month=DEADLINE_MONTH, day=DEADLINE_DAY):
    """Cutoff date in the year of evaluation."""
    if today is None:
        today = date.today()
    return date(today.year, month, day)


def is_past_deadline(day, today=None, month=DEADLINE_MONTH, deadline_day=DEADLINE_DAY):
    # The cutoff itself is still accepted
    return day > deadline(today, month, deadline_day)


def days_left(today=None, month=DEADLINE_MONTH, day=DEADLINE_DAY):
    if today is None:
        today = date.today()
    return max(0, (deadline(today, month, day) - today).days)
