import re
from datetime import date, datetime, timedelta

DAY_FORMAT = "%Y-%m-%d"

# "Mon Jan 01 2024", the format older snapshots were written with.
# Names are always English, whatever the process locale is.
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
LEGACY_DAY_RE = re.compile(
    r"^(?:%s) (%s) (\d{2}) (\d{4})$" % ("|".join(WEEKDAYS), "|".join(MONTHS))
)


def today():
    return date.today()


def _parse_legacy(text):
    m = LEGACY_DAY_RE.match(text)
    if not m:
        return None
    month, day, year = m.groups()
    try:
        return date(int(year), MONTHS.index(month) + 1, int(day))
    except ValueError:
        return None


def parse_day(value) -> date:
    """
    Turns any accepted day input into a date.
    Accepts date, datetime, ISO strings ("2024-01-01") and legacy strings ("Mon Jan 01 2024").
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"not a day: {value!r}")

    text = value.strip()
    try:
        return datetime.strptime(text, DAY_FORMAT).date()
    except ValueError:
        pass
    legacy = _parse_legacy(text)
    if legacy is None:
        raise ValueError(f"not a day: {value!r}")
    return legacy


def day_key(value) -> str:
    return parse_day(value).strftime(DAY_FORMAT)


def resolve_as_of(as_of=None) -> date:
    return today() if as_of is None else parse_day(as_of)


def previous_day(d: date) -> date:
    return d - timedelta(days=1)
