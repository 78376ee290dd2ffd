import datetime
import re

_SLUG_DISALLOWED = re.compile(r"[^a-z0-9-]")


def slugify(title: str) -> str:
    """
    Lowercase the trimmed title, join its whitespace-separated words with
    hyphens and drop anything outside [a-z0-9-].
    """
    slug = "-".join(title.strip().lower().split())
    return _SLUG_DISALLOWED.sub("", slug)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def to_timestamp(value: datetime.datetime) -> str:
    return value.astimezone(datetime.timezone.utc).isoformat(timespec="milliseconds")


def one_month_ago(now: datetime.datetime) -> datetime.datetime:
    """
    Midnight of the same day-of-month in the previous month. A day that does
    not exist in that month rolls forward into the next one (31 March gives
    3 March in a non-leap year).
    """
    year, month = (now.year - 1, 12) if now.month == 1 else (now.year, now.month - 1)
    first = datetime.datetime(year, month, 1, tzinfo=now.tzinfo)
    return first + datetime.timedelta(days=now.day - 1)
