"""Calendar date helpers for document expiry tracking."""
import re
from datetime import date, datetime, timedelta, timezone

from dateutil import parser as date_parser

# Spreadsheet serial day 0 (Excel's 1900 date system, leap-year bug included)
SPREADSHEET_EPOCH = date(1899, 12, 30)

_DAY_FIRST_PATTERN = re.compile(r"^(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})")
_YEAR_PATTERN = re.compile(r"\d{4}")

# Two fill-in dates that differ in every field dateutil might borrow
_FILL_A = datetime(2000, 1, 1)
_FILL_B = datetime(2001, 2, 2)


def parse_iso_date(value: str | date | None) -> date | None:
    """Parse a YYYY-MM-DD value into a date.

    Datetimes are truncated to their calendar day and ISO strings with a
    time component keep only the date part. Anything else yields None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if len(text) < 10:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def days_until(expiry: date, today: date | None = None) -> int:
    """Whole calendar days from today until expiry (negative once past)."""
    if today is None:
        today = date.today()
    return (expiry - today).days


def utc_now_iso() -> str:
    """Current instant as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def parse_sheet_date(value) -> str | None:
    """Coerce a spreadsheet cell into a YYYY-MM-DD string.

    Handles native date cells, serial day numbers, day-first strings
    (DD/MM/YYYY, DD-MM-YYYY, DD.MM.YYYY) and ISO or free-form strings that
    carry a four digit year. Returns None when nothing sensible comes out.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    # bool is an int subclass; a TRUE cell is not a date
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if value <= 0:
            return None
        try:
            return (SPREADSHEET_EPOCH + timedelta(days=round(value))).isoformat()
        except OverflowError:
            return None

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    # Serial numbers exported as text
    if re.fullmatch(r"\d+(\.\d+)?", text) and not _YEAR_PATTERN.fullmatch(text):
        return parse_sheet_date(float(text))

    day_first = _DAY_FIRST_PATTERN.match(text)
    if day_first:
        day, month, year = (int(part) for part in day_first.groups())
        try:
            return date(year, month, day).isoformat()
        except ValueError:
            return None

    iso = parse_iso_date(text)
    if iso:
        return iso.isoformat()

    if not _YEAR_PATTERN.search(text):
        return None
    try:
        first = date_parser.parse(text, dayfirst=True, default=_FILL_A).date()
        second = date_parser.parse(text, dayfirst=True, default=_FILL_B).date()
    except (ValueError, OverflowError):
        return None
    # A part taken from the defaults means the cell had no full date ("2027", "Mar 2027")
    if first != second:
        return None
    return first.isoformat()
