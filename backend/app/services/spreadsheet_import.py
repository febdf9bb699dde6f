"""Spreadsheet import service for employee records.

Rows come from CSV or XLSX files with loosely named columns. Each row is
normalized into an employee creation request; rows that cannot be
normalized are reported with their spreadsheet row number.
"""
import csv
import io
import logging
import re
from collections.abc import Callable
from pathlib import PurePath

from openpyxl import load_workbook

from app.config import get_settings
from app.services.employees import DuplicateEmployeeCodeError, create_employee
from app.services.expiry_dates import parse_sheet_date
from app.services.notifications import run_notification_check
from app.services.record_store import SqlRecordStore

logger = logging.getLogger(__name__)
settings = get_settings()

SUPPORTED_EXTENSIONS = (".csv", ".xlsx")

# Words that identify the header row when a sheet has title rows above it
HEADER_MARKERS = ("emp id", "employee name", "designation", "full name", "visa expiry")

# Normalized field -> header spellings seen in the wild, preferred first
COLUMN_VARIANTS = {
    "full_name": ("EMPLOYEE NAME", "Full Name", "Name", "Employee Name"),
    "employee_code": ("EMP ID", "Employee ID", "ID", "Emp No"),
    "passport_number": ("Passport Number", "Passport", "Passport No", "PP No"),
    "visa_type": ("DESIGNATION", "Visa Type", "Designation", "Position", "Role"),
    "visa_issue_date": ("DOJ(date)", "DOJ", "Date of Joining", "Visa Issue", "Issue Date"),
    "visa_expiry_date": ("VISA EXPIRY DATE", "Visa Expiry", "Visa Exp", "Expiry Date"),
    "health_card_expiry_date": ("HEALTH CARD EXP DATE", "Health Card Expiry", "Health Card", "Insurance Exp"),
    "labour_card_expiry_date": ("LABOUR CARD EXP DATE", "Labour Card Expiry", "Labour Card", "Labour Exp"),
}

DATE_FIELDS = (
    "visa_issue_date",
    "visa_expiry_date",
    "health_card_expiry_date",
    "labour_card_expiry_date",
)

# Field -> label used in error messages
REQUIRED_FIELDS = {
    "full_name": "EMPLOYEE NAME",
    "employee_code": "EMP ID",
    "visa_issue_date": "DOJ(date)",
    "visa_expiry_date": "VISA EXPIRY DATE",
    "health_card_expiry_date": "HEALTH CARD EXP DATE",
    "labour_card_expiry_date": "LABOUR CARD EXP DATE",
}

# Rows missing this many required fields are treated as blank filler
BLANK_ROW_MISSING_COUNT = 5

DEFAULT_VISA_TYPE = "Employment"


class UnsupportedFileError(ValueError):
    """Raised for uploads that are neither CSV nor XLSX."""


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _squash(text: str) -> str:
    return re.sub(r"[^a-z0-9]", "", text.lower())


def _cell_text(value) -> str:
    """Render a cell as text, dropping the '.0' spreadsheets add to whole numbers."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def find_value(row: dict, *variations: str):
    """Look up a cell by any of several header spellings.

    Tries exact and case-insensitive header matches first, then a loose
    match ignoring punctuation where the header only has to contain the
    variation. Blank cells never match.
    """
    for variation in variations:
        value = row.get(variation)
        if not _is_blank(value):
            return value
        wanted = variation.lower().strip()
        for key, value in row.items():
            if key.lower().strip() == wanted and not _is_blank(value):
                return value

    for variation in variations:
        wanted = _squash(variation)
        if not wanted:
            continue
        for key, value in row.items():
            if wanted in _squash(key) and not _is_blank(value):
                return value
    return None


def normalize_row(row: dict) -> tuple[dict | None, list[str]]:
    """Map a raw row to employee fields.

    Returns (data, missing) where ``missing`` lists the labels of required
    columns that were absent or held an unreadable date.
    """
    data = {}
    for field, variations in COLUMN_VARIANTS.items():
        raw = find_value(row, *variations)
        if field in DATE_FIELDS:
            data[field] = parse_sheet_date(raw)
        else:
            data[field] = _cell_text(raw) if raw is not None else None

    missing = [label for field, label in REQUIRED_FIELDS.items() if not data.get(field)]
    if missing:
        return None, missing

    data["visa_type"] = data.get("visa_type") or DEFAULT_VISA_TYPE
    return data, []


def find_header_row(rows: list[list], scan_rows: int) -> int | None:
    """Index of the header row, or None when the sheet has no usable header."""
    for index, row in enumerate(rows[:scan_rows]):
        joined = " ".join(_cell_text(c).lower() for c in row if c is not None)
        if any(marker in joined for marker in HEADER_MARKERS):
            return index

    if rows and sum(1 for c in rows[0] if not _is_blank(c)) >= 3:
        return 0
    return None


def rows_to_records(rows: list[list], header_index: int) -> list[tuple[int, dict]]:
    """Pair each data row under the header with its 1-based sheet row number."""
    headers = [_cell_text(h) if h is not None else "" for h in rows[header_index]]
    records = []
    for offset, row in enumerate(rows[header_index + 1:], start=header_index + 2):
        if all(_is_blank(c) for c in row):
            continue
        record = {
            header: row[i] if i < len(row) else None
            for i, header in enumerate(headers)
            if header
        }
        records.append((offset, record))
    return records


def _read_csv(content: bytes) -> list[list[list]]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = content.decode("latin-1")
    return [list(csv.reader(io.StringIO(text)))]


def _read_xlsx(content: bytes) -> list[list[list]]:
    workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        return [
            [list(row) for row in sheet.iter_rows(values_only=True)]
            for sheet in workbook.worksheets
        ]
    finally:
        workbook.close()


def read_sheets(filename: str, content: bytes) -> list[list[list]]:
    """Read every sheet of an upload as a list of rows."""
    extension = PurePath(filename or "").suffix.lower()
    if extension == ".csv":
        return _read_csv(content)
    if extension == ".xlsx":
        return _read_xlsx(content)
    raise UnsupportedFileError(
        f"Unsupported file type '{extension or filename}'. Use one of: {', '.join(SUPPORTED_EXTENSIONS)}"
    )


def extract_records(sheets: list[list[list]], scan_rows: int | None = None) -> list[tuple[int, dict]]:
    """Header-keyed records from every sheet that has a recognizable header."""
    if scan_rows is None:
        scan_rows = settings.import_header_scan_rows

    records = []
    for sheet_rows in sheets:
        if not sheet_rows:
            continue
        header_index = find_header_row(sheet_rows, scan_rows)
        if header_index is None:
            continue
        records.extend(rows_to_records(sheet_rows, header_index))
    return records


def import_employees(
    store: SqlRecordStore,
    filename: str,
    content: bytes,
    normalizer: Callable[[dict], tuple[dict | None, list[str]]] = normalize_row,
) -> dict:
    """Import employees from a CSV/XLSX upload.

    Returns dict with counts: inserted, skipped (blank rows), errors.
    Raises UnsupportedFileError for other file types.
    """
    try:
        sheets = read_sheets(filename, content)
    except UnsupportedFileError:
        raise
    except Exception as e:
        logger.error(f"Failed to parse upload {filename}: {e}")
        return {
            "inserted": 0,
            "skipped": 0,
            "errors": [{"row": 0, "error": "Failed to parse file. Ensure it is not corrupted."}],
            "total_errors": 1,
        }

    inserted = 0
    skipped = 0
    errors = []

    for row_num, record in extract_records(sheets):
        try:
            data, missing = normalizer(record)
            if data is None:
                if len(missing) >= BLANK_ROW_MISSING_COUNT:
                    skipped += 1
                    continue
                errors.append({
                    "row": row_num,
                    "error": f"Missing columns or invalid dates: {', '.join(missing)}",
                })
                continue

            create_employee(store, data, run_check=False)
            inserted += 1
        except DuplicateEmployeeCodeError as e:
            errors.append({"row": row_num, "error": f"Duplicate EMP ID: {e.employee_code}"})
        except Exception as e:
            store.db.rollback()
            errors.append({"row": row_num, "error": str(e)})

    if inserted:
        run_notification_check(store)

    logger.info(f"Imported {inserted} employees from {filename} ({len(errors)} errors, {skipped} blank rows)")

    return {
        "inserted": inserted,
        "skipped": skipped,
        "errors": errors[:settings.import_max_errors],
        "total_errors": len(errors),
    }
