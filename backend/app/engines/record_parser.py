"""Record Parser — turn an uploaded contact list into ordered contact records.

Supports delimited text (CSV via the stdlib csv module) and spreadsheets
(XLSX via openpyxl, first worksheet only). The first row is the header;
FirstName and Phone columns are required, Notes is optional. Header matching
is case-insensitive. No I/O beyond the in-memory bytes.
"""

from __future__ import annotations

import csv
import io
import logging
import zipfile
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from app.errors import EmptyInputError, ParseError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)


class RecordFormat(str, Enum):
    CSV = "csv"
    SPREADSHEET = "spreadsheet"


_CONTENT_TYPES: dict[str, RecordFormat] = {
    "text/csv": RecordFormat.CSV,
    "application/vnd.ms-excel": RecordFormat.SPREADSHEET,  # .xls
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": RecordFormat.SPREADSHEET,  # .xlsx
}

REQUIRED_COLUMNS = ("firstname", "phone")
OPTIONAL_COLUMNS = ("notes",)
EXPECTED_HEADER = "FirstName, Phone, Notes"


@dataclass(frozen=True)
class ContactRecord:
    """One normalized row of an upload."""

    first_name: str
    phone: str
    notes: str = ""


def format_for_content_type(content_type: str | None) -> RecordFormat:
    """Map an upload's MIME type to a RecordFormat.

    Raises:
        UnsupportedFileTypeError: If the type is not CSV, XLS or XLSX.
    """
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    fmt = _CONTENT_TYPES.get(mime)
    if fmt is None:
        raise UnsupportedFileTypeError("Invalid file type. Only CSV, XLS, and XLSX files are allowed.")
    return fmt


# ── Raw row readers ────────────────────────────────────────────────────────────


def read_rows(content: bytes, fmt: RecordFormat) -> tuple[list[str], list[dict[str, Any]]]:
    """Decode raw bytes into (header, rows) where each row maps header label to cell.

    Raises:
        ParseError: If the bytes cannot be decoded as the declared format.
    """
    if fmt is RecordFormat.CSV:
        return _read_csv(content)
    return _read_spreadsheet(content)


def _read_csv(content: bytes) -> tuple[list[str], list[dict[str, Any]]]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"Error parsing file: not valid UTF-8 text ({e.reason})") from e

    try:
        reader = csv.reader(io.StringIO(text, newline=""))
        header: list[str] | None = None
        rows: list[dict[str, Any]] = []
        for values in reader:
            if not any(v.strip() for v in values):
                continue
            if header is None:
                header = [v.strip() for v in values]
                continue
            rows.append({label: values[i] if i < len(values) else "" for i, label in enumerate(header) if label})
    except csv.Error as e:
        raise ParseError(f"Error parsing file: {e}") from e

    return header or [], rows


def _header_text(value: Any) -> str:
    """Unwrap a header cell (plain or rich text) to a stripped string."""
    if value is None:
        return ""
    # openpyxl CellRichText is a list of str / TextBlock; str() joins the runs
    return str(value).strip()


def _read_spreadsheet(content: bytes) -> tuple[list[str], list[dict[str, Any]]]:
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as e:
        raise ParseError(f"Error parsing file: not a readable spreadsheet ({e})") from e

    try:
        if not workbook.worksheets:
            raise ParseError("Error parsing file: no worksheet found in the Excel file.")
        sheet = workbook.worksheets[0]

        header: list[str] | None = None
        rows: list[dict[str, Any]] = []
        for values in sheet.iter_rows(values_only=True):
            if header is None:
                header = [_header_text(v) for v in values]
                continue
            if all(v is None or (isinstance(v, str) and not v.strip()) for v in values):
                continue
            rows.append({label: values[i] for i, label in enumerate(header) if label and i < len(values)})
    finally:
        workbook.close()

    return header or [], rows


# ── Normalization ──────────────────────────────────────────────────────────────


def _cell_text(value: Any) -> str:
    """Render a cell as text without numeric reinterpretation."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value).strip()


def _column_index(header: list[str]) -> dict[str, str]:
    """Map lower-cased column names to the header labels as written."""
    index: dict[str, str] = {}
    for label in header:
        key = label.strip().lower()
        if key and key not in index:
            index[key] = label
    return index


def normalize_rows(header: list[str], rows: list[dict[str, Any]]) -> list[ContactRecord]:
    """Validate the header and convert raw rows into ContactRecords.

    Raises:
        ParseError: If FirstName or Phone is absent from the header row, or a
            data row leaves either of them blank.
        EmptyInputError: If there are no data rows.
    """
    columns = _column_index(header)
    missing = [name for name in REQUIRED_COLUMNS if name not in columns]
    if missing:
        raise ParseError(
            f"Missing required columns: {', '.join(missing)}. Expected: {EXPECTED_HEADER}"
        )

    if not rows:
        raise EmptyInputError("Uploaded file is empty or could not be parsed.")

    first_name_col = columns["firstname"]
    phone_col = columns["phone"]
    notes_col = columns.get("notes")

    records: list[ContactRecord] = []
    # Row numbers count the header as row 1
    for row_number, row in enumerate(rows, start=2):
        record = ContactRecord(
            first_name=_cell_text(row.get(first_name_col)),
            phone=_cell_text(row.get(phone_col)),
            notes=_cell_text(row.get(notes_col)) if notes_col else "",
        )
        if not record.first_name or not record.phone:
            raise ParseError(f"Row {row_number}: FirstName and Phone are required.")
        records.append(record)
    return records


def parse_upload(content: bytes, fmt: RecordFormat) -> list[ContactRecord]:
    """Parse an uploaded file into ordered ContactRecords."""
    if not content:
        raise EmptyInputError("Uploaded file is empty or could not be parsed.")
    header, rows = read_rows(content, fmt)
    records = normalize_rows(header, rows)
    logger.debug("Parsed %d records from %s upload", len(records), fmt.value)
    return records
