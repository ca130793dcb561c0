"""
Excel helpers shared by the import and export endpoints.

Sheets are read with openpyxl: the first worksheet, first row as header.
Header keys are normalized (trimmed, upper-cased, single-spaced) so that
``Emp No``, ``EMP  NO`` and `` emp no`` all address the same column.
"""
from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, NamedTuple, Optional, Sequence
from zipfile import BadZipFile

from django.conf import settings
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.datetime import from_excel
from openpyxl.utils.exceptions import InvalidFileException

from records.exceptions import ImportFileError

logger = logging.getLogger(__name__)

EMPTY_MARKERS = {'', 'NA', 'N/A', '-', 'NIL', 'NONE', 'NULL'}
TRUE_MARKERS = {'YES', 'Y', 'TRUE', '1'}
LIST_SEPARATOR = '|'
DATE_FORMATS = (
    '%Y-%m-%d',
    '%d-%b-%Y', '%d %b %Y', '%d-%B-%Y', '%d %B %Y', '%d-%b-%y', '%d %b %y',
    '%d/%m/%Y', '%d-%m-%Y', '%d.%m.%Y', '%d/%m/%y', '%d-%m-%y',
)

HEADER_FONT = Font(bold=True, color='FFFFFF')
HEADER_FILL = PatternFill(start_color='366092', end_color='366092', fill_type='solid')
HEADER_ALIGNMENT = Alignment(horizontal='center', vertical='center', wrap_text=True)
MAX_COLUMN_WIDTH = 50


class Column(NamedTuple):
    """One sheet column: accepted header spellings, model field, value kind."""
    headers: tuple[str, ...]
    field: str
    kind: str = 'str'


# ---------------------------------------------------------------------
# Cell parsing
# ---------------------------------------------------------------------
def normalize_header(key: Any) -> str:
    return re.sub(r'\s+', ' ', str(key or '').strip().upper())


def cell_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return cell_text(value).upper() in TRUE_MARKERS


def parse_optional_bool(value: Any) -> Optional[bool]:
    if value is None or cell_text(value).upper() in EMPTY_MARKERS:
        return None
    return parse_bool(value)


def parse_list(value: Any, sep: str = LIST_SEPARATOR) -> list[str]:
    return [part.strip() for part in cell_text(value).split(sep) if part.strip()]


def parse_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = cell_text(value)
    if text.upper() in EMPTY_MARKERS:
        return None
    try:
        return float(text)
    except ValueError:
        logger.debug('not a number: %r', value)
        return None


def parse_int(value: Any) -> Optional[int]:
    number = parse_number(value)
    return int(number) if number is not None else None


def parse_date(value: Any) -> Optional[date]:
    """Parse a sheet date cell.

    Accepts real date cells, Excel serial numbers, ISO dates (with or
    without a time part), ``05-Dec-2025``, ``4 Dec 2025`` and
    day-first numeric dates such as ``05/12/2025``.  ``NA`` and blanks
    yield ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        try:
            return from_excel(value).date()
        except (OverflowError, ValueError):
            logger.debug('not a date serial: %r', value)
            return None
    text = cell_text(value)
    if text.upper() in EMPTY_MARKERS:
        return None
    if re.match(r'^\d{4}-\d{2}-\d{2}', text):
        text = text[:10]
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    logger.debug('unrecognised date: %r', value)
    return None


PARSERS = {
    'str': cell_text,
    'upper': lambda v: cell_text(v).upper(),
    'date': parse_date,
    'bool': parse_bool,
    'optbool': parse_optional_bool,
    'list': parse_list,
    'int': parse_int,
    'float': parse_number,
}


def row_value(row: dict[str, Any], headers: Iterable[str]) -> Any:
    """First non-blank value among the accepted header spellings."""
    for header in headers:
        value = row.get(header)
        if value is not None and cell_text(value) != '':
            return value
    return None


def map_row(row: dict[str, Any], columns: Sequence[Column]) -> dict[str, Any]:
    """Translate a normalized sheet row into model field values."""
    return {col.field: PARSERS[col.kind](row_value(row, col.headers)) for col in columns}


# ---------------------------------------------------------------------
# Workbook IO
# ---------------------------------------------------------------------
def read_rows(upload) -> list[dict[str, Any]]:
    """Rows of the first worksheet as dicts keyed by normalized header."""
    if upload is None:
        raise ImportFileError('No file uploaded')
    name = (getattr(upload, 'name', '') or '').lower()
    if not name.endswith(tuple(settings.ALLOWED_UPLOAD_EXTENSIONS)):
        raise ImportFileError('Only .xlsx workbooks are supported')
    try:
        wb = load_workbook(upload, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as exc:
        raise ImportFileError(f'Unable to read workbook: {exc}') from exc

    records: list[dict[str, Any]] = []
    try:
        rows = wb.worksheets[0].iter_rows(values_only=True)
        header = next(rows, None)
        if not header or not any(header):
            raise ImportFileError('Excel file is empty')
        keys = [normalize_header(h) for h in header]
        for values in rows:
            if not values or all(cell_text(v) == '' for v in values):
                continue
            records.append({k: v for k, v in zip(keys, values) if k})
    finally:
        wb.close()

    if not records:
        raise ImportFileError('Excel file has no data rows')
    return records


def build_workbook(title: str, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]
    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
    widths = [len(str(h)) for h in headers]
    for row in rows:
        ws.append(list(row))
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(cell_text(value)))
    for idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = min(width + 2, MAX_COLUMN_WIDTH)
    ws.freeze_panes = 'A2'
    return wb


def save_export(wb: Workbook, filename: str) -> Path:
    """Write ``wb`` into ``EXPORT_DIR`` and return its path."""
    export_dir = Path(settings.EXPORT_DIR)
    export_dir.mkdir(parents=True, exist_ok=True)
    path = export_dir / filename
    wb.save(path)
    logger.info('wrote export %s', path)
    return path
