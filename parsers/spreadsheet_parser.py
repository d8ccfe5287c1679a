"""
Spreadsheet parser for import uploads.

Reads every sheet of an .xlsx/.xls/.csv upload into raw rows (column label
-> cell value), profiles the first sheet, guesses what kind of data it holds
and suggests column mappings for each import type.

Rows are returned exactly as they should be posted back to the import
endpoint: headerless columns are labelled __EMPTY, __EMPTY_1, ..., empty
cells are None and dates are ISO strings.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from io import BytesIO
from pathlib import Path
import re
from typing import Any, Optional, Union
import structlog

import pandas as pd

from exceptions import ExcelParseError, InvalidFileTypeError
from importers.coercion import parse_amount
from importers.field_catalog import DETECTION_PATTERNS, IMPORT_FIELDS
from utils.text_utils import normalize_label

logger = structlog.get_logger(__name__)

VALID_EXTENSIONS = (".xlsx", ".xls", ".csv")
VALID_CONTENT_TYPES = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
    "text/csv",
)

_UNNAMED = re.compile(r"^Unnamed: \d+$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")

SAMPLE_SIZE = 5


@dataclass
class SheetData:
    """One parsed sheet."""
    name: str
    data: list[dict[str, Any]] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.data)

    @property
    def col_count(self) -> int:
        return len(self.headers)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "data": self.data,
            "headers": self.headers,
            "rowCount": self.row_count,
            "colCount": self.col_count,
        }


@dataclass
class SpreadsheetFile:
    """Every sheet of one upload."""
    file_name: str
    sheets: list[SheetData] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return sum(sheet.row_count for sheet in self.sheets)

    def to_dict(self) -> dict:
        return {
            "fileName": self.file_name,
            "sheets": [sheet.to_dict() for sheet in self.sheets],
            "totalRows": self.total_rows,
        }


# ===================
# READING
# ===================

def is_valid_spreadsheet(filename: Optional[str], content_type: Optional[str] = None) -> bool:
    """Accept by content type or by extension."""
    if content_type in VALID_CONTENT_TYPES:
        return True
    return bool(filename) and filename.lower().endswith(VALID_EXTENSIONS)


def parse_spreadsheet(
    file: Union[str, Path, BytesIO],
    filename: str,
    content_type: Optional[str] = None,
) -> SpreadsheetFile:
    """
    Parse an uploaded spreadsheet.

    Args:
        file: File path or file-like object
        filename: Original file name (decides the reader)
        content_type: Upload content type, if known

    Returns:
        SpreadsheetFile with one SheetData per sheet

    Raises:
        InvalidFileTypeError: Not an Excel/CSV file
        ExcelParseError: File cannot be read
    """
    if not is_valid_spreadsheet(filename, content_type):
        raise InvalidFileTypeError(filename)

    logger.info("parsing_spreadsheet", filename=filename)

    try:
        frames = _read_frames(file, filename, content_type)
    except Exception as e:
        logger.error("spreadsheet_read_failed", filename=filename, error=str(e))
        raise ExcelParseError(
            message="No se pudo leer el archivo",
            details={"original_error": str(e)}
        )

    result = SpreadsheetFile(file_name=filename)
    for sheet_name, df in frames.items():
        result.sheets.append(_frame_to_sheet(str(sheet_name), df))

    logger.info(
        "spreadsheet_parsed",
        filename=filename,
        sheets=len(result.sheets),
        total_rows=result.total_rows
    )
    return result


def _read_frames(file, filename: str, content_type: Optional[str]) -> dict[str, pd.DataFrame]:
    lower = (filename or "").lower()
    if lower.endswith(".csv") or content_type == "text/csv":
        return {"Sheet1": pd.read_csv(file, dtype=object)}

    engine = "xlrd" if lower.endswith(".xls") else "openpyxl"
    return pd.read_excel(file, sheet_name=None, engine=engine)


def _frame_to_sheet(name: str, df: pd.DataFrame) -> SheetData:
    df = df.dropna(how="all")
    headers = _label_columns(df.columns)
    df.columns = headers

    data = [
        {column: _clean_cell(value) for column, value in record.items()}
        for record in df.to_dict(orient="records")
    ]
    return SheetData(name=name, data=data, headers=headers)


def _label_columns(columns) -> list[str]:
    """Replace pandas' "Unnamed: N" labels with __EMPTY, __EMPTY_1, ..."""
    labels = []
    empty_count = 0
    for column in columns:
        label = str(column)
        if _UNNAMED.match(label) or not label.strip():
            label = "__EMPTY" if empty_count == 0 else f"__EMPTY_{empty_count}"
            empty_count += 1
        labels.append(label)
    return labels


def _clean_cell(value: Any) -> Any:
    """JSON-friendly cell: NaN -> None, numpy scalars -> Python, dates -> ISO."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, (pd.Timestamp, datetime)):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if pd.isna(value):
        return None
    # numpy scalars
    if hasattr(value, "item"):
        return value.item()
    return value


# ===================
# ANALYSIS
# ===================

def _cell_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)) or parse_amount(value) is not None:
        return "number"
    text = str(value).strip()
    if text.lower() in ("true", "false"):
        return "boolean"
    if _ISO_DATE.match(text) or ("/" in text and not pd.isna(pd.to_datetime(text, errors="coerce"))):
        return "date"
    return "string"


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def analyze_sheet(sheet: SheetData) -> dict:
    """
    Profile a sheet's columns.

    Returns:
        {summary: {totalRows, totalColumns, dataTypes},
         columns: [{name, type, uniqueValues, nullCount, sampleValues}],
         numericStats: [{column, min, max, sum, avg, count}]}
    """
    columns = []
    numeric_stats = []
    data_types: dict[str, int] = {}

    for header in sheet.headers:
        values = [row.get(header) for row in sheet.data]
        present = [v for v in values if _is_present(v)]

        type_counts: dict[str, int] = {}
        for value in present:
            kind = _cell_type(value)
            type_counts[kind] = type_counts.get(kind, 0) + 1

        if len(type_counts) > 1:
            column_type = "mixed"
        elif type_counts:
            column_type = next(iter(type_counts))
        else:
            column_type = "string"

        columns.append({
            "name": header,
            "type": column_type,
            "uniqueValues": len({str(v) for v in present}),
            "nullCount": len(values) - len(present),
            "sampleValues": present[:SAMPLE_SIZE],
        })
        data_types[column_type] = data_types.get(column_type, 0) + 1

        if column_type == "number":
            numbers = [n for n in (parse_amount(v) for v in present) if n is not None]
            if numbers:
                total = sum(numbers)
                numeric_stats.append({
                    "column": header,
                    "min": min(numbers),
                    "max": max(numbers),
                    "sum": total,
                    "avg": total / len(numbers),
                    "count": len(numbers),
                })

    return {
        "summary": {
            "totalRows": sheet.row_count,
            "totalColumns": sheet.col_count,
            "dataTypes": data_types,
        },
        "columns": columns,
        "numericStats": numeric_stats,
    }


def detect_import_type(headers: list[str]) -> dict:
    """
    Guess what a sheet contains from its headers.

    Each keyword found in some header scores a point; five points is full
    confidence.

    Returns:
        {type, confidence (0-100), mappings: {header: keyword}}
    """
    best = {"type": "unknown", "score": 0, "mappings": {}}

    for import_type, keywords in DETECTION_PATTERNS.items():
        score = 0
        mappings: dict[str, str] = {}
        for keyword in keywords:
            matched = next((h for h in headers if keyword in h.lower()), None)
            if matched is not None:
                score += 1
                mappings[matched] = keyword
        if score > best["score"]:
            best = {"type": import_type, "score": score, "mappings": mappings}

    return {
        "type": best["type"],
        "confidence": min(100, round(best["score"] / 5 * 100)),
        "mappings": best["mappings"],
    }


def suggest_mappings(headers: list[str]) -> dict[str, dict[str, str]]:
    """
    Suggest header -> field mappings for every import type.

    A header maps to a field when its label equals the field name or one
    of its aliases; failing that, when it contains an alias. Each field
    is suggested at most once.
    """
    suggestions: dict[str, dict[str, str]] = {}

    for import_type, import_fields in IMPORT_FIELDS.items():
        mapping: dict[str, str] = {}
        taken: set[str] = set()

        for exact in (True, False):
            for header in headers:
                if header in mapping:
                    continue
                label = normalize_label(header)
                if not label:
                    continue
                for import_field in import_fields:
                    if import_field.field in taken:
                        continue
                    names = [normalize_label(n) for n in (import_field.field, *import_field.aliases)]
                    names = [n for n in names if n]
                    if exact:
                        matched = label in names
                    else:
                        matched = any(len(n) >= 3 and n in label for n in names)
                    if matched:
                        mapping[header] = import_field.field
                        taken.add(import_field.field)
                        break

        suggestions[import_type] = mapping

    return suggestions
