"""
Spreadsheet parsers module.
"""

from parsers.spreadsheet_parser import (
    parse_spreadsheet,
    analyze_sheet,
    detect_import_type,
    suggest_mappings,
    SpreadsheetFile,
    SheetData,
)

__all__ = [
    "parse_spreadsheet",
    "analyze_sheet",
    "detect_import_type",
    "suggest_mappings",
    "SpreadsheetFile",
    "SheetData",
]
