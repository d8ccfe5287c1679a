"""
Spreadsheet upload route: parse a file and suggest how to import it.
"""

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse
from typing import Optional
from io import BytesIO
import structlog

from exceptions import AppError, MissingFileError
from parsers.spreadsheet_parser import (
    analyze_sheet,
    detect_import_type,
    parse_spreadsheet,
    suggest_mappings,
)

logger = structlog.get_logger(__name__)

router = APIRouter()


def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={"error": "Error al procesar el archivo"}
    )


@router.post("/api/tools/excel")
async def upload_spreadsheet(file: Optional[UploadFile] = File(None)):
    """
    Parse an .xlsx/.xls/.csv upload.

    Returns every sheet's rows plus, for the first sheet, a column
    profile, the detected import type and suggested column mappings.
    """
    try:
        if file is None or not file.filename:
            raise MissingFileError()

        contents = await file.read()
        spreadsheet = parse_spreadsheet(BytesIO(contents), file.filename, file.content_type)

        first = spreadsheet.sheets[0] if spreadsheet.sheets else None
        return {
            "success": True,
            "file": spreadsheet.to_dict(),
            "analysis": analyze_sheet(first) if first else None,
            "detectedType": detect_import_type(first.headers) if first else None,
            "suggestedMappings": suggest_mappings(first.headers) if first else {},
        }
    except Exception as e:
        return handle_error(e)
