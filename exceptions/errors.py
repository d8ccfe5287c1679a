"""
Custom exception classes for the application.

Every request-level failure is an AppError carrying its HTTP status.
Row-level import failures are not exceptions; see importers.row_errors.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "COMPANY_NOT_FOUND")
        message: Human-readable message, returned as the "error" field
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        content = {
            "error": self.message,
            "code": self.code,
            "timestamp": self.timestamp
        }
        if self.details:
            content["details"] = self.details
        return content


class BadRequestError(AppError):
    """Malformed request (400)."""

    def __init__(
        self,
        message: str,
        code: str = "BAD_REQUEST",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details
        )


class AuthenticationError(AppError):
    """No authenticated session (401)."""

    def __init__(self, message: str = "No autorizado"):
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401
        )


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        message: str,
        identifier: str,
        code: str
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=404,
            details={"id": identifier}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


class StoreUnavailableError(AppError):
    """The persistence store cannot be reached (500). Aborts a whole import."""

    def __init__(self, message: str):
        super().__init__(
            code="STORE_UNAVAILABLE",
            message=message,
            status_code=500
        )


# ===================
# IMPORT REQUEST ERRORS
# ===================

class InvalidImportPayloadError(BadRequestError):
    """Missing type, or data that is not a non-empty list of rows."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            code="INVALID_IMPORT_PAYLOAD",
            message="Datos inválidos",
            details={"reason": reason} if reason else None
        )


class CompanyIdRequiredError(BadRequestError):
    """Import request without companyId."""

    def __init__(self):
        super().__init__(
            code="COMPANY_ID_REQUIRED",
            message="Se requiere ID de empresa"
        )


class UnsupportedImportTypeError(BadRequestError):
    """Import type outside the supported set."""

    def __init__(self, import_type: str, valid: list[str]):
        super().__init__(
            code="UNSUPPORTED_IMPORT_TYPE",
            message="Tipo de importación no soportado",
            details={"provided": import_type, "valid": valid}
        )


class TooManyRowsError(BadRequestError):
    """Import request above the configured row limit."""

    def __init__(self, row_count: int, max_rows: int):
        super().__init__(
            code="TOO_MANY_ROWS",
            message=f"Demasiadas filas: {row_count} (máximo {max_rows})",
            details={"rows": row_count, "max_rows": max_rows}
        )


class CompanyNotFoundError(NotFoundError):
    """Company missing or not accessible by the caller."""

    def __init__(self, company_id: str):
        super().__init__(
            message="Empresa no encontrada",
            identifier=company_id,
            code="COMPANY_NOT_FOUND"
        )


# ===================
# SPREADSHEET ERRORS
# ===================

class MissingFileError(BadRequestError):
    """Upload request without a file."""

    def __init__(self):
        super().__init__(
            code="MISSING_FILE",
            message="No se proporcionó archivo"
        )


class InvalidFileTypeError(BadRequestError):
    """Upload is not an Excel or CSV file."""

    def __init__(self, filename: Optional[str]):
        super().__init__(
            code="INVALID_FILE_TYPE",
            message="Tipo de archivo no válido",
            details={"filename": filename, "valid": [".xlsx", ".xls", ".csv"]}
        )


class ExcelParseError(BadRequestError):
    """Spreadsheet could not be read."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="EXCEL_PARSE_ERROR",
            message=message,
            details=details
        )
