"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    BadRequestError,
    AuthenticationError,
    NotFoundError,
    DatabaseError,
    StoreUnavailableError,

    # Import requests
    InvalidImportPayloadError,
    CompanyIdRequiredError,
    UnsupportedImportTypeError,
    TooManyRowsError,
    CompanyNotFoundError,

    # Spreadsheets
    MissingFileError,
    InvalidFileTypeError,
    ExcelParseError,
)

__all__ = [
    # Base
    "AppError",
    "BadRequestError",
    "AuthenticationError",
    "NotFoundError",
    "DatabaseError",
    "StoreUnavailableError",

    # Import requests
    "InvalidImportPayloadError",
    "CompanyIdRequiredError",
    "UnsupportedImportTypeError",
    "TooManyRowsError",
    "CompanyNotFoundError",

    # Spreadsheets
    "MissingFileError",
    "InvalidFileTypeError",
    "ExcelParseError",
]
