"""
Import request/response schemas.

The request model is deliberately permissive: presence and type checks
happen in ImportService so each failure gets its own error message.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema


class ImportType(str, Enum):
    """Entity types the import engine can write."""
    CUSTOMERS = "customers"
    EXPENSES = "expenses"
    INCOME = "income"
    PRODUCTS = "products"
    INVOICES = "invoices"
    VENDORS = "vendors"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class ImportJobStatus(str, Enum):
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class ImportRequest(BaseModel):
    """
    Body of POST /api/tools/excel/import.

    {type, data, mappings, companyId}
    """
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = Field(None, description="Import type, e.g. 'expenses'")
    data: Optional[Any] = Field(None, description="List of row objects")
    mappings: Optional[dict[str, Any]] = Field(
        None,
        description="Source column label -> canonical field name"
    )
    company_id: Optional[str] = Field(None, alias="companyId")

    def clean_mappings(self) -> dict[str, str]:
        """Mappings with blank targets dropped and targets as strings."""
        if not self.mappings:
            return {}
        return {
            str(column): str(target)
            for column, target in self.mappings.items()
            if target is not None and str(target).strip()
        }


class ImportResponse(BaseSchema):
    """
    Result of an import. Returned with HTTP 200 even when errors is non-empty.
    """
    success: bool = True
    imported: int
    errors: list[str]
    message: str

    @classmethod
    def create(cls, imported: int, errors: list[str]) -> "ImportResponse":
        return cls(
            imported=imported,
            errors=errors,
            message=f"Se importaron {imported} registros exitosamente"
        )


class ImportJobResponse(BaseSchema):
    """One row of import history."""
    id: str
    company_id: str
    user_id: Optional[str] = None
    import_type: str
    status: ImportJobStatus
    total_rows: int = 0
    processed_rows: int = 0
    success_rows: int = 0
    error_rows: int = 0
    skipped_rows: int = 0
    errors: Optional[list[str]] = None
    mappings: Optional[dict[str, Any]] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class ImportJobListResponse(BaseSchema):
    data: list[ImportJobResponse]
    total: int
