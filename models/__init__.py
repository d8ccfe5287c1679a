"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.records import (
    PaymentMethod,
    ExpenseStatus,
    TransactionType,
    TransactionStatus,
    InvoiceStatus,
    RecordSchema,
    CustomerCreate,
    VendorCreate,
    ProductCreate,
    ExpenseCategoryCreate,
    ExpenseCreate,
    IncomeTransactionCreate,
    InvoiceCreate,
)
from models.imports import (
    ImportType,
    ImportJobStatus,
    ImportRequest,
    ImportResponse,
    ImportJobResponse,
    ImportJobListResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    # Records
    "PaymentMethod",
    "ExpenseStatus",
    "TransactionType",
    "TransactionStatus",
    "InvoiceStatus",
    "RecordSchema",
    "CustomerCreate",
    "VendorCreate",
    "ProductCreate",
    "ExpenseCategoryCreate",
    "ExpenseCreate",
    "IncomeTransactionCreate",
    "InvoiceCreate",
    # Imports
    "ImportType",
    "ImportJobStatus",
    "ImportRequest",
    "ImportResponse",
    "ImportJobResponse",
    "ImportJobListResponse",
]
