"""
Persistence-ready records produced by the importers.

Each *Create schema maps one-to-one onto a row of its table; services
serialize them with to_row().
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum
from datetime import date

from models.base import BaseSchema


class PaymentMethod(str, Enum):
    """Payment methods accepted on expenses."""
    CASH = "CASH"
    TRANSFER = "TRANSFER"
    CARD = "CARD"
    CHECK = "CHECK"
    OTHER = "OTHER"


class ExpenseStatus(str, Enum):
    """Expense approval status."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TransactionType(str, Enum):
    """Ledger transaction direction."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class InvoiceStatus(str, Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class RecordSchema(BaseSchema):
    """Base for insertable records."""

    def to_row(self, exclude_none: bool = False) -> dict:
        """Dict ready for supabase insert/update (dates as ISO strings)."""
        return self.model_dump(mode="json", exclude_none=exclude_none)


# ===================
# PARTIES
# ===================

class CustomerCreate(RecordSchema):
    """
    Customer upserted by name or email within a company.

    Required: company_id, name
    """

    company_id: str
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: str = "US"
    tax_id: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.lower()


class VendorCreate(RecordSchema):
    """
    Vendor upserted by name within a company.

    vendor_number is assigned on insert and never changed by an import.
    """

    company_id: str
    vendor_number: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: str = "US"
    tax_id: Optional[str] = None
    notes: Optional[str] = None


# ===================
# CATALOG
# ===================

class ProductCreate(RecordSchema):
    """Product upserted by SKU or name within a company."""

    company_id: str
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    sku: Optional[str] = Field(None, max_length=50)
    price: float = Field(0, ge=0)
    cost: Optional[float] = None
    stock_quantity: float = 0
    min_stock_level: Optional[float] = None
    unit: str = "unit"
    taxable: bool = True
    active: bool = True

    @field_validator("sku")
    @classmethod
    def sku_uppercase(cls, v: Optional[str]) -> Optional[str]:
        """SKU must be uppercase and trimmed."""
        if v is None:
            return v
        return v.upper().strip()


# ===================
# LEDGER
# ===================

class ExpenseCategoryCreate(RecordSchema):
    company_id: str
    name: str
    description: Optional[str] = None
    type: str = "OTHER"


class ExpenseCreate(RecordSchema):
    """Imported expense. Always inserted."""

    company_id: str
    user_id: Optional[str] = None
    category_id: str
    vendor: Optional[str] = None
    description: str = "Gasto importado"
    amount: float = Field(..., ge=0)
    date: date
    status: ExpenseStatus = ExpenseStatus.APPROVED
    payment_method: PaymentMethod = PaymentMethod.OTHER


class IncomeTransactionCreate(RecordSchema):
    """Imported income, stored as a ledger transaction of type INCOME."""

    company_id: str
    type: TransactionType = TransactionType.INCOME
    category: str = "Ingreso General"
    description: str = "Ingreso importado"
    amount: float = Field(..., ge=0)
    date: date
    status: TransactionStatus = TransactionStatus.COMPLETED
    notes: Optional[str] = None


class InvoiceCreate(RecordSchema):
    """Imported invoice. Subtotal equals total, no tax."""

    company_id: str
    customer_id: str
    user_id: Optional[str] = None
    invoice_number: str
    issue_date: date
    due_date: date
    subtotal: float
    tax_amount: float = 0
    total: float = Field(..., gt=0)
    status: InvoiceStatus = InvoiceStatus.SENT
    notes: str = "Importada desde Excel"
