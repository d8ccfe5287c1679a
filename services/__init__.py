"""
Business logic services.

Each service handles one table or domain area. The import orchestrator
lives in services.import_service and is imported from there directly,
since it depends on the importers package, which depends on these.
"""

from services.company_service import CompanyService, get_company_service
from services.customer_service import CustomerService, get_customer_service
from services.vendor_service import VendorService, get_vendor_service
from services.product_service import ProductService, get_product_service
from services.expense_service import ExpenseService, get_expense_service
from services.transaction_service import TransactionService, get_transaction_service
from services.invoice_service import InvoiceService, get_invoice_service
from services.sequence_service import SequenceService, get_sequence_service, format_sequence_number
from services.import_job_service import ImportJobService, get_import_job_service

__all__ = [
    "CompanyService",
    "get_company_service",
    "CustomerService",
    "get_customer_service",
    "VendorService",
    "get_vendor_service",
    "ProductService",
    "get_product_service",
    "ExpenseService",
    "get_expense_service",
    "TransactionService",
    "get_transaction_service",
    "InvoiceService",
    "get_invoice_service",
    "SequenceService",
    "get_sequence_service",
    "format_sequence_number",
    "ImportJobService",
    "get_import_job_service",
]
