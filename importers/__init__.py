"""
Spreadsheet import engine.

raw rows -> row classifier -> field resolver -> value coercion -> records
"""

from importers.base import BaseImporter, BatchLookup, ImportContext, ImportResult
from importers.customers import CustomerImporter
from importers.expenses import ExpenseImporter
from importers.income import IncomeImporter
from importers.invoices import InvoiceImporter
from importers.products import ProductImporter
from importers.vendors import VendorImporter

IMPORTERS: dict[str, type[BaseImporter]] = {
    "customers": CustomerImporter,
    "expenses": ExpenseImporter,
    "income": IncomeImporter,
    "products": ProductImporter,
    "invoices": InvoiceImporter,
    "vendors": VendorImporter,
}


def get_importer(import_type: str, context: ImportContext) -> BaseImporter:
    """Instantiate the importer for an import type (already validated)."""
    return IMPORTERS[import_type](context)


__all__ = [
    "IMPORTERS",
    "get_importer",
    "BaseImporter",
    "BatchLookup",
    "ImportContext",
    "ImportResult",
    "CustomerImporter",
    "ExpenseImporter",
    "IncomeImporter",
    "InvoiceImporter",
    "ProductImporter",
    "VendorImporter",
]
