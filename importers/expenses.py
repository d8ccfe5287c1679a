"""
Expense importer.

Rows come from hand-kept ledgers: title, total and note rows are skipped,
the amount may sit under any label (or none), and every expense lands in
an existing category or the company's "General" one.
"""

from typing import Optional

from importers.base import BaseImporter
from importers.coercion import coerce_date, coerce_payment_method
from importers.field_catalog import EXPENSE_KEYS
from importers.row_errors import RowError, UnresolvedAmount
from models.records import ExpenseCreate
from services.expense_service import get_expense_service
from utils.text_utils import clean_text

DEFAULT_CATEGORY_CACHE_KEY = "expense_default_category_id"


class ExpenseImporter(BaseImporter):
    import_type = "expenses"
    skip_header_rows = True

    def __init__(self, context):
        super().__init__(context)
        self.expenses = get_expense_service()

    def import_row(self, index, row, fields) -> Optional[RowError]:
        amount = fields.number(EXPENSE_KEYS["amount"], allow_zero=True)
        if amount is None:
            return UnresolvedAmount(index, dict(row), self.context.row_error_dump_chars)

        description = clean_text(fields.text(EXPENSE_KEYS["description"]), 500)
        date_text = fields.text(EXPENSE_KEYS["date"])

        expense = ExpenseCreate(
            company_id=self.company_id,
            user_id=self.context.user_id,
            category_id=self.resolve_category_id(fields.text(EXPENSE_KEYS["category"])),
            vendor=clean_text(fields.text(EXPENSE_KEYS["vendor"])),
            description=description or "Gasto importado",
            amount=amount,
            date=coerce_date(date_text),
            payment_method=coerce_payment_method(fields.text(EXPENSE_KEYS["payment_method"])),
        )
        self.expenses.create(expense)
        return None

    def resolve_category_id(self, category_name: Optional[str]) -> str:
        """Category containing the given name, else the default category."""
        if category_name:
            category = self.expenses.find_category_containing(self.company_id, category_name)
            if category:
                return category["id"]
        return self.default_category_id()

    def default_category_id(self) -> str:
        cache = self.context.cache
        if DEFAULT_CATEGORY_CACHE_KEY not in cache:
            category = self.expenses.get_or_create_default_category(self.company_id)
            cache[DEFAULT_CATEGORY_CACHE_KEY] = category["id"]
        return cache[DEFAULT_CATEGORY_CACHE_KEY]
