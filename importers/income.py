"""
Income importer: writes ledger transactions of type INCOME.
"""

from typing import Optional

from importers.base import BaseImporter
from importers.coercion import coerce_date
from importers.field_catalog import INCOME_KEYS
from importers.row_errors import RowError, UnresolvedAmount
from models.records import IncomeTransactionCreate
from services.transaction_service import get_transaction_service
from utils.text_utils import clean_text


class IncomeImporter(BaseImporter):
    import_type = "income"
    skip_header_rows = True

    def __init__(self, context):
        super().__init__(context)
        self.transactions = get_transaction_service()

    def import_row(self, index, row, fields) -> Optional[RowError]:
        amount = fields.number(INCOME_KEYS["amount"], allow_zero=True)
        if amount is None:
            return UnresolvedAmount(index, dict(row), self.context.row_error_dump_chars)

        customer_name = clean_text(fields.text(INCOME_KEYS["customer"]))

        income = IncomeTransactionCreate(
            company_id=self.company_id,
            category=clean_text(fields.text(INCOME_KEYS["category"]), 100) or "Ingreso General",
            description=clean_text(fields.text(INCOME_KEYS["description"]), 500) or "Ingreso importado",
            amount=amount,
            date=coerce_date(fields.text(INCOME_KEYS["date"])),
            notes=f"Cliente: {customer_name}" if customer_name else None,
        )
        self.transactions.create_income(income)
        return None
