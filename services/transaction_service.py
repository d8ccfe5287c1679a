"""
Ledger transactions. Imports only write INCOME rows.
"""

from typing import Optional
import structlog

from models.records import IncomeTransactionCreate
from services.company_scoped_service import CompanyScopedService

logger = structlog.get_logger(__name__)


class TransactionService(CompanyScopedService):
    table = "transactions"

    def create_income(self, income: IncomeTransactionCreate) -> dict:
        row = self.insert(income.to_row())
        logger.debug(
            "income_created",
            transaction_id=row.get("id"),
            amount=income.amount
        )
        return row


_service: Optional[TransactionService] = None


def get_transaction_service() -> TransactionService:
    global _service
    if _service is None:
        _service = TransactionService()
    return _service
