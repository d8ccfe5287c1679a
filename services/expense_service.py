"""
Expenses and their categories.
"""

from typing import Optional
import structlog

from models.records import ExpenseCategoryCreate, ExpenseCreate
from services.company_scoped_service import CompanyScopedService

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORY_NAME = "General"


class ExpenseService(CompanyScopedService):
    """Writes expenses; reads and creates expense_categories."""

    table = "expenses"
    categories_table = "expense_categories"

    # ===================
    # CATEGORIES
    # ===================

    def find_category_containing(self, company_id: str, name: str) -> Optional[dict]:
        """Category whose name contains `name`, case-insensitive."""
        return self.find_one_ilike(
            company_id, "name", name,
            contains=True,
            table=self.categories_table
        )

    def get_or_create_default_category(self, company_id: str) -> dict:
        """The company's "General" category, created if missing."""
        category = self.find_one(
            company_id,
            table=self.categories_table,
            name=DEFAULT_CATEGORY_NAME
        )
        if category:
            return category

        category = self.insert(
            ExpenseCategoryCreate(
                company_id=company_id,
                name=DEFAULT_CATEGORY_NAME,
                description="Categoría general",
                type="OTHER",
            ).to_row(),
            table=self.categories_table
        )
        logger.info(
            "default_expense_category_created",
            company_id=company_id,
            category_id=category.get("id")
        )
        return category

    # ===================
    # EXPENSES
    # ===================

    def create(self, expense: ExpenseCreate) -> dict:
        row = self.insert(expense.to_row())
        logger.debug(
            "expense_created",
            expense_id=row.get("id"),
            amount=expense.amount
        )
        return row


_service: Optional[ExpenseService] = None


def get_expense_service() -> ExpenseService:
    global _service
    if _service is None:
        _service = ExpenseService()
    return _service
