"""
Customer store access for imports.
"""

from typing import Optional
import structlog

from models.records import CustomerCreate
from services.company_scoped_service import CompanyScopedService

logger = structlog.get_logger(__name__)


class CustomerService(CompanyScopedService):
    """Customers, unique per company by email or name."""

    table = "customers"

    def find_by_email(self, company_id: str, email: str) -> Optional[dict]:
        return self.find_one_ilike(company_id, "email", email)

    def find_by_name(self, company_id: str, name: str) -> Optional[dict]:
        return self.find_one_ilike(company_id, "name", name)

    def find_by_name_containing(self, company_id: str, fragment: str) -> Optional[dict]:
        """Fuzzy lookup used when invoices name their customer loosely."""
        return self.find_one_ilike(company_id, "name", fragment, contains=True)

    def create(self, customer: CustomerCreate) -> dict:
        row = self.insert(customer.to_row())
        logger.info(
            "customer_created",
            customer_id=row.get("id"),
            company_id=customer.company_id
        )
        return row

    def update_customer(self, customer_id: str, customer: CustomerCreate) -> dict:
        row = self.update(customer_id, customer.to_row(exclude_none=True))
        logger.debug("customer_updated", customer_id=customer_id)
        return row


_service: Optional[CustomerService] = None


def get_customer_service() -> CustomerService:
    global _service
    if _service is None:
        _service = CustomerService()
    return _service
