"""
Invoice store access for imports.
"""

from typing import Optional
import structlog

from models.records import InvoiceCreate
from services.company_scoped_service import CompanyScopedService

logger = structlog.get_logger(__name__)


class InvoiceService(CompanyScopedService):
    table = "invoices"

    def create(self, invoice: InvoiceCreate) -> dict:
        row = self.insert(invoice.to_row())
        logger.info(
            "invoice_created",
            invoice_id=row.get("id"),
            invoice_number=invoice.invoice_number,
            total=invoice.total
        )
        return row


_service: Optional[InvoiceService] = None


def get_invoice_service() -> InvoiceService:
    global _service
    if _service is None:
        _service = InvoiceService()
    return _service
