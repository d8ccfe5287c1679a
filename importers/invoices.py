"""
Invoice importer.

Each row becomes a SENT invoice numbered INV-NNNNNN. The customer is
matched loosely by name and created when nothing matches.
"""

from datetime import timedelta
from typing import Optional
import structlog

from importers.base import BaseImporter
from importers.coercion import coerce_date
from importers.field_catalog import INVOICE_KEYS
from importers.row_errors import InvalidTotal, MissingRequiredField, RowError
from models.records import CustomerCreate, InvoiceCreate
from services.customer_service import get_customer_service
from services.invoice_service import get_invoice_service
from services.sequence_service import INVOICE_SEQUENCE, get_sequence_service
from utils.text_utils import clean_text

logger = structlog.get_logger(__name__)


class InvoiceImporter(BaseImporter):
    import_type = "invoices"

    def __init__(self, context):
        super().__init__(context)
        self.invoices = get_invoice_service()
        self.customers = get_customer_service()
        self.sequences = get_sequence_service()

    def import_row(self, index, row, fields) -> Optional[RowError]:
        total = fields.number(INVOICE_KEYS["total"])
        if total is None or total <= 0:
            return InvalidTotal(index)

        customer_name = clean_text(fields.text(INVOICE_KEYS["customer"]))
        if not customer_name:
            return MissingRequiredField(index, "customer")

        customer_id = self.resolve_customer_id(customer_name)
        issue_date = coerce_date(fields.text(INVOICE_KEYS["date"]))

        invoice = InvoiceCreate(
            company_id=self.company_id,
            customer_id=customer_id,
            user_id=self.context.user_id,
            invoice_number=self.sequences.next_number(self.company_id, INVOICE_SEQUENCE),
            issue_date=issue_date,
            due_date=issue_date + timedelta(days=self.context.invoice_due_days),
            subtotal=total,
            tax_amount=0,
            total=total,
            notes=clean_text(fields.text(INVOICE_KEYS["notes"]), 2000) or "Importada desde Excel",
        )
        self.invoices.create(invoice)
        return None

    def resolve_customer_id(self, customer_name: str) -> str:
        """Customer whose name contains customer_name, created if none does."""
        lookup = self.context.lookup
        customer_id = lookup.find_name_containing("customer", customer_name)
        if customer_id:
            return customer_id

        customer = self.customers.find_by_name_containing(self.company_id, customer_name)
        if customer is None:
            customer = self.customers.create(
                CustomerCreate(
                    company_id=self.company_id,
                    name=customer_name,
                    country=self.context.default_country,
                )
            )
            logger.info(
                "invoice_customer_created",
                customer_id=customer["id"],
                company_id=self.company_id
            )

        lookup.remember("customer", customer["id"], name=customer.get("name") or customer_name)
        return customer["id"]
