"""
Customer importer: upsert by email, then by name.
"""

from typing import Optional
import structlog

from importers.base import BaseImporter
from importers.field_catalog import CUSTOMER_KEYS
from importers.row_errors import MissingRequiredField, RowError
from models.records import CustomerCreate
from services.customer_service import get_customer_service
from utils.text_utils import clean_text

logger = structlog.get_logger(__name__)


class CustomerImporter(BaseImporter):
    import_type = "customers"

    def __init__(self, context):
        super().__init__(context)
        self.customers = get_customer_service()

    def import_row(self, index, row, fields) -> Optional[RowError]:
        name = clean_text(fields.text(CUSTOMER_KEYS["name"]))
        if not name:
            return MissingRequiredField(index, "name")

        customer = CustomerCreate(
            company_id=self.company_id,
            name=name,
            email=clean_text(fields.text(CUSTOMER_KEYS["email"])),
            phone=clean_text(fields.text(CUSTOMER_KEYS["phone"]), 50),
            address=clean_text(fields.text(CUSTOMER_KEYS["address"])),
            city=clean_text(fields.text(CUSTOMER_KEYS["city"]), 100),
            state=clean_text(fields.text(CUSTOMER_KEYS["state"]), 100),
            zip_code=clean_text(fields.text(CUSTOMER_KEYS["zip_code"]), 20),
            country=clean_text(fields.text(CUSTOMER_KEYS["country"]), 100) or self.context.default_country,
            tax_id=clean_text(fields.text(CUSTOMER_KEYS["tax_id"]), 50),
            notes=clean_text(fields.text(CUSTOMER_KEYS["notes"]), 2000),
        )

        existing_id = self.find_existing(customer)
        if existing_id:
            self.customers.update_customer(existing_id, customer)
            customer_id = existing_id
        else:
            customer_id = self.customers.create(customer)["id"]

        self.context.lookup.remember("customer", customer_id, name=customer.name, email=customer.email)
        return None

    def find_existing(self, customer: CustomerCreate) -> Optional[str]:
        """Id of the customer this row refers to: this batch first, then the store."""
        lookup = self.context.lookup
        record_id = lookup.get("customer", "email", customer.email) or lookup.get("customer", "name", customer.name)
        if record_id:
            return record_id

        existing = None
        if customer.email:
            existing = self.customers.find_by_email(self.company_id, customer.email)
        if existing is None:
            existing = self.customers.find_by_name(self.company_id, customer.name)
        return existing["id"] if existing else None
