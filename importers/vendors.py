"""
Vendor importer: upsert by name, new vendors get a VND-NNNNNN number.
"""

from typing import Optional
import structlog

from importers.base import BaseImporter
from importers.field_catalog import VENDOR_KEYS
from importers.row_errors import MissingRequiredField, RowError
from models.records import VendorCreate
from services.sequence_service import VENDOR_SEQUENCE, get_sequence_service
from services.vendor_service import get_vendor_service
from utils.text_utils import clean_text

logger = structlog.get_logger(__name__)


class VendorImporter(BaseImporter):
    import_type = "vendors"

    def __init__(self, context):
        super().__init__(context)
        self.vendors = get_vendor_service()
        self.sequences = get_sequence_service()

    def import_row(self, index, row, fields) -> Optional[RowError]:
        name = clean_text(fields.text(VENDOR_KEYS["name"]))
        if not name:
            return MissingRequiredField(index, "name")

        vendor = VendorCreate(
            company_id=self.company_id,
            name=name,
            email=clean_text(fields.text(VENDOR_KEYS["email"])),
            phone=clean_text(fields.text(VENDOR_KEYS["phone"]), 50),
            address=clean_text(fields.text(VENDOR_KEYS["address"])),
            city=clean_text(fields.text(VENDOR_KEYS["city"]), 100),
            state=clean_text(fields.text(VENDOR_KEYS["state"]), 100),
            country=clean_text(fields.text(VENDOR_KEYS["country"]), 100) or self.context.default_country,
            tax_id=clean_text(fields.text(VENDOR_KEYS["tax_id"]), 50),
            notes=clean_text(fields.text(VENDOR_KEYS["notes"]), 2000),
        )

        vendor_id = self.context.lookup.get("vendor", "name", name)
        if vendor_id is None:
            existing = self.vendors.find_by_name(self.company_id, name)
            vendor_id = existing["id"] if existing else None

        if vendor_id:
            self.vendors.update_vendor(vendor_id, vendor)
        else:
            vendor.vendor_number = self.sequences.next_number(self.company_id, VENDOR_SEQUENCE)
            vendor_id = self.vendors.create(vendor)["id"]

        self.context.lookup.remember("vendor", vendor_id, name=name)
        return None
