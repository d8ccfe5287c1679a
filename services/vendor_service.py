"""
Vendor store access for imports.
"""

from typing import Optional
import structlog

from models.records import VendorCreate
from services.company_scoped_service import CompanyScopedService

logger = structlog.get_logger(__name__)


class VendorService(CompanyScopedService):
    """Vendors, unique per company by name."""

    table = "vendors"

    def find_by_name(self, company_id: str, name: str) -> Optional[dict]:
        return self.find_one_ilike(company_id, "name", name)

    def create(self, vendor: VendorCreate) -> dict:
        """Insert a vendor. vendor_number must already be allocated."""
        row = self.insert(vendor.to_row())
        logger.info(
            "vendor_created",
            vendor_id=row.get("id"),
            vendor_number=vendor.vendor_number,
            company_id=vendor.company_id
        )
        return row

    def update_vendor(self, vendor_id: str, vendor: VendorCreate) -> dict:
        """Update contact data; the stored vendor_number is left untouched."""
        data = vendor.to_row(exclude_none=True)
        data.pop("vendor_number", None)
        row = self.update(vendor_id, data)
        logger.debug("vendor_updated", vendor_id=vendor_id)
        return row


_service: Optional[VendorService] = None


def get_vendor_service() -> VendorService:
    global _service
    if _service is None:
        _service = VendorService()
    return _service
