"""
Product service for import upserts.
"""

from typing import Optional
import structlog

from models.records import ProductCreate
from services.company_scoped_service import CompanyScopedService

logger = structlog.get_logger(__name__)


class ProductService(CompanyScopedService):
    """
    Product catalog.

    Products are matched by SKU when the row has one, otherwise by name.
    """

    table = "products"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_by_sku(self, company_id: str, sku: str) -> Optional[dict]:
        """
        Get a product by SKU.

        Args:
            company_id: Owning company
            sku: Product SKU (case-insensitive, stored uppercase)

        Returns:
            Product row or None if not found
        """
        logger.debug("getting_product_by_sku", sku=sku)
        return self.find_one(company_id, sku=sku.upper().strip())

    def get_by_name(self, company_id: str, name: str) -> Optional[dict]:
        logger.debug("getting_product_by_name", name=name)
        return self.find_one_ilike(company_id, "name", name)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, product: ProductCreate) -> dict:
        row = self.insert(product.to_row())
        logger.info(
            "product_created",
            product_id=row.get("id"),
            sku=product.sku,
            company_id=product.company_id
        )
        return row

    def update_product(self, product_id: str, product: ProductCreate) -> dict:
        row = self.update(product_id, product.to_row(exclude_none=True))
        logger.debug("product_updated", product_id=product_id)
        return row


_service: Optional[ProductService] = None


def get_product_service() -> ProductService:
    global _service
    if _service is None:
        _service = ProductService()
    return _service
