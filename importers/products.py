"""
Product importer: upsert by SKU, then by name.
"""

from typing import Optional

from importers.base import BaseImporter
from importers.field_catalog import PRODUCT_KEYS
from importers.row_errors import MissingRequiredField, RowError
from models.records import ProductCreate
from services.product_service import get_product_service
from utils.text_utils import clean_text


class ProductImporter(BaseImporter):
    import_type = "products"

    def __init__(self, context):
        super().__init__(context)
        self.products = get_product_service()

    def import_row(self, index, row, fields) -> Optional[RowError]:
        name = clean_text(fields.text(PRODUCT_KEYS["name"]))
        if not name:
            return MissingRequiredField(index, "name")

        product = ProductCreate(
            company_id=self.company_id,
            name=name,
            description=clean_text(fields.text(PRODUCT_KEYS["description"]), 2000),
            sku=clean_text(fields.text(PRODUCT_KEYS["sku"]), 50),
            price=fields.number(PRODUCT_KEYS["price"]) or 0,
            cost=fields.number(PRODUCT_KEYS["cost"], scan_row=False),
            stock_quantity=fields.number(PRODUCT_KEYS["stock"], allow_zero=True, scan_row=False) or 0,
            min_stock_level=fields.number(PRODUCT_KEYS["min_stock"], allow_zero=True, scan_row=False),
            unit=clean_text(fields.text(PRODUCT_KEYS["unit"]), 20) or "unit",
        )

        lookup = self.context.lookup
        product_id = lookup.get("product", "sku", product.sku) or lookup.get("product", "name", name)
        if product_id is None:
            existing = None
            if product.sku:
                existing = self.products.get_by_sku(self.company_id, product.sku)
            if existing is None:
                existing = self.products.get_by_name(self.company_id, name)
            product_id = existing["id"] if existing else None

        if product_id:
            self.products.update_product(product_id, product)
        else:
            product_id = self.products.create(product)["id"]

        lookup.remember("product", product_id, name=name, sku=product.sku)
        return None
