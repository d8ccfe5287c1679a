"""
Unit tests for the upserting importers: customers, vendors, products.
"""

from importers import CustomerImporter, ImportContext, ProductImporter, VendorImporter
from tests.factories import CustomerFactory, VendorFactory


def new_context(company_id="company-1"):
    """Fresh request-scoped context, as a second import request would get."""
    return ImportContext(company_id=company_id, user_id="user-1")


# ===================
# CUSTOMERS
# ===================

class TestCustomerImporter:
    """Tests for CustomerImporter.run"""

    def test_creates_customer(self, import_context, mock_supabase):
        rows = [{"nombre": "Acme SA", "email": "Info@Acme.com", "telefono": "555-1234"}]

        result = CustomerImporter(import_context).run(rows, {})

        assert result.imported == 1
        customer = mock_supabase.rows("customers")[0]
        assert customer["name"] == "Acme SA"
        assert customer["email"] == "info@acme.com"
        assert customer["phone"] == "555-1234"
        assert customer["country"] == "US"
        assert customer["company_id"] == "company-1"

    def test_second_import_updates_instead_of_duplicating(self, company, mock_supabase):
        CustomerImporter(new_context()).run([{"nombre": "Acme SA", "email": "info@acme.com"}], {})
        CustomerImporter(new_context()).run([{"nombre": "Acme SA", "telefono": "555-9999"}], {})

        customers = mock_supabase.rows("customers")
        assert len(customers) == 1
        assert customers[0]["phone"] == "555-9999"
        assert customers[0]["email"] == "info@acme.com"

    def test_matches_existing_by_email(self, import_context, mock_supabase):
        existing = CustomerFactory.create(name="Acme", email="info@acme.com")
        mock_supabase.set_table_data("customers", [existing])

        CustomerImporter(import_context).run([{"nombre": "Acme Corporativo", "email": "INFO@acme.com"}], {})

        customers = mock_supabase.rows("customers")
        assert len(customers) == 1
        assert customers[0]["name"] == "Acme Corporativo"

    def test_repeated_name_in_one_batch(self, import_context, mock_supabase):
        rows = [{"nombre": "Acme SA"}, {"nombre": "ACME  SA"}]

        result = CustomerImporter(import_context).run(rows, {})

        assert result.imported == 2
        assert len(mock_supabase.rows("customers")) == 1

    def test_other_company_customer_is_not_matched(self, import_context, mock_supabase):
        mock_supabase.set_table_data("customers", [
            CustomerFactory.create(company_id="company-2", name="Acme SA")
        ])

        CustomerImporter(import_context).run([{"nombre": "Acme SA"}], {})

        assert len(mock_supabase.rows("customers")) == 2

    def test_asterisk_in_name_matches_literally(self, import_context, mock_supabase):
        mock_supabase.set_table_data("customers", [CustomerFactory.create(name="A-B Corp")])

        CustomerImporter(import_context).run([{"nombre": "A*B Corp"}], {})

        assert sorted(c["name"] for c in mock_supabase.rows("customers")) == ["A*B Corp", "A-B Corp"]

    def test_asterisk_name_finds_same_customer(self, import_context, mock_supabase):
        existing = CustomerFactory.create(name="A*B Corp")
        mock_supabase.set_table_data("customers", [CustomerFactory.create(name="AxB Corp"), existing])

        CustomerImporter(import_context).run([{"nombre": "a*b corp", "telefono": "555-0000"}], {})

        customers = {c["id"]: c for c in mock_supabase.rows("customers")}
        assert len(customers) == 2
        assert customers[existing["id"]]["phone"] == "555-0000"

    def test_missing_name(self, import_context, mock_supabase):
        result = CustomerImporter(import_context).run([{"email": "x@y.com"}], {})

        assert result.error_messages() == ["Fila 2: Nombre requerido"]
        assert mock_supabase.rows("customers") == []


# ===================
# VENDORS
# ===================

class TestVendorImporter:
    """Tests for VendorImporter.run"""

    def test_new_vendors_are_numbered(self, import_context, mock_supabase):
        rows = [{"proveedor": "Cementos del Norte"}, {"proveedor": "Maderas Sur"}]

        VendorImporter(import_context).run(rows, {})

        numbers = [v["vendor_number"] for v in mock_supabase.rows("vendors")]
        assert numbers == ["VND-000001", "VND-000002"]

    def test_update_keeps_vendor_number(self, import_context, mock_supabase):
        existing = VendorFactory.create(name="Proveedora Norte", vendor_number="VND-000007")
        mock_supabase.set_table_data("vendors", [existing])
        rows = [
            {"proveedor": "Proveedora Norte", "telefono": "555-0101"},
            {"proveedor": "Nuevo Proveedor"},
        ]

        result = VendorImporter(import_context).run(rows, {})

        assert result.imported == 2
        vendors = {v["name"]: v for v in mock_supabase.rows("vendors")}
        assert vendors["Proveedora Norte"]["vendor_number"] == "VND-000007"
        assert vendors["Proveedora Norte"]["phone"] == "555-0101"
        assert vendors["Nuevo Proveedor"]["vendor_number"] == "VND-000001"
        assert mock_supabase.counters == {("company-1", "VND"): 1}

    def test_repeated_vendor_allocates_one_number(self, import_context, mock_supabase):
        rows = [{"proveedor": "Maderas Sur"}, {"proveedor": "Maderas Sur", "email": "ventas@maderas.com"}]

        VendorImporter(import_context).run(rows, {})

        vendors = mock_supabase.rows("vendors")
        assert len(vendors) == 1
        assert vendors[0]["email"] == "ventas@maderas.com"
        assert mock_supabase.counters[("company-1", "VND")] == 1

    def test_sequences_are_per_company(self, company, mock_supabase):
        VendorImporter(new_context("company-1")).run([{"proveedor": "A"}], {})
        VendorImporter(new_context("company-2")).run([{"proveedor": "B"}], {})

        numbers = {v["company_id"]: v["vendor_number"] for v in mock_supabase.rows("vendors")}
        assert numbers == {"company-1": "VND-000001", "company-2": "VND-000001"}


# ===================
# PRODUCTS
# ===================

class TestProductImporter:
    """Tests for ProductImporter.run"""

    def test_creates_product_with_defaults(self, import_context, mock_supabase):
        ProductImporter(import_context).run([{"nombre": "Zócalo"}], {})

        product = mock_supabase.rows("products")[0]
        assert product["name"] == "Zócalo"
        assert product["price"] == 0
        assert product["stock_quantity"] == 0
        assert product["unit"] == "unit"
        assert product["taxable"] is True
        assert product["active"] is True

    def test_upsert_by_sku(self, import_context, mock_supabase):
        mock_supabase.set_table_data("products", [
            {"id": "prod-1", "company_id": "company-1", "sku": "PT-001", "name": "Nombre viejo", "price": 10}
        ])
        rows = [{"codigo": "pt-001", "nombre": "Piso Nogal", "precio": "45.50", "stock": 120}]

        result = ProductImporter(import_context).run(rows, {})

        assert result.imported == 1
        products = mock_supabase.rows("products")
        assert len(products) == 1
        assert products[0]["name"] == "Piso Nogal"
        assert products[0]["price"] == 45.5
        assert products[0]["stock_quantity"] == 120

    def test_optional_numbers_not_guessed_from_row(self, import_context, mock_supabase):
        ProductImporter(import_context).run([{"nombre": "Adhesivo", "__EMPTY": 89}], {})

        product = mock_supabase.rows("products")[0]
        assert product["price"] == 89
        assert product["cost"] is None
        assert product["stock_quantity"] == 0

    def test_missing_name(self, import_context, mock_supabase):
        result = ProductImporter(import_context).run([{"precio": 10}], {})

        assert result.error_messages() == ["Fila 2: Nombre requerido"]
