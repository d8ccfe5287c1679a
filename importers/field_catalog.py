"""
Synonym tables for every importable field.

Each list is a CandidateKeySet: order is priority, earlier synonyms win
when several columns match. Spanish and English spellings are both listed
because spreadsheets arrive in either language, with or without accents.
"""

from dataclasses import dataclass


# ===================
# CUSTOMERS
# ===================

CUSTOMER_KEYS: dict[str, list[str]] = {
    "name": ["name", "nombre", "customer", "cliente", "company", "empresa"],
    "email": ["email", "correo", "e-mail"],
    "phone": ["phone", "telefono", "teléfono", "tel", "mobile", "celular"],
    "address": ["address", "direccion", "dirección", "domicilio"],
    "city": ["city", "ciudad"],
    "state": ["state", "estado", "provincia"],
    "zip_code": ["zip", "zipcode", "zip_code", "codigo_postal", "cp"],
    "country": ["country", "pais", "país"],
    "tax_id": ["tax_id", "taxid", "rfc", "ein", "nit", "rut"],
    "notes": ["notes", "notas", "observaciones", "comments"],
}

# ===================
# VENDORS
# ===================

VENDOR_KEYS: dict[str, list[str]] = {
    "name": ["name", "nombre", "vendor", "proveedor", "supplier", "empresa"],
    "email": ["email", "correo", "e-mail"],
    "phone": ["phone", "telefono", "teléfono", "tel"],
    "address": ["address", "direccion", "dirección"],
    "city": ["city", "ciudad"],
    "state": ["state", "estado"],
    "country": ["country", "pais", "país"],
    "tax_id": ["tax_id", "taxid", "rfc", "ein"],
    "notes": ["notes", "notas", "observaciones"],
}

# ===================
# PRODUCTS
# ===================

PRODUCT_KEYS: dict[str, list[str]] = {
    "name": ["name", "nombre", "product", "producto", "item", "articulo"],
    "description": ["description", "descripcion", "descripción", "detalle"],
    "sku": ["sku", "codigo", "código", "code", "barcode"],
    "price": ["price", "precio", "unit_price", "precio_unitario", "valor"],
    "cost": ["cost", "costo", "purchase_price", "precio_compra"],
    "stock": ["stock", "quantity", "cantidad", "inventario", "qty"],
    "min_stock": ["min_stock", "stock_minimo", "reorder_level"],
    "unit": ["unit", "unidad", "uom"],
}

# ===================
# EXPENSES
# ===================

EXPENSE_KEYS: dict[str, list[str]] = {
    "description": [
        "description", "descripcion", "descripción", "concepto", "detalle",
        "memo", "nota", "notas", "observacion", "observaciones", "motivo", "razon",
        "pago", "ingreso", "gasto", "egreso", "mes", "mes2", "periodo",
        "pagos a cesar", "pagos del seguro", "pagos de la camioneta", "ingresos mensuales",
    ],
    "amount": [
        "amount", "monto", "total", "importe", "valor", "precio", "costo",
        "subtotal", "neto", "bruto", "pago", "cobro", "gasto", "egreso",
        "cantidad", "cantidades", "sum", "suma", "money", "dinero", "expense", "cost",
        "total gastos", "total ingresos", "pagos", "ingresos mensuales bruto",
        "pagos a cesar totales", "pagos de la camioneta", "pagos del seguro",
        "total ganancias", "ganancias", "ingresos", "egresos", "declarado",
    ],
    "date": [
        "date", "fecha", "date_expense", "fecha_gasto", "dia", "day",
        "fecha_pago", "payment_date", "created", "creado", "mes", "mes2", "semana",
        "mayo", "junio", "julio", "agosto", "septiembre", "octubre", "noviembre",
        "diciembre", "enero", "febrero", "marzo", "abril", "periodo", "año",
    ],
    "category": ["category", "categoria", "categoría", "tipo"],
    "vendor": ["vendor", "proveedor", "supplier", "empresa"],
    "payment_method": ["payment_method", "metodo_pago", "forma_pago"],
}

# ===================
# INCOME
# ===================

INCOME_KEYS: dict[str, list[str]] = {
    "description": [
        "description", "descripcion", "descripción", "concepto", "detalle",
        "servicio", "tipo", "ingreso", "fuente", "origen", "mes", "periodo",
    ],
    "amount": [
        "amount", "monto", "total", "importe", "valor", "precio",
        "ingresos", "ingreso", "cobro", "venta", "ganancias", "ganancia",
        "cantidades", "cantidad", "ingresos mensuales bruto", "total ingresos",
        "bruto", "neto", "revenue", "income",
    ],
    "date": [
        "date", "fecha", "mes", "mes2", "periodo", "semana", "año",
        "fecha_ingreso", "fecha_pago", "fecha_cobro",
    ],
    "customer": ["customer", "cliente", "client", "pagador", "de quien", "origen", "fuente"],
    "category": ["category", "categoria", "categoría", "tipo", "fuente", "origen"],
}

# ===================
# INVOICES
# ===================

INVOICE_KEYS: dict[str, list[str]] = {
    "customer": ["customer", "cliente", "client", "nombre_cliente"],
    "total": ["total", "amount", "monto", "importe"],
    "date": ["date", "fecha", "invoice_date", "fecha_factura"],
    "notes": ["notes", "notas", "observaciones"],
}


CANDIDATE_KEYS: dict[str, dict[str, list[str]]] = {
    "customers": CUSTOMER_KEYS,
    "vendors": VENDOR_KEYS,
    "products": PRODUCT_KEYS,
    "expenses": EXPENSE_KEYS,
    "income": INCOME_KEYS,
    "invoices": INVOICE_KEYS,
}


# ===================
# MAPPING SUGGESTIONS
# ===================

@dataclass(frozen=True)
class ImportField:
    """A canonical field offered to the user when mapping columns."""
    field: str
    label: str
    required: bool
    aliases: tuple[str, ...]


IMPORT_FIELDS: dict[str, list[ImportField]] = {
    "customers": [
        ImportField("name", "Nombre", True, ("nombre", "cliente", "customer", "company", "empresa")),
        ImportField("email", "Email", False, ("correo", "e-mail", "mail")),
        ImportField("phone", "Teléfono", False, ("telefono", "teléfono", "tel", "mobile", "celular")),
        ImportField("address", "Dirección", False, ("direccion", "dirección", "domicilio")),
        ImportField("city", "Ciudad", False, ("ciudad",)),
        ImportField("state", "Estado", False, ("estado", "provincia")),
        ImportField("tax_id", "RFC/Tax ID", False, ("rfc", "ein", "nit", "rut", "taxid")),
    ],
    "vendors": [
        ImportField("name", "Nombre", True, ("nombre", "proveedor", "vendor", "supplier", "empresa")),
        ImportField("email", "Email", False, ("correo", "e-mail", "mail")),
        ImportField("phone", "Teléfono", False, ("telefono", "teléfono", "tel")),
        ImportField("address", "Dirección", False, ("direccion", "dirección")),
    ],
    "products": [
        ImportField("name", "Nombre", True, ("nombre", "producto", "product", "item", "articulo")),
        ImportField("sku", "SKU/Código", False, ("codigo", "código", "code", "barcode")),
        ImportField("price", "Precio", False, ("precio", "unit_price", "precio_unitario", "valor")),
        ImportField("cost", "Costo", False, ("costo", "purchase_price", "precio_compra")),
        ImportField("stock", "Stock", False, ("quantity", "cantidad", "inventario", "qty")),
        ImportField("description", "Descripción", False, ("descripcion", "descripción", "detalle")),
    ],
    "expenses": [
        ImportField("amount", "Monto/Cantidades", True, (
            "monto", "total", "importe", "valor", "cantidades", "cantidad", "precio", "costo",
            "total gastos", "pagos a cesar totales", "pagos de la camioneta", "pagos del seguro",
            "ingresos mensuales bruto", "ganancias",
        )),
        ImportField("description", "Descripción", False, (
            "descripcion", "descripción", "concepto", "detalle", "pago", "ingreso", "gasto", "mes", "periodo",
        )),
        ImportField("date", "Fecha/Mes", False, (
            "fecha", "date_expense", "fecha_gasto", "mes", "mes2", "semana", "periodo", "año",
        )),
        ImportField("category", "Categoría", False, (
            "categoria", "categoría", "tipo", "total gastos", "observaciones",
            "pagos a cesar", "pagos del seguro", "pagos de la camioneta",
        )),
        ImportField("vendor", "Proveedor", False, ("proveedor", "supplier", "empresa", "a quien", "beneficiario")),
    ],
    "income": [
        ImportField("amount", "Monto", True, (
            "monto", "total", "importe", "valor", "cantidades", "ingresos", "ingresos mensuales bruto",
            "ganancias", "ingreso", "cobro", "venta",
        )),
        ImportField("description", "Descripción", False, (
            "descripcion", "descripción", "concepto", "detalle", "ingreso", "tipo", "servicio",
        )),
        ImportField("date", "Fecha/Mes", False, ("fecha", "mes", "mes2", "periodo", "semana", "año")),
        ImportField("category", "Categoría", False, ("categoria", "categoría", "tipo", "fuente", "origen", "cliente")),
        ImportField("customer", "Cliente", False, ("cliente", "customer", "pagador", "de quien", "origen")),
    ],
    "invoices": [
        ImportField("customer", "Cliente", True, ("cliente", "client", "nombre_cliente")),
        ImportField("total", "Total", True, ("amount", "monto", "importe")),
        ImportField("date", "Fecha", False, ("fecha", "invoice_date", "fecha_factura")),
        ImportField("notes", "Notas", False, ("notas", "observaciones", "comments")),
    ],
}


# Header keywords used to guess what a whole sheet contains
DETECTION_PATTERNS: dict[str, list[str]] = {
    "invoices": ["invoice", "factura", "total", "client", "cliente", "amount", "monto", "date", "fecha", "due"],
    "expenses": ["expense", "gasto", "vendor", "proveedor", "category", "categoría", "amount", "receipt"],
    "customers": ["customer", "cliente", "name", "nombre", "email", "phone", "address", "dirección"],
    "products": ["product", "producto", "sku", "price", "precio", "stock", "quantity", "cantidad"],
    "transactions": ["transaction", "transacción", "debit", "credit", "balance", "account", "cuenta"],
}
