"""
Test data factories.

Uses factory pattern to generate consistent store rows.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4


class CompanyFactory:
    """
    Factory for company rows and memberships.

    Usage:
        company = CompanyFactory.create()
        member = CompanyFactory.membership(company["id"], "user-1")
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(cls, id: Optional[str] = None, name: Optional[str] = None) -> dict:
        n = cls._next_counter()
        return {
            "id": id or str(uuid4()),
            "name": name or f"Empresa {n}",
            "created_at": datetime(2025, 1, 1).isoformat(),
        }

    @classmethod
    def membership(cls, company_id: str, user_id: str, role: str = "OWNER") -> dict:
        return {
            "id": str(uuid4()),
            "company_id": company_id,
            "user_id": user_id,
            "role": role,
        }


class CustomerFactory:
    """
    Factory for existing customer rows.

    Usage:
        customer = CustomerFactory.create(company_id="company-1", name="Acme")
    """

    _counter = 0

    @classmethod
    def create(
        cls,
        company_id: str = "company-1",
        id: Optional[str] = None,
        name: Optional[str] = None,
        email: Optional[str] = None,
        country: str = "US",
    ) -> dict:
        cls._counter += 1
        return {
            "id": id or str(uuid4()),
            "company_id": company_id,
            "name": name or f"Cliente {cls._counter}",
            "email": email,
            "country": country,
        }


class VendorFactory:
    """Factory for existing vendor rows."""

    _counter = 0

    @classmethod
    def create(
        cls,
        company_id: str = "company-1",
        id: Optional[str] = None,
        name: Optional[str] = None,
        vendor_number: Optional[str] = None,
    ) -> dict:
        cls._counter += 1
        return {
            "id": id or str(uuid4()),
            "company_id": company_id,
            "name": name or f"Proveedor {cls._counter}",
            "vendor_number": vendor_number or f"VND-{cls._counter:06d}",
            "country": "US",
        }


class ExpenseCategoryFactory:
    """Factory for expense_categories rows."""

    @classmethod
    def create(cls, name: str, company_id: str = "company-1", id: Optional[str] = None) -> dict:
        return {
            "id": id or str(uuid4()),
            "company_id": company_id,
            "name": name,
            "type": "OTHER",
        }
