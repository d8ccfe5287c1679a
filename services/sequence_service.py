"""
Human-readable sequential numbers (VND-000001, INV-000042).

Numbers come from the next_sequence_value() database function, which
increments a per-company counter row and returns the new value in one
statement. See sql/001_import_engine.sql.
"""

from typing import Optional
import structlog

from config import get_supabase_client, store_error
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)

VENDOR_SEQUENCE = "VND"
INVOICE_SEQUENCE = "INV"


def format_sequence_number(prefix: str, value: int, width: int = 6) -> str:
    """format_sequence_number("INV", 42) -> "INV-000042" """
    return f"{prefix}-{value:0{width}d}"


class SequenceService:
    def __init__(self):
        self.db = get_supabase_client()

    def next_value(self, company_id: str, sequence: str) -> int:
        """Atomically increment and return the company's counter for `sequence`."""
        try:
            result = self.db.rpc(
                "next_sequence_value",
                {"p_company_id": company_id, "p_sequence": sequence}
            ).execute()
        except Exception as e:
            logger.error(
                "sequence_allocation_failed",
                company_id=company_id,
                sequence=sequence,
                error=str(e)
            )
            raise store_error("rpc", e) from e

        value = result.data
        if isinstance(value, list):
            value = value[0] if value else None
        if isinstance(value, dict):
            value = next(iter(value.values()), None)
        if value is None:
            raise DatabaseError("rpc", f"next_sequence_value returned nothing for {sequence}")

        logger.debug(
            "sequence_allocated",
            company_id=company_id,
            sequence=sequence,
            value=value
        )
        return int(value)

    def next_number(self, company_id: str, prefix: str) -> str:
        return format_sequence_number(prefix, self.next_value(company_id, prefix))


_service: Optional[SequenceService] = None


def get_sequence_service() -> SequenceService:
    global _service
    if _service is None:
        _service = SequenceService()
    return _service
