"""
Shared store access for tables whose rows belong to a company.

Every query is filtered by company_id. Failures are logged and re-raised
through store_error(), so an unreachable store aborts the request while a
failed statement surfaces as a DatabaseError.
"""

from typing import Optional
import structlog

from config import get_supabase_client, store_error
from utils.text_utils import escape_like

logger = structlog.get_logger(__name__)

LOOSE_MATCH_CANDIDATES = 20


def _matches_text(stored: Optional[str], value: str, contains: bool) -> bool:
    if stored is None:
        return False
    stored, value = str(stored).lower(), value.lower()
    return value in stored if contains else stored == value


class CompanyScopedService:
    """
    Base for per-table services.

    Subclasses set `table` and expose domain methods built on
    find_one / find_one_ilike / insert / update.
    """

    table: str = ""

    def __init__(self):
        self.db = get_supabase_client()

    # ===================
    # READ OPERATIONS
    # ===================

    def find_one(
        self,
        company_id: str,
        table: Optional[str] = None,
        **filters
    ) -> Optional[dict]:
        """First row of the company matching every equality filter, or None."""
        table = table or self.table
        try:
            query = self.db.table(table).select("*").eq("company_id", company_id)
            for column, value in filters.items():
                query = query.eq(column, value)
            result = query.limit(1).execute()
        except Exception as e:
            logger.error(
                "record_lookup_failed",
                table=table,
                filters=list(filters),
                error=str(e)
            )
            raise store_error("select", e) from e

        return result.data[0] if result.data else None

    def find_one_ilike(
        self,
        company_id: str,
        column: str,
        value: str,
        contains: bool = False,
        table: Optional[str] = None,
    ) -> Optional[dict]:
        """
        Case-insensitive match on a text column.

        Args:
            value: Literal text (wildcards are escaped)
            contains: Match value anywhere in the column instead of the whole column
        """
        table = table or self.table
        pattern = escape_like(value)
        if contains:
            pattern = f"%{pattern}%"

        # "*" can only be sent as a one-character wildcard, recheck candidates here
        loose = "*" in value

        try:
            result = (
                self.db.table(table)
                .select("*")
                .eq("company_id", company_id)
                .ilike(column, pattern)
                .limit(LOOSE_MATCH_CANDIDATES if loose else 1)
                .execute()
            )
        except Exception as e:
            logger.error(
                "record_lookup_failed",
                table=table,
                column=column,
                error=str(e)
            )
            raise store_error("select", e) from e

        if loose:
            return next(
                (row for row in result.data if _matches_text(row.get(column), value, contains)),
                None
            )
        return result.data[0] if result.data else None

    # ===================
    # WRITE OPERATIONS
    # ===================

    def insert(self, row: dict, table: Optional[str] = None) -> dict:
        table = table or self.table
        try:
            result = self.db.table(table).insert(row).execute()
        except Exception as e:
            logger.error("record_insert_failed", table=table, error=str(e))
            raise store_error("insert", e) from e

        if not result.data:
            raise store_error("insert", RuntimeError(f"No row returned from {table} insert"))
        return result.data[0]

    def update(self, record_id: str, row: dict, table: Optional[str] = None) -> dict:
        table = table or self.table
        try:
            result = (
                self.db.table(table)
                .update(row)
                .eq("id", record_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "record_update_failed",
                table=table,
                record_id=record_id,
                error=str(e)
            )
            raise store_error("update", e) from e

        return result.data[0] if result.data else {"id": record_id, **row}
