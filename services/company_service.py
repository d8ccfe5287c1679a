"""
Company access checks.
"""

from typing import Optional
import structlog

from config import get_supabase_client, store_error
from exceptions import CompanyNotFoundError

logger = structlog.get_logger(__name__)


class CompanyService:
    def __init__(self):
        self.db = get_supabase_client()
        self.table = "companies"
        self.members_table = "company_users"

    def get_for_user(self, company_id: str, user_id: str) -> dict:
        """
        Get a company the user belongs to.

        Returns:
            Company row

        Raises:
            CompanyNotFoundError: If the company doesn't exist or the user
                is not a member (both look the same to the caller)
        """
        try:
            membership = (
                self.db.table(self.members_table)
                .select("company_id")
                .eq("company_id", company_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
            if not membership.data:
                logger.info(
                    "company_access_denied",
                    company_id=company_id,
                    user_id=user_id
                )
                raise CompanyNotFoundError(company_id)

            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", company_id)
                .limit(1)
                .execute()
            )
        except CompanyNotFoundError:
            raise
        except Exception as e:
            logger.error(
                "get_company_failed",
                company_id=company_id,
                error=str(e)
            )
            raise store_error("select", e) from e

        if not result.data:
            raise CompanyNotFoundError(company_id)

        return result.data[0]


_service: Optional[CompanyService] = None


def get_company_service() -> CompanyService:
    global _service
    if _service is None:
        _service = CompanyService()
    return _service
