"""
Import job history: one import_jobs row per import request.
"""

from datetime import datetime, timezone
from typing import Optional
import structlog

from config import get_supabase_client, settings, store_error
from models.imports import ImportJobResponse, ImportJobStatus

logger = structlog.get_logger(__name__)


class ImportJobService:
    def __init__(self):
        self.db = get_supabase_client()
        self.table = "import_jobs"

    def start(
        self,
        company_id: str,
        user_id: Optional[str],
        import_type: str,
        total_rows: int,
        mappings: dict[str, str],
    ) -> Optional[str]:
        """
        Create a PROCESSING job and return its id.

        Best effort like finish(): when the job row cannot be written the
        failure is logged and None is returned, so the import still runs.
        """
        try:
            result = self.db.table(self.table).insert({
                "company_id": company_id,
                "user_id": user_id,
                "import_type": import_type,
                "status": ImportJobStatus.PROCESSING.value,
                "total_rows": total_rows,
                "mappings": mappings,
            }).execute()
            job_id = result.data[0]["id"]
        except Exception as e:
            logger.warning(
                "failed_to_start_import_job",
                company_id=company_id,
                import_type=import_type,
                log_error=str(e)
            )
            return None

        logger.debug("import_job_started", job_id=job_id, import_type=import_type)
        return job_id

    def finish(
        self,
        job_id: Optional[str],
        imported: int,
        errors: list[str],
        skipped: int = 0,
        error_message: Optional[str] = None,
    ) -> None:
        """
        Close a job with its counts.

        The job is FAILED when the batch aborted or no row imported despite
        errors, COMPLETED otherwise. Recording is best effort: a failure
        here is logged and never masks the import result. Does nothing
        when the job was never created.
        """
        if job_id is None:
            return

        failed = error_message is not None or (imported == 0 and bool(errors))
        status = ImportJobStatus.FAILED if failed else ImportJobStatus.COMPLETED
        limit = settings.import_job_error_limit

        try:
            self.db.table(self.table).update({
                "status": status.value,
                "processed_rows": imported + len(errors) + skipped,
                "success_rows": imported,
                "error_rows": len(errors),
                "skipped_rows": skipped,
                "errors": errors[:limit],
                "error_message": error_message[:2000] if error_message else None,
                "completed_at": datetime.now(timezone.utc).isoformat(),
            }).eq("id", job_id).execute()
            logger.info(
                "import_job_finished",
                job_id=job_id,
                status=status.value,
                imported=imported,
                errors=len(errors)
            )
        except Exception as e:
            logger.warning(
                "failed_to_record_import_job",
                job_id=job_id,
                log_error=str(e)
            )

    def list_for_company(self, company_id: str, limit: int = 50) -> list[ImportJobResponse]:
        """Latest jobs of a company, newest first."""
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("company_id", company_id)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            logger.error("list_import_jobs_failed", company_id=company_id, error=str(e))
            raise store_error("select", e) from e

        return [ImportJobResponse(**row) for row in result.data]


_service: Optional[ImportJobService] = None


def get_import_job_service() -> ImportJobService:
    global _service
    if _service is None:
        _service = ImportJobService()
    return _service
