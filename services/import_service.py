"""
Import orchestration: validates a request, runs the matching importer and
records the job.

Request-level problems raise before any row is touched. Row-level problems
end up in the response's errors list. A StoreUnavailableError (or any other
unexpected failure) mid-batch propagates; rows already written stay written.
"""

from typing import Any, Optional
import time
import structlog

from config import settings
from exceptions import (
    CompanyIdRequiredError,
    InvalidImportPayloadError,
    TooManyRowsError,
    UnsupportedImportTypeError,
)
from importers import ImportContext, get_importer
from models.imports import ImportRequest, ImportResponse, ImportType
from services.company_service import get_company_service
from services.import_job_service import get_import_job_service

logger = structlog.get_logger(__name__)


class ImportService:
    def __init__(self):
        self.companies = get_company_service()
        self.jobs = get_import_job_service()

    def validate(self, request: ImportRequest) -> list[dict[str, Any]]:
        """
        Check the request in the order the caller sees errors.

        Returns:
            The rows to import

        Raises:
            InvalidImportPayloadError: Missing type, or data not a non-empty list of objects
            CompanyIdRequiredError: Missing companyId
            UnsupportedImportTypeError: type outside ImportType
            TooManyRowsError: More rows than IMPORT_MAX_ROWS
        """
        data = request.data
        if not request.type or not isinstance(data, list) or not data:
            raise InvalidImportPayloadError()
        if not all(isinstance(row, dict) for row in data):
            raise InvalidImportPayloadError("every row must be an object")

        if not request.company_id:
            raise CompanyIdRequiredError()

        if request.type not in ImportType.values():
            raise UnsupportedImportTypeError(request.type, ImportType.values())

        if len(data) > settings.import_max_rows:
            raise TooManyRowsError(len(data), settings.import_max_rows)

        return data

    def run_import(self, request: ImportRequest, user_id: str) -> ImportResponse:
        """
        Import every row of the request for the caller's company.

        Raises:
            AppError subclasses for request-level failures (see validate)
            CompanyNotFoundError: Company missing or caller not a member
            StoreUnavailableError: Store unreachable mid-batch
        """
        rows = self.validate(request)
        company_id = request.company_id
        self.companies.get_for_user(company_id, user_id)

        mappings = request.clean_mappings()
        logger.info(
            "import_started",
            import_type=request.type,
            company_id=company_id,
            rows=len(rows),
            mapped_columns=len(mappings)
        )

        job_id = self.jobs.start(company_id, user_id, request.type, len(rows), mappings)
        context = ImportContext(company_id=company_id, user_id=user_id)
        importer = get_importer(request.type, context)

        started = time.monotonic()
        try:
            result = importer.run(rows, mappings)
        except Exception as e:
            self.jobs.finish(job_id, 0, [], error_message=str(e) or type(e).__name__)
            raise

        errors = result.error_messages()
        self.jobs.finish(job_id, result.imported, errors, skipped=result.skipped)

        logger.info(
            "import_completed",
            import_type=request.type,
            company_id=company_id,
            imported=result.imported,
            errors=len(errors),
            skipped=result.skipped,
            duration_ms=round((time.monotonic() - started) * 1000)
        )

        return ImportResponse.create(result.imported, errors)


_service: Optional[ImportService] = None


def get_import_service() -> ImportService:
    global _service
    if _service is None:
        _service = ImportService()
    return _service
