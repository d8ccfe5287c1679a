"""
Import API routes.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from exceptions import AppError, CompanyIdRequiredError
from models.imports import ImportJobListResponse, ImportRequest, ImportResponse
from routes.auth import get_current_user_id
from services.company_service import get_company_service
from services.import_job_service import get_import_job_service
from services.import_service import get_import_service

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """
    Convert exception to JSON response.

    Client errors keep their own message; anything that fails server-side
    is reported as "Error al importar datos" with the cause in details.
    """
    if isinstance(e, AppError) and e.status_code < 500:
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )

    message = e.message if isinstance(e, AppError) else str(e)
    logger.error("import_failed", error=message, type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Error al importar datos",
            "details": message or "Error desconocido"
        }
    )


# ===================
# ROUTES
# ===================

@router.post("/api/tools/excel/import", response_model=ImportResponse)
async def import_data(
    request: ImportRequest,
    user_id: str = Depends(get_current_user_id),
):
    """
    Import spreadsheet rows as customers, expenses, income, products,
    invoices or vendors.

    Returns 200 with per-row errors when some rows fail.
    """
    try:
        service = get_import_service()
        return service.run_import(request, user_id)
    except Exception as e:
        return handle_error(e)


@router.get("/api/import/jobs", response_model=ImportJobListResponse)
async def list_import_jobs(
    company_id: Optional[str] = Query(None, alias="companyId"),
    limit: int = Query(50, ge=1, le=50, description="Maximum jobs to return"),
    user_id: str = Depends(get_current_user_id),
):
    """Latest import jobs of a company the caller belongs to."""
    try:
        if not company_id:
            raise CompanyIdRequiredError()

        get_company_service().get_for_user(company_id, user_id)
        jobs = get_import_job_service().list_for_company(company_id, limit=limit)
        return ImportJobListResponse(data=jobs, total=len(jobs))
    except Exception as e:
        return handle_error(e)
