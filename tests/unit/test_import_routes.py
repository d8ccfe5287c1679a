"""
API tests for the import endpoints.

Go through FastAPI's TestClient with the in-memory store.
"""

import httpx
import pytest

from config import settings

IMPORT_URL = "/api/tools/excel/import"
JOBS_URL = "/api/import/jobs"
AUTH = {"X-User-Id": "user-1"}


def expense_body(**overrides) -> dict:
    body = {
        "type": "expenses",
        "data": [{"descripcion": "Pago renta", "monto": "$1,500.00", "fecha": "2025-03-15"}],
        "mappings": {},
        "companyId": "company-1",
    }
    body.update(overrides)
    return body


# ===================
# POST /api/tools/excel/import
# ===================

class TestImportEndpoint:

    def test_requires_user(self, test_client, company):
        response = test_client.post(IMPORT_URL, json=expense_body())

        assert response.status_code == 401
        assert response.json()["error"] == "No autorizado"

    def test_api_key_enforced_when_configured(self, test_client, company, monkeypatch):
        monkeypatch.setattr(settings, "api_key", "secret-key")

        rejected = test_client.post(IMPORT_URL, json=expense_body(), headers=AUTH)
        accepted = test_client.post(
            IMPORT_URL, json=expense_body(), headers={**AUTH, "X-API-Key": "secret-key"}
        )

        assert rejected.status_code == 401
        assert accepted.status_code == 200

    def test_empty_data(self, test_client, company):
        response = test_client.post(IMPORT_URL, json=expense_body(data=[]), headers=AUTH)

        assert response.status_code == 400
        assert response.json()["error"] == "Datos inválidos"

    def test_malformed_json(self, test_client, company):
        response = test_client.post(
            IMPORT_URL,
            content="{not json",
            headers={**AUTH, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Datos inválidos"

    def test_company_required(self, test_client, company):
        body = expense_body()
        del body["companyId"]

        response = test_client.post(IMPORT_URL, json=body, headers=AUTH)

        assert response.status_code == 400
        assert response.json()["error"] == "Se requiere ID de empresa"

    def test_unsupported_type(self, test_client, company):
        response = test_client.post(IMPORT_URL, json=expense_body(type="payroll"), headers=AUTH)

        assert response.status_code == 400
        assert response.json()["error"] == "Tipo de importación no soportado"

    def test_too_many_rows(self, test_client, company, monkeypatch):
        monkeypatch.setattr(settings, "import_max_rows", 1)
        body = expense_body(data=[{"monto": 1}, {"monto": 2}])

        response = test_client.post(IMPORT_URL, json=body, headers=AUTH)

        assert response.status_code == 400
        assert response.json()["code"] == "TOO_MANY_ROWS"

    def test_company_of_another_user(self, test_client, company):
        response = test_client.post(IMPORT_URL, json=expense_body(), headers={"X-User-Id": "user-2"})

        assert response.status_code == 404
        assert response.json()["error"] == "Empresa no encontrada"

    def test_imports_expense(self, test_client, company, mock_supabase):
        response = test_client.post(IMPORT_URL, json=expense_body(), headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "imported": 1,
            "errors": [],
            "message": "Se importaron 1 registros exitosamente",
        }
        assert mock_supabase.rows("expenses")[0]["amount"] == 1500.0

    def test_row_errors_still_200(self, test_client, company):
        body = expense_body(data=[{"descripcion": "Gasto sin monto"}])

        response = test_client.post(IMPORT_URL, json=body, headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["imported"] == 0
        assert data["errors"][0].startswith("Fila 2: Monto no encontrado")

    def test_store_outage(self, test_client, company, mock_supabase):
        mock_supabase.fail_on("expenses", "insert", httpx.ConnectError("connection refused"))

        response = test_client.post(IMPORT_URL, json=expense_body(), headers=AUTH)

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Error al importar datos"
        assert "connection refused" in data["details"]


# ===================
# GET /api/import/jobs
# ===================

class TestImportJobsEndpoint:

    def test_lists_jobs_newest_first(self, test_client, company):
        test_client.post(IMPORT_URL, json=expense_body(), headers=AUTH)
        test_client.post(IMPORT_URL, json=expense_body(type="customers", data=[{"nombre": "Acme"}]), headers=AUTH)

        response = test_client.get(JOBS_URL, params={"companyId": "company-1"}, headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [job["import_type"] for job in data["data"]] == ["customers", "expenses"]
        assert data["data"][0]["status"] == "COMPLETED"

    def test_company_required(self, test_client, company):
        response = test_client.get(JOBS_URL, headers=AUTH)

        assert response.status_code == 400

    def test_non_member(self, test_client, company):
        response = test_client.get(JOBS_URL, params={"companyId": "company-1"}, headers={"X-User-Id": "user-2"})

        assert response.status_code == 404


class TestHealth:

    def test_health(self, test_client, company):
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"]["companies_count"] == 1
