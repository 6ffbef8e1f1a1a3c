"""Unit tests for report API endpoints."""

from datetime import datetime, timezone

import pytest

OWNER_A = {"X-User-Id": "owner-a"}
OWNER_B = {"X-User-Id": "owner-b"}


def report_payload(**overrides):
    payload = {
        "name": "January safety",
        "type": "Safety Analysis",
        "date_range": {"from": "2025-01-01", "to": "2025-01-31"},
        "format": "pdf",
    }
    payload.update(overrides)
    return payload


class TestGenerateReport:
    """Test cases for POST /api/reports/generate."""

    @pytest.mark.asyncio
    async def test_generate_report_success(self, test_client_with_db, seed_query):
        """Test a report is generated and completed synchronously."""
        await seed_query(created_at=datetime(2025, 1, 15, 12, tzinfo=timezone.utc), flagged=True)
        await seed_query(created_at=datetime(2025, 2, 1, tzinfo=timezone.utc))

        response = await test_client_with_db.post(
            "/api/reports/generate", json=report_payload(), headers=OWNER_A
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "completed"
        assert data["type"] == "Safety Analysis"
        assert data["format"] == "pdf"
        assert data["date_range"] == {"from": "2025-01-01", "to": "2025-01-31"}
        assert data["data"]["total_count"] == 1
        assert data["data"]["flagged_count"] == 1
        assert len(data["data"]["daily_stats"]) == 31
        assert data["file_size_bytes"] > 0
        assert data["download_count"] == 0
        assert data["completed_at"] is not None

    @pytest.mark.asyncio
    async def test_generate_report_inverted_range(self, test_client_with_db):
        """Test an inverted date range is rejected at the boundary."""
        response = await test_client_with_db.post(
            "/api/reports/generate",
            json=report_payload(date_range={"from": "2025-02-01", "to": "2025-01-01"}),
            headers=OWNER_A,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"type": "Quarterly Review"},
            {"format": "docx"},
            {"name": ""},
            {"date_range": {"from": "2025-13-01", "to": "2025-12-31"}},
        ],
    )
    async def test_generate_report_invalid_body(self, test_client_with_db, overrides):
        response = await test_client_with_db.post(
            "/api/reports/generate", json=report_payload(**overrides), headers=OWNER_A
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_generate_report_blank_name(self, test_client_with_db):
        """Test a whitespace-only name fails service validation."""
        response = await test_client_with_db.post(
            "/api/reports/generate", json=report_payload(name="   "), headers=OWNER_A
        )

        assert response.status_code == 400
        assert response.json()["type"] == "ValidationError"


class TestReportAccessAPI:
    """Test cases for reading, listing and downloading reports."""

    @pytest.mark.asyncio
    async def test_get_report(self, test_client_with_db):
        created = await test_client_with_db.post(
            "/api/reports/generate", json=report_payload(), headers=OWNER_A
        )
        report_id = created.json()["id"]

        response = await test_client_with_db.get(f"/api/reports/{report_id}", headers=OWNER_A)
        foreign = await test_client_with_db.get(f"/api/reports/{report_id}", headers=OWNER_B)

        assert response.status_code == 200
        assert response.json()["data"] == created.json()["data"]
        assert foreign.status_code == 404
        assert foreign.json()["type"] == "ReportNotFoundError"

    @pytest.mark.asyncio
    async def test_download_report(self, test_client_with_db):
        """Test downloads return data and increment the counter."""
        created = await test_client_with_db.post(
            "/api/reports/generate", json=report_payload(format="xlsx"), headers=OWNER_A
        )
        report_id = created.json()["id"]

        first = await test_client_with_db.post(f"/api/reports/{report_id}/download", headers=OWNER_A)
        second = await test_client_with_db.post(f"/api/reports/{report_id}/download", headers=OWNER_A)

        assert first.status_code == 200
        assert first.json()["format"] == "xlsx"
        assert second.json()["data"] == created.json()["data"]

        report = await test_client_with_db.get(f"/api/reports/{report_id}", headers=OWNER_A)
        assert report.json()["download_count"] == 2

    @pytest.mark.asyncio
    async def test_download_missing_report(self, test_client_with_db):
        response = await test_client_with_db.post("/api/reports/missing/download", headers=OWNER_A)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_download_other_owners_report(self, test_client_with_db):
        """Test another owner cannot download a report or bump its counter."""
        created = await test_client_with_db.post(
            "/api/reports/generate", json=report_payload(), headers=OWNER_A
        )
        report_id = created.json()["id"]

        response = await test_client_with_db.post(f"/api/reports/{report_id}/download", headers=OWNER_B)

        assert response.status_code == 404
        assert response.json()["type"] == "ReportNotFoundError"
        report = await test_client_with_db.get(f"/api/reports/{report_id}", headers=OWNER_A)
        assert report.json()["download_count"] == 0

    @pytest.mark.asyncio
    async def test_list_reports(self, test_client_with_db):
        """Test list entries carry display fields but no data."""
        await test_client_with_db.post(
            "/api/reports/generate", json=report_payload(name="first"), headers=OWNER_A
        )
        await test_client_with_db.post(
            "/api/reports/generate",
            json=report_payload(name="second", type="Risk Assessment", format="csv"),
            headers=OWNER_A,
        )
        await test_client_with_db.post(
            "/api/reports/generate", json=report_payload(name="foreign"), headers=OWNER_B
        )

        response = await test_client_with_db.get("/api/reports/", headers=OWNER_A)

        assert response.status_code == 200
        data = response.json()
        assert data["pagination"]["total"] == 2
        assert {r["name"] for r in data["reports"]} == {"first", "second"}
        for entry in data["reports"]:
            assert "data" not in entry
            assert entry["format"] in {"PDF", "CSV"}
            assert entry["size"].endswith(("Bytes", "KB"))
            assert entry["status"] == "completed"

        filtered = await test_client_with_db.get(
            "/api/reports/", params={"type": "Risk Assessment"}, headers=OWNER_A
        )
        assert [r["name"] for r in filtered.json()["reports"]] == ["second"]

        by_status = await test_client_with_db.get(
            "/api/reports/", params={"status": "failed"}, headers=OWNER_A
        )
        assert by_status.json()["reports"] == []

    @pytest.mark.asyncio
    async def test_list_reports_bad_status(self, test_client_with_db):
        response = await test_client_with_db.get(
            "/api/reports/", params={"status": "archived"}, headers=OWNER_A
        )

        assert response.status_code == 422


class TestFailedReportAPI:
    """Test cases for reports whose generation fails."""

    @pytest.mark.asyncio
    async def test_failed_report_cannot_be_downloaded(self, test_client_with_db, seed_query):
        """Test a report over the record cap is failed and answers 409 on download."""
        from fastapi import Depends

        from backend.app.api.deps import get_report_builder
        from backend.app.db.base import get_db
        from backend.app.main import app
        from backend.app.services.report_builder import ReportBuilder

        def capped_builder(db=Depends(get_db)):
            return ReportBuilder(db, tz="UTC", max_records=1)

        app.dependency_overrides[get_report_builder] = capped_builder
        for day in (2, 3):
            await seed_query(created_at=datetime(2025, 1, day, tzinfo=timezone.utc))

        created = await test_client_with_db.post(
            "/api/reports/generate", json=report_payload(), headers=OWNER_A
        )

        assert created.status_code == 201
        report = created.json()
        assert report["status"] == "failed"
        assert report["data"] is None
        assert report["error_message"] == "Report range contains 2 records, limit is 1"

        download = await test_client_with_db.post(
            f"/api/reports/{report['id']}/download", headers=OWNER_A
        )
        assert download.status_code == 409
        assert download.json()["type"] == "ReportNotReadyError"
