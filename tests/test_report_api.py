import json
import os

import pytest

from seo_report.features.report.exceptions import PdfExportError
from seo_report.features.report.routes.reports import get_pdf_converter
from seo_report.platform.config import Settings, get_settings, settings

REPORTS_URL = "/api/v1/reports"


class FakeConverter:
    calls = 0

    def convert(self, html: str) -> bytes:
        FakeConverter.calls += 1
        return b"%PDF-1.4 fake"


class FailingConverter:
    def convert(self, html: str) -> bytes:
        raise PdfExportError("PDF generation failed: chrome not found")


@pytest.fixture
def fake_converter(test_app):
    FakeConverter.calls = 0
    test_app.dependency_overrides[get_pdf_converter] = FakeConverter
    return FakeConverter


@pytest.fixture
def report_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "REPORT_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def pdf_disabled(test_app):
    test_app.dependency_overrides[get_settings] = lambda: Settings(PDF_EXPORT_ENABLED=False)


def test_generate_report(client, report_body):
    response = client.post(REPORTS_URL, json=report_body)
    assert response.status_code == 200

    payload = response.json()
    assert payload["success"] is True
    assert payload["pdfGenerated"] is False
    assert payload["reportData"]["domain"] == "example.com"
    assert payload["reportData"]["executiveSummary"]["overallHealth"] == "good"
    assert payload["reportData"]["recommendations"][0]["title"] == "Write Meta Descriptions"
    assert payload["htmlContent"].startswith("<!DOCTYPE html>")
    assert payload["stats"]["overallScore"] == 69
    assert payload["stats"]["moduleScores"]["technical"] == 84


def test_missing_modules_are_rejected(client, report_body):
    del report_body["contentAudit"]
    del report_body["keywords"]

    response = client.post(REPORTS_URL, json=report_body)
    assert response.status_code == 400

    payload = response.json()
    assert payload["error"] == "Missing module data"
    assert "contentAudit" in payload["message"]
    assert "keywords" in payload["message"]


def test_missing_url_is_rejected(client, report_body):
    del report_body["url"]

    response = client.post(REPORTS_URL, json=report_body)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid URL"


def test_malformed_url_is_rejected(client, report_body):
    report_body["url"] = "not a url"

    response = client.post(REPORTS_URL, json=report_body)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid URL"


def test_invalid_module_data_is_rejected(client, report_body):
    report_body["technicalSeo"]["performanceScore"] = 150

    response = client.post(REPORTS_URL, json=report_body)
    assert response.status_code == 422

    payload = response.json()
    assert payload["error"] == "Invalid report data"
    assert payload["details"]


def test_generate_report_with_pdf(client, report_body, fake_converter, report_dir):
    response = client.post(f"{REPORTS_URL}?pdf=true", json=report_body)
    assert response.status_code == 200

    payload = response.json()
    assert payload["pdfGenerated"] is True
    assert os.path.dirname(payload["pdfPath"]) == str(report_dir)
    with open(payload["pdfPath"], "rb") as handle:
        assert handle.read() == b"%PDF-1.4 fake"


def test_pdf_failure_still_returns_report(client, test_app, report_body, report_dir):
    test_app.dependency_overrides[get_pdf_converter] = FailingConverter

    response = client.post(f"{REPORTS_URL}?pdf=true", json=report_body)
    assert response.status_code == 200

    payload = response.json()
    assert payload["success"] is True
    assert payload["pdfGenerated"] is False
    assert payload["htmlContent"]


def test_pdf_flag_ignored_when_export_disabled(client, report_body, fake_converter, pdf_disabled):
    response = client.post(f"{REPORTS_URL}?pdf=true", json=report_body)
    assert response.status_code == 200
    assert response.json()["pdfGenerated"] is False
    assert fake_converter.calls == 0


def test_download_pdf(client, report_body, fake_converter):
    response = client.post(f"{REPORTS_URL}/pdf", json=report_body)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"].startswith("attachment; filename=seo-report-example-com-")
    assert response.content == b"%PDF-1.4 fake"


def test_download_pdf_when_export_fails(client, test_app, report_body):
    test_app.dependency_overrides[get_pdf_converter] = FailingConverter

    response = client.post(f"{REPORTS_URL}/pdf", json=report_body)
    assert response.status_code == 502
    assert response.json()["error"] == "PDF generation failed"


def test_download_pdf_when_export_disabled(client, report_body, fake_converter, pdf_disabled):
    response = client.post(f"{REPORTS_URL}/pdf", json=report_body)
    assert response.status_code == 503
    assert response.json()["message"] == "PDF export is disabled"
    assert fake_converter.calls == 0


def test_html_report(client, report_body):
    response = client.post(f"{REPORTS_URL}/html", json=report_body)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'id="executive-summary"' in response.text


@pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN"])
def test_non_finite_numbers_are_rejected(client, report_body, literal):
    body = json.dumps(report_body).replace('"change": 8.4', f'"change": {literal}')

    response = client.post(REPORTS_URL, content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 422

    payload = response.json()
    assert payload["error"] == "Invalid report data"
    assert payload["details"][0]["loc"][-1] == "change"


def test_error_bodies_are_documented(client):
    paths = client.get("/openapi.json").json()["paths"]

    report_responses = paths[REPORTS_URL]["post"]["responses"]
    pdf_responses = paths[f"{REPORTS_URL}/pdf"]["post"]["responses"]
    for code in ("400", "422"):
        schema = report_responses[code]["content"]["application/json"]["schema"]
        assert schema["$ref"].endswith("/ErrorOut")
    for code in ("502", "503"):
        assert pdf_responses[code]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorOut")
