from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse, JSONResponse, Response

from seo_report.features.report.exceptions import MalformedURL, PdfExportError
from seo_report.features.report.schemas.report import Report
from seo_report.features.report.schemas.request import ErrorOut, ReportRequest, ReportResponse
from seo_report.features.report.services.assembler import assemble, report_stats
from seo_report.features.report.services.pdf_export import ChromePdfConverter, PdfConverter
from seo_report.features.report.services.renderer import render
from seo_report.features.report.services.report_files import report_basename, save_report_files
from seo_report.platform.config import Settings, get_settings
from seo_report.platform.logger import get_logger

logger = get_logger("report_routes")
router = APIRouter(prefix="/reports", tags=["reports"])

ERROR_RESPONSES = {
    400: {"model": ErrorOut, "description": "Missing module data or malformed URL"},
    422: {"model": ErrorOut, "description": "Invalid report data"},
}
PDF_ERROR_RESPONSES = {
    **ERROR_RESPONSES,
    502: {"model": ErrorOut, "description": "PDF generation failed"},
    503: {"model": ErrorOut, "description": "PDF export is disabled"},
}


def get_pdf_converter() -> PdfConverter:
    return ChromePdfConverter()


def _build_report(report_in: ReportRequest) -> Report:
    if not report_in.url:
        raise MalformedURL("", "URL is required in request data")
    return assemble(report_in.url, report_in.modules())


@router.post(
    "",
    response_model=ReportResponse,
    response_model_by_alias=True,
    responses=ERROR_RESPONSES,
)
def generate_report(
    report_in: ReportRequest,
    pdf: bool = Query(False, description="Also print the report to PDF and store it"),
    converter: PdfConverter = Depends(get_pdf_converter),
    settings: Settings = Depends(get_settings),
):
    report = _build_report(report_in)
    logger.info(f"Generating report for {report.domain}")

    html = render(report, "html")

    pdf_generated = False
    pdf_path = None
    if pdf and settings.PDF_EXPORT_ENABLED:
        try:
            pdf_bytes = render(report, "paginated", converter=converter)
            saved = save_report_files(report, html, pdf_bytes)
            pdf_generated = True
            pdf_path = saved.pdf_path
        except PdfExportError as e:
            logger.warning(f"PDF export failed for {report.domain}: {e}")
    elif pdf:
        logger.info("PDF export requested but disabled by configuration")

    body = ReportResponse(
        success=True,
        report_data=report.to_wire(),
        html_content=html,
        pdf_generated=pdf_generated,
        pdf_path=pdf_path,
        stats=report_stats(report),
    )
    return JSONResponse(content=body.model_dump(mode="json", by_alias=True))


@router.post("/html", response_class=HTMLResponse, responses=ERROR_RESPONSES)
def generate_html_report(report_in: ReportRequest):
    report = _build_report(report_in)
    return HTMLResponse(content=render(report, "html"))


@router.post("/pdf", response_class=Response, responses=PDF_ERROR_RESPONSES)
def generate_pdf_report(
    report_in: ReportRequest,
    converter: PdfConverter = Depends(get_pdf_converter),
    settings: Settings = Depends(get_settings),
):
    if not settings.PDF_EXPORT_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="PDF export is disabled",
        )

    report = _build_report(report_in)
    pdf_bytes = render(report, "paginated", converter=converter)
    filename = f"{report_basename(report)}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
