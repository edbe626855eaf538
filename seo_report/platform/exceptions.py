from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from seo_report.features.report.exceptions import (
    MalformedURL,
    MissingModuleData,
    PdfExportError,
)
from seo_report.platform.logger import get_logger
from seo_report.platform.response import error_response

logger = get_logger("exception_handlers")


def add_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(
            error=str(exc.detail) or "Error",
            message=str(exc.detail) or "Error",
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            error="Invalid report data",
            message="Validation failed",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            # Raw input may hold values JSON cannot encode (Infinity, NaN)
            details=[
                {key: value for key, value in error.items() if key != "input"}
                for error in exc.errors()
            ],
        )

    @app.exception_handler(MissingModuleData)
    async def missing_module_handler(request: Request, exc: MissingModuleData):
        logger.warning(f"Rejected report request, missing modules: {exc.missing}")
        return error_response(error=exc.error, message=str(exc))

    @app.exception_handler(MalformedURL)
    async def malformed_url_handler(request: Request, exc: MalformedURL):
        logger.warning(f"Rejected report request, malformed url: {exc.url!r}")
        return error_response(error=exc.error, message=str(exc))

    @app.exception_handler(PdfExportError)
    async def pdf_export_handler(request: Request, exc: PdfExportError):
        logger.error(f"PDF export failed: {exc}")
        return error_response(
            error=exc.error,
            message=str(exc),
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return error_response(
            error="Failed to generate report",
            message=str(exc) or exc.__class__.__name__,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
