from fastapi import APIRouter, status

from seo_report.platform.config import settings
from seo_report.platform.response import api_response

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check():
    return api_response(
        data={
            "status": "ok",
            "service": settings.APP_NAME,
            "pdfExport": "enabled" if settings.PDF_EXPORT_ENABLED else "disabled",
        },
        message="Service is healthy",
        status_code=status.HTTP_200_OK,
    )
