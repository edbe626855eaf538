from seo_report.features.report.schemas.report import (
    BacklinksData,
    ContentAuditData,
    ExecutiveSummary,
    KeywordsData,
    Recommendation,
    Report,
    ReportStats,
    TechnicalSEOData,
)
from seo_report.features.report.schemas.request import ReportRequest, ReportResponse

__all__ = [
    "BacklinksData",
    "ContentAuditData",
    "ExecutiveSummary",
    "KeywordsData",
    "Recommendation",
    "Report",
    "ReportRequest",
    "ReportResponse",
    "ReportStats",
    "TechnicalSEOData",
]
