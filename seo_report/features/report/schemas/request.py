from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from seo_report.features.report.schemas.report import (
    BacklinksData,
    ContentAuditData,
    KeywordsData,
    ReportStats,
    TechnicalSEOData,
)


class ReportRequest(BaseModel):
    """
    Body of the report endpoints.

    Modules are optional at parse time so that an absent module reaches the
    assembler and is reported as missing by name instead of as a generic
    validation error.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "url": "https://example.com",
                "technicalSeo": {"performanceScore": 72, "...": "..."},
                "contentAudit": {"totalPages": 40, "...": "..."},
                "keywords": {"totalKeywords": 180, "...": "..."},
                "backlinks": {"totalBacklinks": 2400, "...": "..."},
            }
        },
    )

    url: Optional[str] = None
    technical_seo: Optional[TechnicalSEOData] = None
    content_audit: Optional[ContentAuditData] = None
    keywords: Optional[KeywordsData] = None
    backlinks: Optional[BacklinksData] = None

    def modules(self) -> Dict[str, Optional[BaseModel]]:
        return {
            "technicalSeo": self.technical_seo,
            "contentAudit": self.content_audit,
            "keywords": self.keywords,
            "backlinks": self.backlinks,
        }


class ReportResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    report_data: dict
    html_content: str
    pdf_generated: bool = False
    pdf_path: Optional[str] = None
    stats: Optional[ReportStats] = None


class ErrorOut(BaseModel):
    error: str
    message: str
    details: Optional[list] = Field(default=None)
