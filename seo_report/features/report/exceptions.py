from typing import Iterable


class ReportError(Exception):
    """Base class for report assembly and export failures."""

    error = "Report error"


class MissingModuleData(ReportError):
    """One or more of the four analysis modules was not supplied."""

    error = "Missing module data"

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            "All module data is required (technicalSeo, contentAudit, keywords, backlinks); "
            f"missing: {', '.join(self.missing)}"
        )


class MalformedURL(ReportError):
    """The source URL has no parseable scheme or host."""

    error = "Invalid URL"

    def __init__(self, url: str, reason: str = "URL must be absolute and include a hostname"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class PdfExportError(ReportError):
    """The headless browser could not turn the HTML document into a PDF."""

    error = "PDF generation failed"
