import json
import os
import re
from datetime import datetime
from typing import NamedTuple, Optional

from seo_report.features.report.schemas.report import Report
from seo_report.platform.config import settings
from seo_report.platform.logger import get_logger

logger = get_logger("report_files")


class SavedReportFiles(NamedTuple):
    html_path: str
    json_path: str
    pdf_path: Optional[str] = None


def report_basename(report: Report, stamp: Optional[datetime] = None) -> str:
    """seo-report-<domain-slug>-<timestamp>, safe for any filesystem. Stamped with analyzed_at."""
    timestamp = (stamp or report.analyzed_at).strftime("%Y-%m-%dT%H-%M-%S")
    domain = re.sub(r"[^a-zA-Z0-9]", "-", report.domain)
    return f"seo-report-{domain}-{timestamp}"


def save_report_files(
    report: Report,
    html: str,
    pdf: Optional[bytes] = None,
    output_dir: Optional[str] = None,
    stamp: Optional[datetime] = None,
) -> SavedReportFiles:
    output_dir = output_dir or settings.REPORT_DIR
    os.makedirs(output_dir, exist_ok=True)

    base_name = report_basename(report, stamp)

    html_path = os.path.join(output_dir, f"{base_name}.html")
    with open(html_path, "w", encoding="utf-8") as handle:
        handle.write(html)

    json_path = os.path.join(output_dir, f"{base_name}.json")
    with open(json_path, "w", encoding="utf-8") as handle:
        json.dump(report.to_wire(), handle, indent=2, ensure_ascii=False)

    pdf_path = None
    if pdf is not None:
        pdf_path = os.path.join(output_dir, f"{base_name}.pdf")
        with open(pdf_path, "wb") as handle:
            handle.write(pdf)

    logger.info(f"Report files saved: html={html_path} json={json_path} pdf={pdf_path}")
    return SavedReportFiles(html_path=html_path, json_path=json_path, pdf_path=pdf_path)
