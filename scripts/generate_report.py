#!/usr/bin/env python3
"""
Report Generator Script
Builds an SEO report from a JSON request file and writes it to disk

Usage:
    python scripts/generate_report.py request.json [--output-dir DIR] [--pdf]

The request file has the same shape as the body of POST /api/v1/reports:
    {"url": "...", "technicalSeo": {...}, "contentAudit": {...},
     "keywords": {...}, "backlinks": {...}}

Exit codes: 0 on success, 1 on unreadable input or PDF failure,
2 when the request is missing module data or has a malformed URL.
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from seo_report.features.report.exceptions import MalformedURL, MissingModuleData, PdfExportError
from seo_report.features.report.schemas.request import ReportRequest
from seo_report.features.report.services.assembler import assemble, report_stats
from seo_report.features.report.services.renderer import render
from seo_report.features.report.services.report_files import save_report_files
from seo_report.platform.config import settings


def load_request(path: Path) -> ReportRequest:
    with open(path, encoding="utf-8") as handle:
        return ReportRequest.model_validate(json.load(handle))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate an SEO report from analysis data")
    parser.add_argument("request", type=Path, help="Path to the JSON request file")
    parser.add_argument(
        "--output-dir",
        default=settings.REPORT_DIR,
        help=f"Directory for the generated files (default: {settings.REPORT_DIR})",
    )
    parser.add_argument("--pdf", action="store_true", help="Also print the report to PDF")
    args = parser.parse_args(argv)

    try:
        report_in = load_request(args.request)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"❌ Could not read {args.request}: {e}", file=sys.stderr)
        return 1

    try:
        if not report_in.url:
            raise MalformedURL("", "URL is required in request data")
        report = assemble(report_in.url, report_in.modules())
    except (MissingModuleData, MalformedURL) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    html = render(report, "html")
    pdf = None
    if args.pdf:
        try:
            pdf = render(report, "paginated")
        except PdfExportError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1

    saved = save_report_files(report, html, pdf, output_dir=args.output_dir)
    stats = report_stats(report)

    print(f"✅ Report generated for {report.domain}")
    print(f"   Overall score: {stats.overall_score}")
    print(f"   Health: {report.executive_summary.overall_health.value}")
    print(f"   Recommendations: {stats.recommendations}")
    print(f"📄 HTML: {saved.html_path}")
    print(f"📄 JSON: {saved.json_path}")
    if saved.pdf_path:
        print(f"📄 PDF:  {saved.pdf_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
