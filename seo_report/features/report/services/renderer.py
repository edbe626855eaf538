"""
HTML rendering of a finished report.

Every section of the document has its own Jinja2 template under
``features/report/template/sections`` and its own ``render_<section>``
function, so each can be rendered and tested in isolation. ``render_html``
stitches them together in a fixed order inside ``base.html``.

Number formatting is fixed and locale independent: percentages render as a
rounded integer followed by ``%`` and counts use comma thousands separators.
"""
import os
import re
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from pydantic import BaseModel, field_validator

from seo_report.features.report.schemas.report import Priority, Report, VitalScore
from seo_report.features.report.services.pdf_export import ChromePdfConverter, PdfConverter
from seo_report.platform.config import settings
from seo_report.platform.events import EventSink, default_sink

current_dir = os.path.dirname(os.path.abspath(__file__))
template_dir = os.path.join(current_dir, "../template")

if not os.path.exists(template_dir):
    template_dir = os.path.join(os.getcwd(), "seo_report/features/report/template")

# Colour scale for score bars and cards; wider bands than the executive
# summary's HEALTH_THRESHOLDS (85/70/50).
DISPLAY_SCORE_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (80, "excellent"),
    (60, "good"),
    (40, "fair"),
)

TOP_PAGES_ROWS = 10
KEYWORD_ROWS = 5
REFERRING_DOMAIN_ROWS = 10

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


class RenderOptions(BaseModel):
    report_title: str = settings.REPORT_TITLE
    brand_color: str = settings.BRAND_COLOR

    @field_validator("brand_color")
    @classmethod
    def brand_color_is_hex(cls, v: str) -> str:
        if not _HEX_COLOR.match(v):
            raise ValueError(f"brand_color must be a hex colour like #667eea, got {v!r}")
        return v


# ── Filters ───────────────────────────────────────────────────────────────────


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def _number(value: Union[int, float]) -> str:
    if isinstance(value, float) and not value.is_integer():
        return f"{value:g}"
    return str(int(value))


def format_percent(value: Union[int, float]) -> str:
    return f"{_round_half_up(value)}%"


def format_thousands(value: Union[int, float]) -> str:
    return f"{_round_half_up(value):,}"


def format_signed(value: Union[int, float]) -> str:
    return f"+{_number(value)}" if value > 0 else _number(value)


def format_signed_percent(value: Union[int, float]) -> str:
    rounded = _round_half_up(value)
    return f"+{rounded}%" if rounded > 0 else f"{rounded}%"


def display_score_level(score: Union[int, float]) -> str:
    for minimum, label in DISPLAY_SCORE_THRESHOLDS:
        if score >= minimum:
            return label
    return "poor"


def score_class(score: Union[int, float]) -> str:
    return f"score-{display_score_level(score)}"


def vital_class(score: VitalScore) -> str:
    if score == VitalScore.GOOD:
        return "good"
    if score == VitalScore.NEEDS_IMPROVEMENT:
        return "fair"
    return "poor"


def priority_class(priority: Priority) -> str:
    if priority == Priority.HIGH:
        return "poor"
    if priority == Priority.MEDIUM:
        return "fair"
    return "good"


def truncate_url(url: str, limit: int = 50) -> str:
    return url[:limit] + "..." if len(url) > limit else url


def report_date(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}"


env = Environment(
    loader=FileSystemLoader(template_dir),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
env.filters.update(
    percent=format_percent,
    thousands=format_thousands,
    signed=format_signed,
    signed_percent=format_signed_percent,
    score_class=score_class,
    vital_class=vital_class,
    priority_class=priority_class,
    truncate_url=truncate_url,
    report_date=report_date,
)


# ── Sections ──────────────────────────────────────────────────────────────────


def _section(name: str, report: Report, options: Optional[RenderOptions], **context) -> str:
    template = env.get_template(f"sections/{name}.html")
    return template.render(report=report, options=options or RenderOptions(), **context)


def render_header(report: Report, options: Optional[RenderOptions] = None) -> str:
    return _section("header", report, options)


def render_executive_summary(report: Report, options: Optional[RenderOptions] = None) -> str:
    if report.executive_summary is None:
        return ""
    return _section("executive_summary", report, options)


def render_technical_seo(report: Report, options: Optional[RenderOptions] = None) -> str:
    return _section("technical_seo", report, options)


def render_content_audit(report: Report, options: Optional[RenderOptions] = None) -> str:
    return _section("content_audit", report, options, max_rows=TOP_PAGES_ROWS)


def render_keywords(report: Report, options: Optional[RenderOptions] = None) -> str:
    return _section("keywords", report, options, max_rows=KEYWORD_ROWS)


def render_backlinks(report: Report, options: Optional[RenderOptions] = None) -> str:
    return _section("backlinks", report, options, max_rows=REFERRING_DOMAIN_ROWS)


def render_recommendations(report: Report, options: Optional[RenderOptions] = None) -> str:
    if report.recommendations is None:
        return ""
    return _section("recommendations", report, options)


def render_footer(report: Report, options: Optional[RenderOptions] = None) -> str:
    return _section("footer", report, options)


SECTION_RENDERERS: Sequence[Callable[[Report, Optional[RenderOptions]], str]] = (
    render_header,
    render_executive_summary,
    render_technical_seo,
    render_content_audit,
    render_keywords,
    render_backlinks,
    render_recommendations,
    render_footer,
)


def render_html(
    report: Report,
    options: Optional[RenderOptions] = None,
    *,
    events: Optional[EventSink] = None,
) -> str:
    """Self-contained HTML document for ``report`` (inline CSS, no scripts)."""
    options = options or RenderOptions()
    events = events or default_sink()

    sections: List[Markup] = []
    for render_section in SECTION_RENDERERS:
        fragment = render_section(report, options)
        if fragment:
            sections.append(Markup(fragment))

    html = env.get_template("base.html").render(report=report, options=options, sections=sections)
    events.emit(
        "report.render.completed",
        domain=report.domain,
        sections=len(sections),
        size=len(html),
    )
    return html


def render(
    report: Report,
    mode: str = "html",
    options: Optional[RenderOptions] = None,
    *,
    converter: Optional[PdfConverter] = None,
    events: Optional[EventSink] = None,
) -> Union[str, bytes]:
    """
    Render ``report`` as an HTML string (``mode="html"``) or as PDF bytes
    (``mode="paginated"``). The paginated form runs the same HTML through a
    headless browser; ``converter`` defaults to ``ChromePdfConverter``.
    """
    if mode not in ("html", "paginated"):
        raise ValueError(f"Unknown render mode {mode!r}; expected 'html' or 'paginated'")

    events = events or default_sink()
    html = render_html(report, options, events=events)
    if mode == "html":
        return html

    converter = converter or ChromePdfConverter()
    pdf = converter.convert(html)
    events.emit("report.pdf.completed", domain=report.domain, size=len(pdf))
    return pdf
