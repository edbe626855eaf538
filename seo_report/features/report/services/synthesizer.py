"""
Executive summary synthesis.

Turns the four analysis modules into an ``ExecutiveSummary``: overall health
grade, quick wins, urgent issues, traffic trend and competitive position.

The function is deterministic and never raises. A module that is absent or
structurally broken simply stops contributing: checks that read it do not
fire, and the health grade falls to ``poor``.
"""
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from seo_report.features.report.schemas.report import (
    BacklinksData,
    CompetitivePosition,
    ContentAuditData,
    CurrentRanking,
    ExecutiveSummary,
    KeywordsData,
    OverallHealth,
    TechnicalSEOData,
    TrafficStatus,
    VitalScore,
)
from seo_report.platform.logger import get_logger

logger = get_logger("report_synthesizer")

# Executive-summary scale; renderer.DISPLAY_SCORE_THRESHOLDS colours scores separately.
HEALTH_THRESHOLDS: Tuple[Tuple[float, OverallHealth], ...] = (
    (85, OverallHealth.EXCELLENT),
    (70, OverallHealth.GOOD),
    (50, OverallHealth.FAIR),
)

COMPETITIVE_THRESHOLDS: Tuple[Tuple[float, CompetitivePosition], ...] = (
    (70, CompetitivePosition.STRONG),
    (40, CompetitivePosition.MODERATE),
)

TRAFFIC_CHANGE_BAND = 5  # percent either side of zero counts as stable
MAX_SUMMARY_ITEMS = 5

_MALFORMED = (AttributeError, TypeError, KeyError, ValueError)


class SummaryCheck(NamedTuple):
    module: str
    predicate: Callable[[Any], bool]
    message: str


QUICK_WIN_CHECKS: Tuple[SummaryCheck, ...] = (
    SummaryCheck(
        "technical_seo",
        lambda t: t.core_web_vitals.cls.score == VitalScore.GOOD,
        "✅ Excellent layout stability (CLS score)",
    ),
    SummaryCheck(
        "technical_seo",
        lambda t: t.seo_score >= 90,
        "✅ Strong SEO foundation in place",
    ),
    SummaryCheck(
        "content_audit",
        lambda c: c.content_metrics.average_word_count > 800,
        "✅ Good content depth with adequate word count",
    ),
    SummaryCheck(
        "content_audit",
        lambda c: c.metadata_completeness.title_tags.percentage > 80,
        "✅ Most pages have proper title tags",
    ),
    SummaryCheck(
        "keywords",
        lambda k: k.distribution.top10.percentage >= 30,
        "✅ Strong keyword rankings in top 10 positions",
    ),
    SummaryCheck(
        "backlinks",
        lambda b: b.referring_domains_growth.change > 0,
        "✅ Positive backlink growth trend",
    ),
    SummaryCheck(
        "backlinks",
        lambda b: b.domain_rating > 70,
        "✅ High domain authority",
    ),
)

URGENT_ISSUE_CHECKS: Tuple[SummaryCheck, ...] = (
    SummaryCheck(
        "technical_seo",
        lambda t: t.performance_score < 50,
        "🚨 Poor performance score - immediate optimization needed",
    ),
    SummaryCheck(
        "technical_seo",
        lambda t: t.core_web_vitals.lcp.score == VitalScore.POOR,
        "🚨 Slow page loading speed (LCP > 4s)",
    ),
    SummaryCheck(
        "content_audit",
        lambda c: c.metadata_completeness.title_tags.percentage < 50,
        "🚨 Many pages missing title tags",
    ),
    SummaryCheck(
        "content_audit",
        lambda c: c.metadata_completeness.meta_descriptions.percentage < 50,
        "🚨 Many pages missing meta descriptions",
    ),
    SummaryCheck(
        "content_audit",
        lambda c: c.metadata_completeness.h1_tags.percentage < 30,
        "🚨 Most pages lack proper H1 headings",
    ),
    SummaryCheck(
        "keywords",
        lambda k: k.distribution.top10.percentage < 10,
        "🚨 Very few keywords ranking in top 10",
    ),
    SummaryCheck(
        "backlinks",
        lambda b: b.referring_domains_growth.change < -10,
        "🚨 Significant backlink loss detected",
    ),
)


def grade(value: float, thresholds: Sequence[Tuple[float, Any]], floor: Any) -> Any:
    """Return the label of the first threshold ``value`` reaches, else ``floor``."""
    for minimum, label in thresholds:
        if value >= minimum:
            return label
    return floor


def _holds(check: SummaryCheck, modules: Dict[str, Any]) -> bool:
    module = modules.get(check.module)
    if module is None:
        return False
    try:
        return bool(check.predicate(module))
    except _MALFORMED as e:
        logger.warning(f"Skipping summary check on malformed {check.module}: {e}")
        return False


def collect_findings(checks: Sequence[SummaryCheck], modules: Dict[str, Any]) -> List[str]:
    """Messages of the checks that hold, in checklist order, capped at five."""
    findings = [check.message for check in checks if _holds(check, modules)]
    return findings[:MAX_SUMMARY_ITEMS]


def overall_health(
    technical_seo: Optional[TechnicalSEOData], content_audit: Optional[ContentAuditData]
) -> OverallHealth:
    if technical_seo is None or content_audit is None:
        return OverallHealth.POOR
    try:
        metadata = content_audit.metadata_completeness
        metadata_completeness = (
            metadata.title_tags.percentage + metadata.meta_descriptions.percentage
        ) / 2
        average = (
            technical_seo.performance_score + technical_seo.seo_score + metadata_completeness
        ) / 3
        return grade(average, HEALTH_THRESHOLDS, OverallHealth.POOR)
    except _MALFORMED as e:
        logger.warning(f"Cannot grade overall health, treating as poor: {e}")
        return OverallHealth.POOR


def traffic_status(keywords: Optional[KeywordsData]) -> TrafficStatus:
    try:
        change = float(keywords.organic_traffic.change)
    except _MALFORMED:
        return TrafficStatus.STABLE
    if change > TRAFFIC_CHANGE_BAND:
        return TrafficStatus.INCREASING
    if change < -TRAFFIC_CHANGE_BAND:
        return TrafficStatus.DECREASING
    return TrafficStatus.STABLE


def competitive_position(
    keywords: Optional[KeywordsData], backlinks: Optional[BacklinksData]
) -> CompetitivePosition:
    try:
        score = (backlinks.domain_rating + keywords.distribution.top10.percentage) / 2
        return grade(score, COMPETITIVE_THRESHOLDS, CompetitivePosition.WEAK)
    except _MALFORMED:
        return CompetitivePosition.WEAK


def current_ranking(
    keywords: Optional[KeywordsData], backlinks: Optional[BacklinksData]
) -> CurrentRanking:
    def _read(getter: Callable[[], int]) -> int:
        try:
            return int(getter())
        except _MALFORMED:
            return 0

    return CurrentRanking(
        keywords_in_top10=_read(lambda: keywords.distribution.top10.count),
        estimated_traffic=_read(lambda: keywords.organic_traffic.estimated),
        domain_authority=_read(lambda: backlinks.domain_rating),
    )


def synthesize(
    technical_seo: Optional[TechnicalSEOData],
    content_audit: Optional[ContentAuditData],
    keywords: Optional[KeywordsData],
    backlinks: Optional[BacklinksData],
) -> ExecutiveSummary:
    modules = {
        "technical_seo": technical_seo,
        "content_audit": content_audit,
        "keywords": keywords,
        "backlinks": backlinks,
    }
    return ExecutiveSummary(
        overall_health=overall_health(technical_seo, content_audit),
        current_ranking=current_ranking(keywords, backlinks),
        quick_wins=collect_findings(QUICK_WIN_CHECKS, modules),
        urgent_issues=collect_findings(URGENT_ISSUE_CHECKS, modules),
        traffic_status=traffic_status(keywords),
        competitive_position=competitive_position(keywords, backlinks),
    )
