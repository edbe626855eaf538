"""
Rule-based recommendation engine.

Each rule looks at one analysis module and, when its condition holds, yields a
single ``Recommendation`` whose copy is fixed apart from the metric that
triggered it. The fired rules are ranked by priority, then by estimated
impact, and the first ten are kept.
"""
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from seo_report.features.report.schemas.report import (
    BacklinksData,
    Category,
    ContentAuditData,
    Impact,
    KeywordsData,
    Priority,
    Recommendation,
    TechnicalSEOData,
    Timeframe,
    VitalScore,
)
from seo_report.platform.logger import get_logger

logger = get_logger("report_recommendations")

MAX_RECOMMENDATIONS = 10

PRIORITY_RANK: Dict[Priority, int] = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}
IMPACT_RANK: Dict[Impact, int] = {Impact.HIGH: 3, Impact.MEDIUM: 2, Impact.LOW: 1}

_MALFORMED = (AttributeError, TypeError, KeyError, ValueError)


class RecommendationRule(NamedTuple):
    category: Category
    applies: Callable[[Any], bool]
    build: Callable[[Any], Recommendation]


def _fmt(value: float) -> str:
    """Integral floats print without a trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ── Technical ─────────────────────────────────────────────────────────────────


def _performance(data: TechnicalSEOData) -> Recommendation:
    return Recommendation(
        priority=Priority.HIGH,
        category=Category.TECHNICAL,
        title="Improve Page Performance",
        description=(
            f"Current performance score is {data.performance_score}/100. "
            "Optimize images, minify CSS/JS, and implement caching."
        ),
        estimated_impact=Impact.HIGH,
        timeframe=Timeframe.MONTHS,
        resources=["Web developer", "Performance optimization tools", "CDN service"],
    )


def _lcp(data: TechnicalSEOData) -> Recommendation:
    return Recommendation(
        priority=Priority.HIGH,
        category=Category.TECHNICAL,
        title="Fix Largest Contentful Paint (LCP)",
        description=(
            f"LCP is {data.core_web_vitals.lcp.value}, which is poor. "
            "Optimize server response times and critical resources."
        ),
        estimated_impact=Impact.HIGH,
        timeframe=Timeframe.WEEKS,
        resources=["Technical developer", "Server optimization", "Image optimization tools"],
    )


def _cls(data: TechnicalSEOData) -> Recommendation:
    return Recommendation(
        priority=Priority.MEDIUM,
        category=Category.TECHNICAL,
        title="Reduce Cumulative Layout Shift (CLS)",
        description=(
            f"CLS is {data.core_web_vitals.cls.value}. "
            "Add size attributes to images and reserve space for dynamic content."
        ),
        estimated_impact=Impact.MEDIUM,
        timeframe=Timeframe.WEEKS,
        resources=["Frontend developer", "Design review"],
    )


def _seo_score(data: TechnicalSEOData) -> Recommendation:
    return Recommendation(
        priority=Priority.MEDIUM,
        category=Category.TECHNICAL,
        title="Improve Technical SEO Score",
        description=(
            f"Technical SEO score is {data.seo_score}/100. Address technical SEO issues "
            "like meta tags, structured data, and crawlability."
        ),
        estimated_impact=Impact.MEDIUM,
        timeframe=Timeframe.MONTHS,
        resources=["SEO specialist", "Technical developer"],
    )


# ── Content ───────────────────────────────────────────────────────────────────


def _title_tags(data: ContentAuditData) -> Recommendation:
    missing = max(data.total_pages - data.metadata_completeness.title_tags.count, 0)
    return Recommendation(
        priority=Priority.HIGH,
        category=Category.CONTENT,
        title="Add Missing Title Tags",
        description=f"{missing} pages are missing title tags. This directly impacts search rankings.",
        estimated_impact=Impact.HIGH,
        timeframe=Timeframe.WEEKS,
        resources=["Content writer", "SEO specialist"],
    )


def _meta_descriptions(data: ContentAuditData) -> Recommendation:
    missing = max(data.total_pages - data.metadata_completeness.meta_descriptions.count, 0)
    return Recommendation(
        priority=Priority.HIGH,
        category=Category.CONTENT,
        title="Write Meta Descriptions",
        description=(
            f"{missing} pages need meta descriptions to improve click-through rates "
            "from search results."
        ),
        estimated_impact=Impact.MEDIUM,
        timeframe=Timeframe.WEEKS,
        resources=["Content writer", "SEO copywriter"],
    )


def _h1_tags(data: ContentAuditData) -> Recommendation:
    return Recommendation(
        priority=Priority.MEDIUM,
        category=Category.CONTENT,
        title="Add H1 Headings",
        description=(
            f"Only {_fmt(data.metadata_completeness.h1_tags.percentage)}% of pages have an H1 "
            "heading. Add descriptive H1 tags to improve content structure."
        ),
        estimated_impact=Impact.MEDIUM,
        timeframe=Timeframe.WEEKS,
        resources=["Content editor", "Web developer"],
    )


def _stale_content(data: ContentAuditData) -> Recommendation:
    return Recommendation(
        priority=Priority.MEDIUM,
        category=Category.CONTENT,
        title="Update Stale Content",
        description=(
            f"{data.content_metrics.content_freshness.stale} pages haven't been updated "
            "in 18+ months. Refresh content regularly."
        ),
        estimated_impact=Impact.MEDIUM,
        timeframe=Timeframe.QUARTER,
        resources=["Content team", "Subject matter experts"],
    )


def _word_count(data: ContentAuditData) -> Recommendation:
    return Recommendation(
        priority=Priority.MEDIUM,
        category=Category.CONTENT,
        title="Increase Content Depth",
        description=(
            f"Average word count is {data.content_metrics.average_word_count}. "
            "Expand content to 800+ words for better rankings."
        ),
        estimated_impact=Impact.MEDIUM,
        timeframe=Timeframe.MONTHS,
        resources=["Content writers", "Research team"],
    )


# ── Keywords ──────────────────────────────────────────────────────────────────


def _top10(data: KeywordsData) -> Recommendation:
    return Recommendation(
        priority=Priority.HIGH,
        category=Category.KEYWORDS,
        title="Improve Keyword Rankings",
        description=(
            f"Only {_fmt(data.distribution.top10.percentage)}% of keywords rank in top 10. "
            "Focus on on-page optimization and content quality."
        ),
        estimated_impact=Impact.HIGH,
        timeframe=Timeframe.QUARTER,
        resources=["SEO specialist", "Content team", "Link building"],
    )


def _organic_traffic(data: KeywordsData) -> Recommendation:
    return Recommendation(
        priority=Priority.HIGH,
        category=Category.KEYWORDS,
        title="Increase Organic Traffic",
        description=(
            f"Organic traffic changed {_fmt(data.organic_traffic.change)}% and is stagnant. "
            "Target new keywords and improve existing content."
        ),
        estimated_impact=Impact.HIGH,
        timeframe=Timeframe.QUARTER,
        resources=["Keyword research tools", "Content strategy", "SEO specialist"],
    )


def _keyword_coverage(data: KeywordsData) -> Recommendation:
    return Recommendation(
        priority=Priority.MEDIUM,
        category=Category.KEYWORDS,
        title="Expand Keyword Coverage",
        description=(
            f"Only {data.indexed_keywords} keywords are ranking. "
            "Create content for more relevant keywords."
        ),
        estimated_impact=Impact.MEDIUM,
        timeframe=Timeframe.QUARTER,
        resources=["Keyword research", "Content creation team"],
    )


# ── Backlinks ─────────────────────────────────────────────────────────────────


def _referring_domains(data: BacklinksData) -> Recommendation:
    return Recommendation(
        priority=Priority.HIGH,
        category=Category.BACKLINKS,
        title="Build More Quality Backlinks",
        description=(
            f"Only {data.referring_domains} referring domains. "
            "Focus on earning high-quality backlinks from relevant sites."
        ),
        estimated_impact=Impact.HIGH,
        timeframe=Timeframe.QUARTER,
        resources=["Outreach specialist", "Content marketing", "PR team"],
    )


def _backlink_loss(data: BacklinksData) -> Recommendation:
    return Recommendation(
        priority=Priority.HIGH,
        category=Category.BACKLINKS,
        title="Address Backlink Loss",
        description=(
            f"Lost {abs(data.referring_domains_growth.change)} referring domains this month. "
            "Investigate and recover lost links."
        ),
        estimated_impact=Impact.MEDIUM,
        timeframe=Timeframe.MONTHS,
        resources=["Link building specialist", "Backlink monitoring tools"],
    )


def _domain_rating(data: BacklinksData) -> Recommendation:
    return Recommendation(
        priority=Priority.MEDIUM,
        category=Category.BACKLINKS,
        title="Improve Domain Authority",
        description=(
            f"Domain rating is {data.domain_rating}. Focus on earning high-authority "
            "backlinks and improving overall link profile."
        ),
        estimated_impact=Impact.HIGH,
        timeframe=Timeframe.QUARTER,
        resources=["Link building strategy", "High-quality content", "Industry partnerships"],
    )


TECHNICAL_RULES = (
    RecommendationRule(Category.TECHNICAL, lambda t: t.performance_score < 60, _performance),
    RecommendationRule(
        Category.TECHNICAL, lambda t: t.core_web_vitals.lcp.score == VitalScore.POOR, _lcp
    ),
    RecommendationRule(
        Category.TECHNICAL, lambda t: t.core_web_vitals.cls.score == VitalScore.POOR, _cls
    ),
    RecommendationRule(Category.TECHNICAL, lambda t: t.seo_score < 80, _seo_score),
)

CONTENT_RULES = (
    RecommendationRule(
        Category.CONTENT, lambda c: c.metadata_completeness.title_tags.percentage < 80, _title_tags
    ),
    RecommendationRule(
        Category.CONTENT,
        lambda c: c.metadata_completeness.meta_descriptions.percentage < 80,
        _meta_descriptions,
    ),
    RecommendationRule(
        Category.CONTENT, lambda c: c.metadata_completeness.h1_tags.percentage < 70, _h1_tags
    ),
    RecommendationRule(
        Category.CONTENT,
        lambda c: c.content_metrics.content_freshness.stale > c.content_metrics.content_freshness.fresh,
        _stale_content,
    ),
    RecommendationRule(
        Category.CONTENT, lambda c: c.content_metrics.average_word_count < 600, _word_count
    ),
)

KEYWORD_RULES = (
    RecommendationRule(Category.KEYWORDS, lambda k: k.distribution.top10.percentage < 20, _top10),
    RecommendationRule(Category.KEYWORDS, lambda k: k.organic_traffic.change <= 0, _organic_traffic),
    RecommendationRule(Category.KEYWORDS, lambda k: k.indexed_keywords < 50, _keyword_coverage),
)

BACKLINK_RULES = (
    RecommendationRule(Category.BACKLINKS, lambda b: b.referring_domains < 100, _referring_domains),
    RecommendationRule(
        Category.BACKLINKS, lambda b: b.referring_domains_growth.change < 0, _backlink_loss
    ),
    RecommendationRule(Category.BACKLINKS, lambda b: b.domain_rating < 50, _domain_rating),
)


def apply_rules(rules: Sequence[RecommendationRule], data: Any) -> List[Recommendation]:
    """Recommendations of every rule in ``rules`` that fires on ``data``, in rule order."""
    if data is None:
        return []

    fired: List[Recommendation] = []
    for rule in rules:
        try:
            if rule.applies(data):
                fired.append(rule.build(data))
        except _MALFORMED as e:
            logger.warning(f"Skipping {rule.category.value} rule on malformed data: {e}")
    return fired


def prioritize(recommendations: Sequence[Recommendation]) -> List[Recommendation]:
    """Stable sort: priority high→low, then estimated impact high→low."""
    return sorted(
        recommendations,
        key=lambda rec: (-PRIORITY_RANK[rec.priority], -IMPACT_RANK[rec.estimated_impact]),
    )


def recommend(
    technical_seo: Optional[TechnicalSEOData],
    content_audit: Optional[ContentAuditData],
    keywords: Optional[KeywordsData],
    backlinks: Optional[BacklinksData],
) -> List[Recommendation]:
    recommendations: List[Recommendation] = []
    recommendations.extend(apply_rules(TECHNICAL_RULES, technical_seo))
    recommendations.extend(apply_rules(CONTENT_RULES, content_audit))
    recommendations.extend(apply_rules(KEYWORD_RULES, keywords))
    recommendations.extend(apply_rules(BACKLINK_RULES, backlinks))

    return prioritize(recommendations)[:MAX_RECOMMENDATIONS]
