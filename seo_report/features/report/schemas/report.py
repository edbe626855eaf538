from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from seo_report.features.report.exceptions import MalformedURL
from seo_report.platform.utils.url_validator import derive_domain


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase on the wire. Immutable once built."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        allow_inf_nan=False,
    )


# ── Enumerations ──────────────────────────────────────────────────────────────


class VitalScore(str, Enum):
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs-improvement"
    POOR = "poor"


class IssueType(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class LinkType(str, Enum):
    DOFOLLOW = "dofollow"
    NOFOLLOW = "nofollow"


class OverallHealth(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class TrafficStatus(str, Enum):
    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


class CompetitivePosition(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Category(str, Enum):
    TECHNICAL = "technical"
    CONTENT = "content"
    KEYWORDS = "keywords"
    BACKLINKS = "backlinks"


class Timeframe(str, Enum):
    WEEKS = "1-2 weeks"
    MONTHS = "1-2 months"
    QUARTER = "3+ months"


# ── Shared pieces ─────────────────────────────────────────────────────────────


class CountShare(CamelModel):
    count: int = Field(ge=0)
    percentage: float = Field(ge=0, le=100)


# ── Technical SEO ─────────────────────────────────────────────────────────────


class WebVital(CamelModel):
    value: str
    score: VitalScore


class CoreWebVitals(CamelModel):
    lcp: WebVital
    cls: WebVital
    fid: WebVital


class TechnicalIssue(CamelModel):
    type: IssueType
    title: str
    description: str
    impact: Impact


class TechnicalSEOData(CamelModel):
    core_web_vitals: CoreWebVitals
    performance_score: int = Field(ge=0, le=100)
    seo_score: int = Field(ge=0, le=100)
    accessibility_score: int = Field(ge=0, le=100)
    best_practices_score: int = Field(ge=0, le=100)
    issues: Tuple[TechnicalIssue, ...] = Field(default_factory=tuple)


# ── Content audit ─────────────────────────────────────────────────────────────


class MetadataCompleteness(CamelModel):
    title_tags: CountShare
    meta_descriptions: CountShare
    h1_tags: CountShare


class ContentFreshness(CamelModel):
    fresh: int = Field(ge=0)
    stale: int = Field(ge=0)


class ContentMetrics(CamelModel):
    average_word_count: int = Field(ge=0)
    pages_with_ctas: CountShare = Field(alias="pagesWithCTAs")
    content_freshness: ContentFreshness


class TopPage(CamelModel):
    url: str
    title: str = ""
    word_count: int = Field(default=0, ge=0)
    has_meta_description: bool = False
    has_h1: bool = False
    has_cta: bool = Field(default=False, alias="hasCTA")
    last_modified: Optional[str] = None


class ContentIssue(CamelModel):
    type: IssueType
    title: str
    description: str
    affected_pages: int = Field(ge=0)


class ContentAuditData(CamelModel):
    total_pages: int = Field(ge=0)
    indexed_pages: int = Field(ge=0)
    metadata_completeness: MetadataCompleteness
    content_metrics: ContentMetrics
    top_pages: Tuple[TopPage, ...] = Field(default_factory=tuple)
    issues: Tuple[ContentIssue, ...] = Field(default_factory=tuple)


# ── Keywords ──────────────────────────────────────────────────────────────────


class RankDistribution(CamelModel):
    top3: CountShare
    top10: CountShare
    top50: CountShare


class KeywordEntry(CamelModel):
    keyword: str
    position: int = Field(ge=1)
    volume: int = Field(ge=0)
    difficulty: int = Field(ge=0, le=100)
    url: str = ""
    change: int = 0


class PerformingKeywords(CamelModel):
    best: Tuple[KeywordEntry, ...] = Field(default_factory=tuple)
    worst: Tuple[KeywordEntry, ...] = Field(default_factory=tuple)
    new: Tuple[KeywordEntry, ...] = Field(default_factory=tuple)


class OrganicTraffic(CamelModel):
    estimated: int = Field(ge=0)
    change: float  # signed percent


class KeywordsData(CamelModel):
    total_keywords: int = Field(ge=0)
    indexed_keywords: int = Field(ge=0)
    distribution: RankDistribution
    performing_keywords: PerformingKeywords
    opportunities: Tuple[KeywordEntry, ...] = Field(default_factory=tuple)
    organic_traffic: OrganicTraffic


# ── Backlinks ─────────────────────────────────────────────────────────────────


class Backlink(CamelModel):
    from_url: str
    from_domain: str
    anchor_text: str
    type: LinkType
    domain_rating: int = Field(ge=0, le=100)
    traffic: int = Field(ge=0)
    first_seen: str
    last_seen: str


class BacklinkBuckets(CamelModel):
    new: Tuple[Backlink, ...] = Field(default_factory=tuple)
    lost: Tuple[Backlink, ...] = Field(default_factory=tuple)
    top: Tuple[Backlink, ...] = Field(default_factory=tuple)


class AnchorText(CamelModel):
    text: str
    count: int = Field(ge=0)
    percentage: float = Field(ge=0, le=100)


class ReferringDomainsGrowth(CamelModel):
    this_month: int
    last_month: int
    change: int


class ReferringDomain(CamelModel):
    domain: str
    backlinks: int = Field(ge=0)
    domain_rating: int = Field(ge=0, le=100)
    traffic: int = Field(ge=0)


class BacklinksData(CamelModel):
    total_backlinks: int = Field(ge=0)
    referring_domains: int = Field(ge=0)
    domain_rating: int = Field(ge=0, le=100)
    organic_traffic: int = Field(ge=0)
    backlinks: BacklinkBuckets
    anchor_texts: Tuple[AnchorText, ...] = Field(default_factory=tuple)
    referring_domains_growth: ReferringDomainsGrowth
    top_referring_domains: Tuple[ReferringDomain, ...] = Field(default_factory=tuple)


# ── Derived ───────────────────────────────────────────────────────────────────


class CurrentRanking(CamelModel):
    keywords_in_top10: int = 0
    estimated_traffic: int = 0
    domain_authority: int = 0


class ExecutiveSummary(CamelModel):
    overall_health: OverallHealth
    current_ranking: CurrentRanking
    quick_wins: Tuple[str, ...] = Field(default_factory=tuple, max_length=5)
    urgent_issues: Tuple[str, ...] = Field(default_factory=tuple, max_length=5)
    traffic_status: TrafficStatus
    competitive_position: CompetitivePosition


class Recommendation(CamelModel):
    priority: Priority
    category: Category
    title: str
    description: str
    estimated_impact: Impact
    timeframe: Timeframe
    resources: Tuple[str, ...] = Field(default_factory=tuple)


class Report(CamelModel):
    """
    Root aggregate of one analysis.

    ``domain`` is computed from ``url`` and cannot be passed in. Instances are
    frozen once built by the assembler.
    """

    url: str
    analyzed_at: datetime
    technical_seo: TechnicalSEOData
    content_audit: ContentAuditData
    keywords: KeywordsData
    backlinks: BacklinksData
    executive_summary: Optional[ExecutiveSummary] = None
    recommendations: Optional[Tuple[Recommendation, ...]] = None

    @field_validator("url")
    @classmethod
    def url_has_host(cls, v: str) -> str:
        try:
            derive_domain(v)
        except MalformedURL as e:
            raise ValueError(str(e)) from e
        return v

    @computed_field  # type: ignore[misc]
    @property
    def domain(self) -> str:
        return derive_domain(self.url)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ModuleScores(CamelModel):
    technical: int
    content: int
    keywords: int
    backlinks: int


class ReportStats(CamelModel):
    overall_score: int
    module_scores: ModuleScores
    critical_issues: int
    recommendations: int
