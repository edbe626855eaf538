from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from seo_report.features.report.exceptions import MissingModuleData
from seo_report.features.report.schemas.report import (
    BacklinksData,
    ContentAuditData,
    IssueType,
    KeywordsData,
    ModuleScores,
    Report,
    ReportStats,
    TechnicalSEOData,
)
from seo_report.features.report.services.recommendations import recommend
from seo_report.features.report.services.synthesizer import synthesize
from seo_report.platform.events import EventSink, default_sink
from seo_report.platform.utils.url_validator import derive_domain

# Wire name -> (Report attribute, model)
MODULES = {
    "technicalSeo": ("technical_seo", TechnicalSEOData),
    "contentAudit": ("content_audit", ContentAuditData),
    "keywords": ("keywords", KeywordsData),
    "backlinks": ("backlinks", BacklinksData),
}


def _lookup(modules: Mapping[str, Any], wire_name: str, attr: str) -> Any:
    if wire_name in modules:
        return modules[wire_name]
    return modules.get(attr)


def assemble(
    url: str,
    modules: Mapping[str, Any],
    *,
    events: Optional[EventSink] = None,
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> Report:
    """
    Compose the canonical report for ``url`` from the four module payloads.

    ``modules`` may be keyed by wire name (``technicalSeo``) or attribute name
    (``technical_seo``); values may be parsed models or plain dicts. Structural
    validation belongs to the provider layer, this only checks presence.

    Raises:
        MalformedURL: ``url`` has no scheme or host.
        MissingModuleData: any of the four modules is absent.
    """
    events = events or default_sink()

    domain = derive_domain(url)

    missing = [
        wire_name
        for wire_name, (attr, _) in MODULES.items()
        if _lookup(modules, wire_name, attr) is None
    ]
    if missing:
        events.emit("report.assembly.rejected", url=url, missing=",".join(missing))
        raise MissingModuleData(missing)

    events.emit("report.assembly.started", url=url, domain=domain)

    payloads = {}
    for wire_name, (attr, model) in MODULES.items():
        value = _lookup(modules, wire_name, attr)
        payloads[attr] = value if isinstance(value, model) else model.model_validate(value)

    executive_summary = synthesize(
        payloads["technical_seo"],
        payloads["content_audit"],
        payloads["keywords"],
        payloads["backlinks"],
    )
    events.emit(
        "report.summary.generated",
        domain=domain,
        overall_health=executive_summary.overall_health.value,
        quick_wins=len(executive_summary.quick_wins),
        urgent_issues=len(executive_summary.urgent_issues),
    )

    recommendations = recommend(
        payloads["technical_seo"],
        payloads["content_audit"],
        payloads["keywords"],
        payloads["backlinks"],
    )
    events.emit("report.recommendations.generated", domain=domain, count=len(recommendations))

    report = Report(
        url=url,
        analyzed_at=clock(),
        executive_summary=executive_summary,
        recommendations=recommendations,
        **payloads,
    )
    events.emit(
        "report.assembly.completed",
        domain=domain,
        analyzed_at=report.analyzed_at.isoformat(),
    )
    return report


def report_stats(report: Report) -> ReportStats:
    """Headline numbers for dashboards and API responses."""
    tech = report.technical_seo
    metadata = report.content_audit.metadata_completeness

    technical = (
        tech.performance_score
        + tech.seo_score
        + tech.accessibility_score
        + tech.best_practices_score
    ) / 4
    content = (
        metadata.title_tags.percentage
        + metadata.meta_descriptions.percentage
        + metadata.h1_tags.percentage
    ) / 3
    keywords = min(report.keywords.distribution.top10.percentage * 2, 100)
    backlinks = min(report.backlinks.domain_rating, 100)

    overall = (technical + content + keywords + backlinks) / 4

    critical = sum(1 for issue in tech.issues if issue.type == IssueType.ERROR) + sum(
        1 for issue in report.content_audit.issues if issue.type == IssueType.ERROR
    )

    return ReportStats(
        overall_score=_round_half_up(overall),
        module_scores=ModuleScores(
            technical=_round_half_up(technical),
            content=_round_half_up(content),
            keywords=_round_half_up(keywords),
            backlinks=_round_half_up(backlinks),
        ),
        critical_issues=critical,
        recommendations=len(report.recommendations or []),
    )


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
