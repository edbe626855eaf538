from types import SimpleNamespace

import pytest

from seo_report.features.report.schemas.report import (
    BacklinksData,
    CompetitivePosition,
    ContentAuditData,
    KeywordsData,
    OverallHealth,
    TechnicalSEOData,
    TrafficStatus,
)
from seo_report.features.report.services.synthesizer import (
    HEALTH_THRESHOLDS,
    MAX_SUMMARY_ITEMS,
    QUICK_WIN_CHECKS,
    URGENT_ISSUE_CHECKS,
    competitive_position,
    grade,
    overall_health,
    synthesize,
    traffic_status,
)


def _parse(technical_seo, content_audit, keywords, backlinks):
    return (
        TechnicalSEOData.model_validate(technical_seo),
        ContentAuditData.model_validate(content_audit),
        KeywordsData.model_validate(keywords),
        BacklinksData.model_validate(backlinks),
    )


@pytest.fixture
def ideal_site(technical_seo, content_audit, keywords, backlinks, deep_update):
    technical_seo.update(performanceScore=95, seoScore=98)
    deep_update(content_audit, "metadataCompleteness.titleTags.percentage", 95)
    deep_update(content_audit, "metadataCompleteness.metaDescriptions.percentage", 95)
    deep_update(keywords, "distribution.top10.percentage", 40)
    deep_update(backlinks, "referringDomainsGrowth.change", 5)
    backlinks["domainRating"] = 80
    return _parse(technical_seo, content_audit, keywords, backlinks)


def test_ideal_site_is_excellent_with_five_quick_wins(ideal_site):
    summary = synthesize(*ideal_site)

    assert summary.overall_health == OverallHealth.EXCELLENT
    assert summary.urgent_issues == ()
    assert len(summary.quick_wins) == MAX_SUMMARY_ITEMS
    # All seven checks hold; the first five in checklist order are kept
    assert summary.quick_wins == tuple(check.message for check in QUICK_WIN_CHECKS[:5])


def test_baseline_summary(technical_seo, content_audit, keywords, backlinks):
    summary = synthesize(*_parse(technical_seo, content_audit, keywords, backlinks))

    # (72 + 85 + (90 + 75) / 2) / 3 = 79.8
    assert summary.overall_health == OverallHealth.GOOD
    assert summary.quick_wins == (
        "✅ Excellent layout stability (CLS score)",
        "✅ Good content depth with adequate word count",
        "✅ Most pages have proper title tags",
        "✅ Positive backlink growth trend",
    )
    assert summary.urgent_issues == ()
    assert summary.traffic_status == TrafficStatus.INCREASING
    assert summary.competitive_position == CompetitivePosition.MODERATE
    assert summary.current_ranking.keywords_in_top10 == 45
    assert summary.current_ranking.estimated_traffic == 12500
    assert summary.current_ranking.domain_authority == 58


def test_urgent_issues_capped_in_checklist_order(
    technical_seo, content_audit, keywords, backlinks, deep_update
):
    technical_seo.update(performanceScore=30, seoScore=60)
    deep_update(technical_seo, "coreWebVitals.lcp.score", "poor")
    deep_update(content_audit, "metadataCompleteness.titleTags.percentage", 40)
    deep_update(content_audit, "metadataCompleteness.metaDescriptions.percentage", 30)
    deep_update(content_audit, "metadataCompleteness.h1Tags.percentage", 20)
    deep_update(keywords, "distribution.top10.percentage", 5)
    deep_update(backlinks, "referringDomainsGrowth.change", -15)

    summary = synthesize(*_parse(technical_seo, content_audit, keywords, backlinks))

    assert summary.urgent_issues == tuple(check.message for check in URGENT_ISSUE_CHECKS[:5])
    assert summary.overall_health == OverallHealth.POOR


def test_performance_score_feeds_overall_health(technical_seo, content_audit, deep_update):
    deep_update(technical_seo, "coreWebVitals.lcp.score", "poor")
    content = ContentAuditData.model_validate(content_audit)

    technical_seo["performanceScore"] = 45
    # (45 + 85 + 82.5) / 3 = 70.8
    assert overall_health(TechnicalSEOData.model_validate(technical_seo), content) == OverallHealth.GOOD

    technical_seo["performanceScore"] = 40
    # (40 + 85 + 82.5) / 3 = 69.2
    assert overall_health(TechnicalSEOData.model_validate(technical_seo), content) == OverallHealth.FAIR


def test_grade_boundaries_are_inclusive():
    assert grade(85, HEALTH_THRESHOLDS, OverallHealth.POOR) == OverallHealth.EXCELLENT
    assert grade(84.99, HEALTH_THRESHOLDS, OverallHealth.POOR) == OverallHealth.GOOD
    assert grade(70, HEALTH_THRESHOLDS, OverallHealth.POOR) == OverallHealth.GOOD
    assert grade(50, HEALTH_THRESHOLDS, OverallHealth.POOR) == OverallHealth.FAIR
    assert grade(49.9, HEALTH_THRESHOLDS, OverallHealth.POOR) == OverallHealth.POOR


def test_traffic_status_band(keywords, deep_update):
    for change, expected in [
        (0, TrafficStatus.STABLE),
        (5, TrafficStatus.STABLE),
        (-5, TrafficStatus.STABLE),
        (5.1, TrafficStatus.INCREASING),
        (-5.1, TrafficStatus.DECREASING),
    ]:
        deep_update(keywords, "organicTraffic.change", change)
        assert traffic_status(KeywordsData.model_validate(keywords)) == expected


def test_competitive_position_thresholds(keywords, backlinks, deep_update):
    deep_update(keywords, "distribution.top10.percentage", 40)
    backlinks["domainRating"] = 100
    assert (
        competitive_position(KeywordsData.model_validate(keywords), BacklinksData.model_validate(backlinks))
        == CompetitivePosition.STRONG
    )

    backlinks["domainRating"] = 20
    # (20 + 40) / 2 = 30
    assert (
        competitive_position(KeywordsData.model_validate(keywords), BacklinksData.model_validate(backlinks))
        == CompetitivePosition.WEAK
    )


def test_missing_modules_degrade_without_raising():
    summary = synthesize(None, None, None, None)

    assert summary.overall_health == OverallHealth.POOR
    assert summary.traffic_status == TrafficStatus.STABLE
    assert summary.competitive_position == CompetitivePosition.WEAK
    assert summary.current_ranking.keywords_in_top10 == 0
    assert summary.current_ranking.estimated_traffic == 0
    assert summary.current_ranking.domain_authority == 0
    assert summary.quick_wins == ()
    assert summary.urgent_issues == ()


def test_malformed_module_stops_contributing(technical_seo, content_audit, backlinks):
    broken_keywords = SimpleNamespace(organic_traffic=None)

    summary = synthesize(
        TechnicalSEOData.model_validate(technical_seo),
        ContentAuditData.model_validate(content_audit),
        broken_keywords,
        BacklinksData.model_validate(backlinks),
    )

    assert summary.traffic_status == TrafficStatus.STABLE
    assert summary.competitive_position == CompetitivePosition.WEAK
    assert summary.current_ranking.keywords_in_top10 == 0
    assert summary.current_ranking.domain_authority == 58
    assert "✅ Strong keyword rankings in top 10 positions" not in summary.quick_wins


def test_synthesize_is_deterministic(technical_seo, content_audit, keywords, backlinks):
    parsed = _parse(technical_seo, content_audit, keywords, backlinks)

    assert synthesize(*parsed) == synthesize(*parsed)
