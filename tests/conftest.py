"""
Test configuration and fixtures for the SEO Report Builder.

Module payloads are kept as camelCase dicts, exactly as a client would post
them, so the same data drives the service tests and the API tests.
"""

import copy
from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from seo_report.features.report.services.assembler import assemble
from seo_report.platform.events import NullEventSink

ANALYZED_AT = datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc)

TECHNICAL_SEO = {
    "coreWebVitals": {
        "lcp": {"value": "2.1s", "score": "good"},
        "cls": {"value": "0.05", "score": "good"},
        "fid": {"value": "80ms", "score": "good"},
    },
    "performanceScore": 72,
    "seoScore": 85,
    "accessibilityScore": 90,
    "bestPracticesScore": 88,
    "issues": [
        {
            "type": "warning",
            "title": "Render-blocking resources",
            "description": "3 stylesheets delay the first paint",
            "impact": "medium",
        }
    ],
}

CONTENT_AUDIT = {
    "totalPages": 40,
    "indexedPages": 38,
    "metadataCompleteness": {
        "titleTags": {"count": 36, "percentage": 90},
        "metaDescriptions": {"count": 30, "percentage": 75},
        "h1Tags": {"count": 34, "percentage": 85},
    },
    "contentMetrics": {
        "averageWordCount": 950,
        "pagesWithCTAs": {"count": 20, "percentage": 50},
        "contentFreshness": {"fresh": 25, "stale": 15},
    },
    "topPages": [
        {
            "url": "https://example.com/",
            "title": "Home",
            "wordCount": 1200,
            "hasMetaDescription": True,
            "hasH1": True,
            "hasCTA": True,
        }
    ],
    "issues": [
        {
            "type": "error",
            "title": "Duplicate titles",
            "description": "Several pages share the same title tag",
            "affectedPages": 4,
        }
    ],
}

KEYWORDS = {
    "totalKeywords": 180,
    "indexedKeywords": 150,
    "distribution": {
        "top3": {"count": 12, "percentage": 6.7},
        "top10": {"count": 45, "percentage": 25},
        "top50": {"count": 110, "percentage": 61.1},
    },
    "performingKeywords": {
        "best": [
            {
                "keyword": "seo audit",
                "position": 2,
                "volume": 5400,
                "difficulty": 45,
                "url": "https://example.com/audit",
                "change": 3,
            }
        ],
        "worst": [
            {
                "keyword": "site speed checker",
                "position": 48,
                "volume": 2900,
                "difficulty": 62,
                "url": "https://example.com/speed",
                "change": -6,
            }
        ],
        "new": [],
    },
    "opportunities": [],
    "organicTraffic": {"estimated": 12500, "change": 8.4},
}

BACKLINKS = {
    "totalBacklinks": 2400,
    "referringDomains": 320,
    "domainRating": 58,
    "organicTraffic": 9000,
    "backlinks": {
        "new": [],
        "lost": [],
        "top": [
            {
                "fromUrl": "https://blog.partner.io/review",
                "fromDomain": "blog.partner.io",
                "anchorText": "example",
                "type": "dofollow",
                "domainRating": 71,
                "traffic": 45000,
                "firstSeen": "2023-11-02",
                "lastSeen": "2024-03-01",
            }
        ],
    },
    "anchorTexts": [{"text": "example", "count": 400, "percentage": 16.7}],
    "referringDomainsGrowth": {"thisMonth": 320, "lastMonth": 310, "change": 10},
    "topReferringDomains": [
        {"domain": "blog.partner.io", "backlinks": 120, "domainRating": 71, "traffic": 45000}
    ],
}


def set_path(data: dict, path: str, value) -> dict:
    """Set a dotted camelCase path (``"coreWebVitals.lcp.score"``) in ``data``."""
    *parents, leaf = path.split(".")
    node = data
    for key in parents:
        node = node[key]
    node[leaf] = value
    return data


@pytest.fixture
def deep_update():
    return set_path


@pytest.fixture
def technical_seo() -> dict:
    return copy.deepcopy(TECHNICAL_SEO)


@pytest.fixture
def content_audit() -> dict:
    return copy.deepcopy(CONTENT_AUDIT)


@pytest.fixture
def keywords() -> dict:
    return copy.deepcopy(KEYWORDS)


@pytest.fixture
def backlinks() -> dict:
    return copy.deepcopy(BACKLINKS)


@pytest.fixture
def modules(technical_seo, content_audit, keywords, backlinks) -> dict:
    return {
        "technicalSeo": technical_seo,
        "contentAudit": content_audit,
        "keywords": keywords,
        "backlinks": backlinks,
    }


@pytest.fixture
def report_body(modules) -> dict:
    """Request body for the report endpoints."""
    return {"url": "https://example.com", **modules}


@pytest.fixture
def build_report(modules):
    """Assemble a report from the fixture modules, with optional dotted overrides."""

    def _build(url: str = "https://example.com", **overrides):
        data = copy.deepcopy(modules)
        for path, value in overrides.items():
            module, _, rest = path.partition("__")
            set_path(data[module], rest.replace("__", "."), value)
        return assemble(url, data, events=NullEventSink(), clock=lambda: ANALYZED_AT)

    return _build


@pytest.fixture
def report(build_report):
    return build_report()


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from seo_report.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    Dependency overrides are cleared after each test.
    """
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
