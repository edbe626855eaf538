from seo_report.main import app

__all__ = ["app"]
