from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seo_report import __version__
from seo_report.api_routers.v1 import api_router
from seo_report.features.health.routes.health import router as health_router
from seo_report.platform.config import get_settings
from seo_report.platform.exceptions import add_exception_handlers


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Aggregated SEO reports from technical, content, keyword and backlink analyses",
        version=__version__,
        debug=settings.DEBUG,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    # Root endpoint for basic info
    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": settings.APP_NAME,
            "description": "Aggregated SEO report builder.",
            "version": __version__,
            "docs_url": "/docs",
            "api_base": settings.API_V1_PREFIX,
        }

    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    return app


app = create_app()
