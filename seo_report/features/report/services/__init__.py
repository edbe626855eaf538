from seo_report.features.report.services.assembler import assemble, report_stats
from seo_report.features.report.services.recommendations import recommend
from seo_report.features.report.services.renderer import RenderOptions, render, render_html
from seo_report.features.report.services.synthesizer import synthesize

__all__ = [
    "RenderOptions",
    "assemble",
    "recommend",
    "render",
    "render_html",
    "report_stats",
    "synthesize",
]
