"""SEO report aggregation, synthesis and rendering service."""

__version__ = "1.0.0"
