"""Schema Manager: schema.org JSON-LD for site pages and content items."""

__version__ = "1.0.0"
