"""WebSite and WebPage schema types."""

import logging
from typing import Any, Optional

from schema_manager.modules.schema_types.fields import SchemaObject, finalize
from schema_manager.records import CommerceItem, ContentItem
from schema_manager.settings import SiteSettings
from schema_manager.utils.helpers import strip_all_tags, truncate_chars

logger = logging.getLogger(__name__)

SEARCH_TERM = "search_term_string"


class WebSiteSchema:
    """Site-wide WebSite object with a sitelinks search action."""

    def get_type(self) -> str:
        return "WebSite"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        data: dict[str, Any] = {
            "name": settings.site_name,
            "url": settings.home_url("/"),
        }
        if settings.site_description:
            data["description"] = settings.site_description

        search_url = settings.home_url("/?s={" + SEARCH_TERM + "}")
        if search_url:
            data["potentialAction"] = {
                "@type": "SearchAction",
                "target": {
                    "@type": "EntryPoint",
                    "urlTemplate": search_url,
                },
                "query-input": "required name=" + SEARCH_TERM,
            }

        schema = finalize(self.get_type(), data)
        logger.debug("Generated WebSite schema for: %s", settings.site_name)
        return schema


def website_stub(settings: SiteSettings) -> Optional[dict[str, str]]:
    """Name/url-only WebSite reference for ``isPartOf``."""
    ref = {"@type": "WebSite"}
    if settings.site_name:
        ref["name"] = settings.site_name
    if settings.site_url:
        ref["url"] = settings.home_url("/")
    return ref if len(ref) > 1 else None


def describe_item(item: ContentItem) -> str:
    """Excerpt when present, else plain-text body capped at 160 characters."""
    if item.excerpt:
        return strip_all_tags(item.excerpt)
    return truncate_chars(strip_all_tags(item.body), limit=160, keep=157)


class WebPageSchema:
    """WebPage object for a single content item."""

    def get_type(self) -> str:
        return "WebPage"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        if item is None:
            return {}

        data: dict[str, Any] = {
            "name": item.title,
            "url": item.url,
            "description": describe_item(item),
        }
        if item.published_at:
            data["datePublished"] = item.published_at.isoformat()
        if item.modified_at:
            data["dateModified"] = item.modified_at.isoformat()
        if item.author_name:
            data["author"] = {"@type": "Person", "name": item.author_name}

        part_of = website_stub(settings)
        if part_of:
            data["isPartOf"] = part_of

        schema = finalize(self.get_type(), data)
        logger.debug("Generated WebPage schema for item %s", item.id)
        return schema
