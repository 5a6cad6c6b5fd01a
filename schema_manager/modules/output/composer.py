"""Schema composer: picks the builders for a render and collects output.

Two render modes:

* **site-wide** (no content item): WebSite + the default entity.
* **singular** (a content item): WebSite + WebPage + the resolved entity +
  BreadcrumbList, unless the item is disabled, its kind is not enabled, or
  it carries a valid custom JSON-LD override.
"""

import json
import logging
from typing import Any, Callable, Iterable, Optional

from schema_manager.modules.output.serializer import to_json_ld
from schema_manager.modules.schema_types.breadcrumb import BreadcrumbListSchema
from schema_manager.modules.schema_types.commerce import Clock
from schema_manager.modules.schema_types.registry import EntityType, TypeRegistry
from schema_manager.modules.schema_types.website import WebPageSchema, WebSiteSchema
from schema_manager.records import CommerceItem, ContentItem
from schema_manager.settings import SiteSettings

logger = logging.getLogger(__name__)

OutputFilter = Callable[[list[Any], Optional[int]], list[Any]]

PREVIEW_ITEM_DISABLED = "// Schema output is disabled for this item."
PREVIEW_GLOBALLY_DISABLED = "// Schema output is globally disabled."
PREVIEW_EMPTY = "// No schema data to output."


def decode_custom_json(raw: str) -> Optional[Any]:
    """Decode a custom JSON-LD override; ``None`` when absent or unusable."""
    if not raw or not raw.strip():
        return None
    try:
        decoded = json.loads(raw)
    except ValueError as exc:
        logger.debug("Ignoring malformed custom JSON-LD override: %s", exc)
        return None
    if not isinstance(decoded, (dict, list)):
        logger.debug("Ignoring custom JSON-LD override that is not an object/array")
        return None
    return decoded


class SchemaComposer:
    """Assemble the ordered schema list for one page render.

    Usage::

        composer = SchemaComposer(output_filters=[my_filter])
        schemas = composer.compose(settings, item)
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        output_filters: Iterable[OutputFilter] = (),
        clock: Optional[Clock] = None,
    ) -> None:
        self.registry = registry or TypeRegistry(clock=clock)
        self._output_filters = list(output_filters)
        self._website = WebSiteSchema()
        self._webpage = WebPageSchema()
        self._breadcrumbs = BreadcrumbListSchema()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compose(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> list[Any]:
        """Return the non-empty schema objects for this render, in order."""
        schemas: list[Any] = []
        if not settings.enabled:
            logger.debug("Schema output globally disabled")
        elif item is None:
            schemas = self._site_wide(settings)
        else:
            schemas = self._singular(settings, item, commerce)

        item_id = item.id if item is not None else None
        for output_filter in self._output_filters:
            schemas = output_filter(list(schemas), item_id)
        return [schema for schema in schemas if schema]

    def preview(
        self,
        settings: SiteSettings,
        item: ContentItem,
        commerce: Optional[CommerceItem] = None,
    ) -> str:
        """Text an editor sees for *item*: JSON-LD blocks or a comment line."""
        if item.schema_enabled is False:
            return PREVIEW_ITEM_DISABLED
        if not settings.enabled:
            return PREVIEW_GLOBALLY_DISABLED
        schemas = self.compose(settings, item, commerce)
        if not schemas:
            return PREVIEW_EMPTY
        return "\n\n".join(to_json_ld(schema) for schema in schemas)

    # ------------------------------------------------------------------
    # Render modes
    # ------------------------------------------------------------------

    def _site_wide(self, settings: SiteSettings) -> list[Any]:
        schemas = []
        if settings.website_schema:
            schemas.append(self._website.build(settings))
        schemas.append(self._entity(settings, settings.schema_type))
        return schemas

    def _singular(
        self,
        settings: SiteSettings,
        item: ContentItem,
        commerce: Optional[CommerceItem],
    ) -> list[Any]:
        if item.schema_enabled is False:
            logger.debug("Schema disabled for item %s", item.id)
            return []
        if item.kind.name not in settings.enabled_post_types:
            logger.debug("Kind %r not enabled for schema (item %s)", item.kind.name, item.id)
            return []

        override = decode_custom_json(item.custom_json)
        if override is not None:
            logger.debug("Using custom JSON-LD override for item %s", item.id)
            return [override]

        schemas = []
        if settings.website_schema:
            schemas.append(self._website.build(settings))
        schemas.append(self._webpage.build(settings, item))

        schema_type = item.schema_type or settings.schema_type
        if EntityType.parse(schema_type) is not EntityType.WEB_PAGE:
            schemas.append(self._entity(settings, schema_type, item, commerce))

        if settings.breadcrumb_enabled:
            schemas.append(self._breadcrumbs.build(settings, item))
        return schemas

    def _entity(
        self,
        settings: SiteSettings,
        schema_type: str,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> dict[str, Any]:
        builder = self.registry.builder_for(schema_type)
        if builder is None:
            logger.debug("No entity builder for type %r", schema_type)
            return {}
        return builder.build(settings, item, commerce)
