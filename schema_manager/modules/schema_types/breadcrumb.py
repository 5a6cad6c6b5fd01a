"""BreadcrumbList schema type and the trail assembler.

The trail runs Home → kind archive → category chain → parent chain → item,
each segment present only when its data exists.
"""

import logging
from typing import Any, Optional, TypeVar

from schema_manager.modules.schema_types.fields import SchemaObject, wrap
from schema_manager.records import CommerceItem, ContentItem, ItemRef, TermRef
from schema_manager.settings import SiteSettings

logger = logging.getLogger(__name__)

STANDARD_POST_KIND = "post"
PAGE_KIND = "page"

_Ref = TypeVar("_Ref", TermRef, ItemRef)


def _chain_to_root(ref: Optional[_Ref]) -> list[_Ref]:
    """Walk ``parent`` links upward and return the chain root-first.

    A reference seen twice ends the walk, so cyclic data cannot loop.
    """
    chain: list[_Ref] = []
    seen: set[int] = set()
    while ref is not None and id(ref) not in seen:
        seen.add(id(ref))
        chain.append(ref)
        ref = ref.parent
    chain.reverse()
    return chain


class BreadcrumbAssembler:
    """Derive an ordered, contiguously numbered breadcrumb trail."""

    def assemble(self, settings: SiteSettings, item: Optional[ContentItem] = None) -> list[dict[str, Any]]:
        crumbs: list[tuple[str, str]] = []
        home = settings.home_url("/")
        if not home:
            return []
        crumbs.append((settings.site_name, home))

        if item is None:
            return self._number(crumbs)

        kind = item.kind
        if kind.name != PAGE_KIND and kind.has_archive and kind.archive_url:
            crumbs.append((kind.label or kind.name, kind.archive_url))

        if kind.name == STANDARD_POST_KIND and item.primary_term is not None:
            for term in _chain_to_root(item.primary_term):
                crumbs.append((term.name, term.url))

        if kind.hierarchical and item.parent is not None:
            for ancestor in _chain_to_root(item.parent):
                crumbs.append((ancestor.title, ancestor.url))

        crumbs.append((item.title, item.url))
        return self._number(crumbs)

    @staticmethod
    def _number(crumbs: list[tuple[str, str]]) -> list[dict[str, Any]]:
        # Crumbs without a URL are dropped; a blank name falls back to the URL.
        kept = [(name or url, url) for name, url in crumbs if url]
        return [
            {
                "@type": "ListItem",
                "position": position,
                "name": name,
                "item": url,
            }
            for position, (name, url) in enumerate(kept, start=1)
        ]


class BreadcrumbListSchema:
    def __init__(self, assembler: Optional[BreadcrumbAssembler] = None) -> None:
        self._assembler = assembler or BreadcrumbAssembler()

    def get_type(self) -> str:
        return "BreadcrumbList"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        items = self._assembler.assemble(settings, item)
        if not items:
            return {}
        logger.debug("Generated BreadcrumbList schema with %d items", len(items))
        return wrap(self.get_type(), {"itemListElement": items})
