"""Immutable input records consumed by the schema builders.

Every render constructs these fresh from the content store (or from test
fixtures) and hands them to the composer.  Nothing in the engine mutates
them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class StockStatus(str, Enum):
    """Stock status reported by the commerce extension.

    Values are the store's slugs. :func:`availability_iri` also accepts the
    schema.org names (``InStock``, ``OutOfStock``, ``BackOrder``).
    """

    IN_STOCK = "instock"
    OUT_OF_STOCK = "outofstock"
    BACK_ORDER = "onbackorder"


@dataclass(frozen=True)
class ContentKind:
    """A content kind (post type) and the navigation facts breadcrumbs need."""

    name: str
    label: str = ""
    hierarchical: bool = False
    has_archive: bool = False
    archive_url: str = ""


@dataclass(frozen=True)
class TermRef:
    """A taxonomy term with a link to its parent term."""

    name: str
    url: str
    parent: Optional["TermRef"] = None


@dataclass(frozen=True)
class ItemRef:
    """A lightweight reference to an ancestor content item."""

    id: int
    title: str
    url: str
    parent: Optional["ItemRef"] = None


@dataclass(frozen=True)
class Block:
    """One node of a parsed block tree.

    ``inner_content`` interleaves the block's own markup chunks with ``None``
    placeholders marking where each inner block sits.
    """

    name: Optional[str]
    inner_html: str = ""
    attrs: dict[str, Any] = field(default_factory=dict)
    inner_blocks: tuple["Block", ...] = ()
    inner_content: tuple[Optional[str], ...] = ()


POST_KIND = ContentKind(name="post", label="Posts")
PAGE_KIND = ContentKind(name="page", label="Pages", hierarchical=True)


@dataclass(frozen=True)
class ContentItem:
    """Snapshot of the content item a page render is about."""

    id: int
    title: str
    url: str
    kind: ContentKind = POST_KIND
    excerpt: str = ""
    body: str = ""
    blocks: tuple[Block, ...] = ()
    published_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    author_name: str = ""
    image_url: str = ""
    parent: Optional[ItemRef] = None
    primary_term: Optional[TermRef] = None
    schema_enabled: Optional[bool] = None
    schema_type: str = ""
    custom_json: str = ""


@dataclass(frozen=True)
class CommerceItem:
    """Product data supplied by an active commerce extension."""

    name: str = ""
    price: str = ""
    currency: str = ""
    stock_status: str = StockStatus.IN_STOCK.value
    sku: str = ""
    rating_value: float = 0.0
    review_count: int = 0
    image_url: str = ""
    short_description: str = ""
    description: str = ""
