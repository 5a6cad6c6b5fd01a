"""Content repository: loads immutable render snapshots from the database.

The schema engine never touches the database itself; this repository is
the read side that resolves parent and category chains into
:class:`~schema_manager.records.ContentItem` records, plus the two write
paths editors use: saving per-item overrides and bulk type assignment.
"""

import logging
from datetime import date, datetime
from typing import Any, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from schema_manager.database import get_session
from schema_manager.models import (
    CommerceProductRow,
    ContentItemRow,
    ContentKindRow,
    ItemTerm,
    TaxonomyTerm,
)
from schema_manager.modules.content.block_parser import parse_blocks
from schema_manager.records import CommerceItem, ContentItem, ContentKind, ItemRef, TermRef
from schema_manager.utils.validators import validate_json_ld

logger = logging.getLogger(__name__)

PRIMARY_TAXONOMY = "category"
PRODUCT_FIELDS = frozenset(
    column.name for column in CommerceProductRow.__table__.columns if column.name != "item_id"
)


def _as_datetime(value: Any) -> Optional[datetime]:
    """Accept datetimes (as YAML loads them) or ISO 8601 strings."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


class ContentRepository:
    """Read and update content items for schema rendering.

    Usage::

        repo = ContentRepository()
        item = repo.get_item(42)
        commerce = repo.get_commerce(42)
    """

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def get_item(self, item_id: int) -> ContentItem:
        """Return the render snapshot for *item_id*.

        Raises:
            ValueError: If no such item exists.
        """
        with get_session() as session:
            row = session.get(ContentItemRow, item_id)
            if row is None:
                raise ValueError("Content item not found: " + str(item_id))
            return self._to_item(session, row)

    def get_commerce(self, item_id: int) -> Optional[CommerceItem]:
        """Commerce data for *item_id*, or ``None`` if it is not sold."""
        with get_session() as session:
            product = session.get(CommerceProductRow, item_id)
            if product is None:
                return None
            return CommerceItem(
                name=product.name,
                price=product.price,
                currency=product.currency,
                stock_status=product.stock_status,
                sku=product.sku,
                rating_value=product.rating_value,
                review_count=product.review_count,
                image_url=product.image_url,
                short_description=product.short_description,
                description=product.description,
            )

    def list_terms(self, taxonomy: str) -> list[dict[str, Any]]:
        """Terms of *taxonomy* sorted by name, each with its item count."""
        with get_session() as session:
            terms = session.scalars(
                select(TaxonomyTerm)
                .where(TaxonomyTerm.taxonomy == taxonomy)
                .order_by(TaxonomyTerm.name)
            ).all()
            return [
                {"id": term.id, "name": term.name, "count": len(term.links)}
                for term in terms
            ]

    def _to_item(self, session: Session, row: ContentItemRow) -> ContentItem:
        kind = ContentKind(
            name=row.kind.name,
            label=row.kind.label,
            hierarchical=row.kind.hierarchical,
            has_archive=row.kind.has_archive,
            archive_url=row.kind.archive_url,
        )
        return ContentItem(
            id=row.id,
            title=row.title,
            url=row.url,
            kind=kind,
            excerpt=row.excerpt or "",
            body=row.content or "",
            blocks=parse_blocks(row.content or ""),
            published_at=row.published_at,
            modified_at=row.modified_at,
            author_name=row.author_name or "",
            image_url=row.image_url or "",
            parent=self._parent_chain(session, row),
            primary_term=self._primary_term(session, row),
            schema_enabled=row.schema_enabled,
            schema_type=row.schema_type or "",
            custom_json=row.custom_json or "",
        )

    @staticmethod
    def _parent_chain(session: Session, row: ContentItemRow) -> Optional[ItemRef]:
        ancestors: list[ContentItemRow] = []
        seen = {row.id}
        parent_id = row.parent_id
        while parent_id is not None and parent_id not in seen:
            seen.add(parent_id)
            parent = session.get(ContentItemRow, parent_id)
            if parent is None:
                break
            ancestors.append(parent)
            parent_id = parent.parent_id

        ref: Optional[ItemRef] = None
        for ancestor in reversed(ancestors):
            ref = ItemRef(id=ancestor.id, title=ancestor.title, url=ancestor.url, parent=ref)
        return ref

    @staticmethod
    def _primary_term(session: Session, row: ContentItemRow) -> Optional[TermRef]:
        primary = next(
            (link.term for link in row.terms if link.term.taxonomy == PRIMARY_TAXONOMY),
            None,
        )
        if primary is None:
            return None

        chain = [primary]
        seen = {primary.id}
        parent_id = primary.parent_id
        while parent_id is not None and parent_id not in seen:
            seen.add(parent_id)
            parent = session.get(TaxonomyTerm, parent_id)
            if parent is None:
                break
            chain.append(parent)
            parent_id = parent.parent_id

        ref: Optional[TermRef] = None
        for term in reversed(chain):
            ref = TermRef(name=term.name, url=term.url, parent=ref)
        return ref

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def save_overrides(
        self,
        item_id: int,
        enabled: Optional[bool] = None,
        schema_type: Optional[str] = None,
        custom_json: Optional[str] = None,
    ) -> ContentItem:
        """Store per-item overrides.  Invalid custom JSON-LD is saved as blank.

        Raises:
            ValueError: If no such item exists.
        """
        with get_session() as session:
            row = session.get(ContentItemRow, item_id)
            if row is None:
                raise ValueError("Content item not found: " + str(item_id))
            if enabled is not None:
                row.schema_enabled = enabled
            if schema_type is not None:
                row.schema_type = schema_type.strip()
            if custom_json is not None:
                if custom_json.strip():
                    ok, err = validate_json_ld(custom_json)
                    if not ok:
                        logger.warning("Discarding custom JSON-LD for item %s: %s", item_id, err)
                        custom_json = ""
                row.custom_json = custom_json
            session.flush()
            return self._to_item(session, row)

    def bulk_assign(
        self,
        taxonomy: str,
        term_id: int,
        schema_type: str,
        enable: bool = False,
        allowed_types: Optional[Iterable[str]] = None,
    ) -> int:
        """Set *schema_type* on every item filed under a term.

        Returns:
            Number of items updated.

        Raises:
            ValueError: On missing arguments, an unknown taxonomy, term or
                type, or a term with no items.
        """
        if not taxonomy or not term_id or not schema_type:
            raise ValueError("taxonomy, term_id and schema_type are all required.")
        if allowed_types is not None and schema_type not in set(allowed_types):
            raise ValueError(f"Unknown schema type: {schema_type!r}")

        with get_session() as session:
            known = session.scalar(
                select(TaxonomyTerm.id).where(TaxonomyTerm.taxonomy == taxonomy).limit(1)
            )
            if known is None:
                raise ValueError(f"Invalid taxonomy: {taxonomy!r}")
            term = session.get(TaxonomyTerm, term_id)
            if term is None or term.taxonomy != taxonomy:
                raise ValueError(f"Invalid term: {term_id}")

            rows = session.scalars(
                select(ContentItemRow)
                .join(ItemTerm, ItemTerm.item_id == ContentItemRow.id)
                .where(ItemTerm.term_id == term_id)
            ).all()
            if not rows:
                raise ValueError(f'No items found in "{term.name}".')

            for row in rows:
                row.schema_type = schema_type
                if enable:
                    row.schema_enabled = True

            logger.info(
                'Updated %d items to "%s" schema in "%s"', len(rows), schema_type, term.name
            )
            return len(rows)

    def import_content(self, data: dict[str, Any]) -> dict[str, int]:
        """Load kinds, terms, items and products from a plain mapping.

        Expected shape (every section optional)::

            kinds: [{name, label, hierarchical, has_archive, archive_url}]
            terms: [{id, taxonomy, name, url, parent_id}]
            items: [{id, kind, title, url, ..., terms: [term_id], product: {...}}]

        Returns:
            Counts of imported kinds, terms and items.

        Raises:
            ValueError: If a product mapping carries fields the store does not know.
        """
        counts = {"kinds": 0, "terms": 0, "items": 0}
        with get_session() as session:
            for kind in data.get("kinds", []):
                session.merge(ContentKindRow(
                    name=kind["name"],
                    label=kind.get("label", ""),
                    hierarchical=bool(kind.get("hierarchical", False)),
                    has_archive=bool(kind.get("has_archive", False)),
                    archive_url=kind.get("archive_url", ""),
                ))
                counts["kinds"] += 1
            session.flush()

            for term in data.get("terms", []):
                session.merge(TaxonomyTerm(
                    id=term["id"],
                    taxonomy=term.get("taxonomy", PRIMARY_TAXONOMY),
                    name=term["name"],
                    url=term.get("url", ""),
                    parent_id=term.get("parent_id"),
                ))
                counts["terms"] += 1
            session.flush()

            for entry in data.get("items", []):
                row = session.merge(ContentItemRow(
                    id=entry["id"],
                    kind_name=entry.get("kind", "post"),
                    parent_id=entry.get("parent_id"),
                    title=entry["title"],
                    url=entry["url"],
                    excerpt=entry.get("excerpt", ""),
                    content=entry.get("content", ""),
                    author_name=entry.get("author", ""),
                    image_url=entry.get("image_url", ""),
                    published_at=_as_datetime(entry.get("published_at")),
                    modified_at=_as_datetime(entry.get("modified_at")),
                    schema_enabled=entry.get("schema_enabled"),
                    schema_type=entry.get("schema_type", ""),
                    custom_json=entry.get("custom_json", ""),
                ))
                session.flush()
                for position, term_id in enumerate(entry.get("terms", [])):
                    link = session.scalar(
                        select(ItemTerm).where(
                            ItemTerm.item_id == row.id, ItemTerm.term_id == term_id
                        )
                    )
                    if link is None:
                        session.add(ItemTerm(item_id=row.id, term_id=term_id, position=position))
                    else:
                        link.position = position
                product = entry.get("product")
                if product:
                    unknown = sorted(set(product) - PRODUCT_FIELDS)
                    if unknown:
                        raise ValueError(
                            f"Unknown product fields for item {row.id}: {', '.join(unknown)}"
                        )
                    session.merge(CommerceProductRow(item_id=row.id, **product))
                counts["items"] += 1

        logger.info("Imported content: %s", counts)
        return counts
