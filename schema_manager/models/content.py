"""Content kind, item, and commerce-product SQLAlchemy models."""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from schema_manager.database import Base

if TYPE_CHECKING:
    from schema_manager.models.taxonomy import ItemTerm


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentKindRow(Base):
    """A content kind (post type) with its archive and hierarchy flags."""

    __tablename__ = "content_kinds"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    label: Mapped[str] = mapped_column(String(255), default="")
    hierarchical: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    has_archive: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    archive_url: Mapped[str] = mapped_column(String(2048), default="")

    items: Mapped[list["ContentItemRow"]] = relationship(back_populates="kind")

    def __repr__(self) -> str:
        return f"<ContentKindRow name={self.name!r}>"


class ContentItemRow(Base):
    """A post, page, or other content item plus its schema overrides."""

    __tablename__ = "content_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kind_name: Mapped[str] = mapped_column(
        String(100), ForeignKey("content_kinds.name"), nullable=False, index=True
    )
    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("content_items.id", ondelete="SET NULL"), nullable=True, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    excerpt: Mapped[str] = mapped_column(Text, default="")
    content: Mapped[str] = mapped_column(Text, default="")
    author_name: Mapped[str] = mapped_column(String(255), default="")
    image_url: Mapped[str] = mapped_column(String(2048), default="")
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    modified_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    # Per-item schema overrides; schema_enabled NULL means "not set".
    schema_enabled: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    schema_type: Mapped[str] = mapped_column(String(100), default="")
    custom_json: Mapped[str] = mapped_column(Text, default="")

    kind: Mapped["ContentKindRow"] = relationship(back_populates="items", lazy="selectin")
    terms: Mapped[list["ItemTerm"]] = relationship(
        back_populates="item", cascade="all, delete-orphan", lazy="selectin",
        order_by="ItemTerm.position",
    )
    product: Mapped[Optional["CommerceProductRow"]] = relationship(
        back_populates="item", uselist=False, cascade="all, delete-orphan", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<ContentItemRow id={self.id} title={self.title!r}>"


class CommerceProductRow(Base):
    """Store data for a content item of the ``product`` kind."""

    __tablename__ = "commerce_products"

    item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("content_items.id", ondelete="CASCADE"), primary_key=True
    )
    name: Mapped[str] = mapped_column(String(500), default="")
    price: Mapped[str] = mapped_column(String(50), default="")
    currency: Mapped[str] = mapped_column(String(10), default="")
    stock_status: Mapped[str] = mapped_column(String(50), default="instock")
    sku: Mapped[str] = mapped_column(String(100), default="")
    rating_value: Mapped[float] = mapped_column(Float, default=0.0)
    review_count: Mapped[int] = mapped_column(Integer, default=0)
    image_url: Mapped[str] = mapped_column(String(2048), default="")
    short_description: Mapped[str] = mapped_column(Text, default="")
    description: Mapped[str] = mapped_column(Text, default="")

    item: Mapped["ContentItemRow"] = relationship(back_populates="product")

    def __repr__(self) -> str:
        return f"<CommerceProductRow item_id={self.item_id} sku={self.sku!r}>"
