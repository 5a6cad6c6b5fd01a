"""Taxonomy term and item/term link SQLAlchemy models."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from schema_manager.database import Base

if TYPE_CHECKING:
    from schema_manager.models.content import ContentItemRow


class TaxonomyTerm(Base):
    """A term (category, tag, ...) in a possibly hierarchical taxonomy."""

    __tablename__ = "taxonomy_terms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    taxonomy: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), default="")
    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("taxonomy_terms.id", ondelete="SET NULL"), nullable=True
    )

    links: Mapped[list["ItemTerm"]] = relationship(
        back_populates="term", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<TaxonomyTerm id={self.id} taxonomy={self.taxonomy!r} name={self.name!r}>"


class ItemTerm(Base):
    """Assignment of a term to an item; lowest position is the primary term."""

    __tablename__ = "item_terms"
    __table_args__ = (UniqueConstraint("item_id", "term_id", name="uq_item_term"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("content_items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    term_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("taxonomy_terms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0)

    item: Mapped["ContentItemRow"] = relationship(back_populates="terms")
    term: Mapped["TaxonomyTerm"] = relationship(back_populates="links", lazy="selectin")

    def __repr__(self) -> str:
        return f"<ItemTerm item_id={self.item_id} term_id={self.term_id}>"
