"""SQLAlchemy ORM models; import every model so Base.metadata is populated."""

from schema_manager.models.content import (
    ContentKindRow,
    ContentItemRow,
    CommerceProductRow,
)
from schema_manager.models.taxonomy import (
    TaxonomyTerm,
    ItemTerm,
)

__all__ = [
    "ContentKindRow",
    "ContentItemRow",
    "CommerceProductRow",
    "TaxonomyTerm",
    "ItemTerm",
]
