"""Entity-type registry: string → enum → builder, plus selectable labels."""

import logging
from enum import Enum
from typing import Callable, Iterable, Optional

from schema_manager.modules.schema_types.commerce import Clock, OfferSchema, ProductSchema
from schema_manager.modules.schema_types.faq import FAQPageSchema
from schema_manager.modules.schema_types.fields import SchemaBuilder
from schema_manager.modules.schema_types.organization import (
    LocalBusinessSchema,
    OrganizationSchema,
    PersonSchema,
    ProfessionalServiceSchema,
    ServiceSchema,
)

logger = logging.getLogger(__name__)

TypeFilter = Callable[[dict[str, str]], dict[str, str]]


class EntityType(str, Enum):
    """Entity kinds a site or item can be configured as."""

    ORGANIZATION = "Organization"
    LOCAL_BUSINESS = "LocalBusiness"
    PROFESSIONAL_SERVICE = "ProfessionalService"
    PERSON = "Person"
    SERVICE = "Service"
    FAQ_PAGE = "FAQPage"
    PRODUCT = "Product"
    OFFER = "Offer"
    WEB_PAGE = "WebPage"
    NONE = ""

    @classmethod
    def parse(cls, value: str | None) -> "EntityType":
        """Map a configured type string to a variant; unknown → ``NONE``."""
        if not value:
            return cls.NONE
        try:
            return cls(value.strip())
        except ValueError:
            logger.debug("Unrecognised entity type: %r", value)
            return cls.NONE


# Labels shown wherever a default or per-item type can be chosen.
DEFAULT_TYPE_LABELS: dict[str, str] = {
    EntityType.ORGANIZATION.value: "Organisation",
    EntityType.LOCAL_BUSINESS.value: "Local Business",
    EntityType.PROFESSIONAL_SERVICE.value: "Professional Service",
    EntityType.PERSON.value: "Person",
    EntityType.SERVICE.value: "Service",
    EntityType.FAQ_PAGE.value: "FAQ Page",
    EntityType.PRODUCT.value: "Product",
    EntityType.OFFER.value: "Offer",
}


class TypeRegistry:
    """Total mapping from :class:`EntityType` to a builder instance.

    ``WebPage`` and ``NONE`` map to no entity builder: the page itself is
    already described by the WebPage object.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        type_filters: Iterable[TypeFilter] = (),
    ) -> None:
        self._builders: dict[EntityType, Optional[SchemaBuilder]] = {
            EntityType.ORGANIZATION: OrganizationSchema(),
            EntityType.LOCAL_BUSINESS: LocalBusinessSchema(),
            EntityType.PROFESSIONAL_SERVICE: ProfessionalServiceSchema(),
            EntityType.PERSON: PersonSchema(),
            EntityType.SERVICE: ServiceSchema(),
            EntityType.FAQ_PAGE: FAQPageSchema(),
            EntityType.PRODUCT: ProductSchema(clock=clock),
            EntityType.OFFER: OfferSchema(clock=clock),
            EntityType.WEB_PAGE: None,
            EntityType.NONE: None,
        }
        self._type_filters = list(type_filters)

    def builder_for(self, entity_type: EntityType | str) -> Optional[SchemaBuilder]:
        if not isinstance(entity_type, EntityType):
            entity_type = EntityType.parse(entity_type)
        return self._builders[entity_type]

    def available_types(self) -> dict[str, str]:
        """Selectable type → label map after every registration filter ran."""
        types = dict(DEFAULT_TYPE_LABELS)
        for type_filter in self._type_filters:
            types = type_filter(types)
        return types
