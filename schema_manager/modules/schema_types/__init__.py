"""Schema.org JSON-LD builders, one per entity kind."""

from schema_manager.modules.schema_types.breadcrumb import BreadcrumbAssembler, BreadcrumbListSchema
from schema_manager.modules.schema_types.commerce import OfferSchema, ProductSchema, availability_iri
from schema_manager.modules.schema_types.faq import FAQPageSchema, FaqExtractor
from schema_manager.modules.schema_types.fields import build_address, clean_fields, wrap
from schema_manager.modules.schema_types.opening_hours import parse_opening_hours
from schema_manager.modules.schema_types.organization import (
    LocalBusinessSchema,
    OrganizationSchema,
    PersonSchema,
    ProfessionalServiceSchema,
    ServiceSchema,
)
from schema_manager.modules.schema_types.registry import EntityType, TypeRegistry
from schema_manager.modules.schema_types.website import WebPageSchema, WebSiteSchema

__all__ = [
    "BreadcrumbAssembler",
    "BreadcrumbListSchema",
    "EntityType",
    "FAQPageSchema",
    "FaqExtractor",
    "LocalBusinessSchema",
    "OfferSchema",
    "OrganizationSchema",
    "PersonSchema",
    "ProductSchema",
    "ProfessionalServiceSchema",
    "ServiceSchema",
    "TypeRegistry",
    "WebPageSchema",
    "WebSiteSchema",
    "availability_iri",
    "build_address",
    "clean_fields",
    "parse_opening_hours",
    "wrap",
]
