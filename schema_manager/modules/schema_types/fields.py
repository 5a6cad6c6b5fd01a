"""Shared assembly helpers for every schema builder.

Builders never share mutable state: each helper returns a brand-new dict, so
nested objects are always embedded by value.
"""

from typing import Any, Optional, Protocol

from schema_manager.records import CommerceItem, ContentItem
from schema_manager.settings import SiteSettings

SCHEMA_CONTEXT = "https://schema.org"

SchemaObject = dict[str, Any]


class SchemaBuilder(Protocol):
    """Interface every schema type implements."""

    def get_type(self) -> str:
        ...

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        ...


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (dict, list, tuple)):
        return len(value) == 0
    return False


def clean_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Drop empty strings, ``None`` and empty containers.

    Nested dicts are cleaned one level deep before the emptiness check;
    numbers and booleans (including ``0`` and ``False``) are kept.
    """
    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = {k: v for k, v in value.items() if not _is_empty(v)}
        if _is_empty(value):
            continue
        cleaned[key] = value
    return cleaned


def wrap(schema_type: str, data: dict[str, Any]) -> SchemaObject:
    """Prefix *data* with the JSON-LD ``@context`` and ``@type`` keys."""
    return {"@context": SCHEMA_CONTEXT, "@type": schema_type, **data}


def finalize(schema_type: str, data: dict[str, Any]) -> SchemaObject:
    """Clean, then wrap; ``{}`` when neither ``name`` nor ``url`` survived."""
    data = clean_fields(data)
    if "name" not in data and "url" not in data:
        return {}
    return wrap(schema_type, data)


def build_address(
    street: str = "",
    locality: str = "",
    region: str = "",
    postal_code: str = "",
    country: str = "",
) -> Optional[dict[str, str]]:
    """Build a PostalAddress fragment, or ``None`` when too sparse to use.

    An address needs at least one of street, locality or country.
    """
    if not street and not locality and not country:
        return None
    address = {"@type": "PostalAddress"}
    if street:
        address["streetAddress"] = street
    if locality:
        address["addressLocality"] = locality
    if region:
        address["addressRegion"] = region
    if postal_code:
        address["postalCode"] = postal_code
    if country:
        address["addressCountry"] = country
    return address


def settings_address(settings: SiteSettings) -> Optional[dict[str, str]]:
    return build_address(
        street=settings.org_street,
        locality=settings.org_locality,
        region=settings.org_region,
        postal_code=settings.org_postal_code,
        country=settings.org_country,
    )


def organization_ref(settings: SiteSettings, with_url: bool = False) -> Optional[dict[str, str]]:
    """Organization stub (name, optionally url) used for seller/provider."""
    if not settings.org_name:
        return None
    ref = {"@type": "Organization", "name": settings.org_name}
    if with_url and settings.org_url:
        ref["url"] = settings.org_url
    return ref


def brand_ref(settings: SiteSettings) -> Optional[dict[str, str]]:
    if not settings.org_name:
        return None
    return {"@type": "Brand", "name": settings.org_name}


def organization_fields(settings: SiteSettings) -> dict[str, Any]:
    """Identity and contact fields shared by every organisation-like type."""
    data: dict[str, Any] = {}
    if settings.org_name:
        data["name"] = settings.org_name
    if settings.org_url:
        data["url"] = settings.org_url
    if settings.org_logo:
        data["logo"] = settings.org_logo
    if settings.org_phone:
        data["telephone"] = settings.org_phone
    if settings.org_email:
        data["email"] = settings.org_email
    address = settings_address(settings)
    if address:
        data["address"] = address
    return data
