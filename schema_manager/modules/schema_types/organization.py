"""Entity types driven purely by site settings.

Organization, LocalBusiness, ProfessionalService, Person and Service all
ignore the content item: they describe who runs the site, not the page.
"""

import logging
from typing import Any, Optional

from schema_manager.modules.schema_types.fields import (
    SchemaObject,
    finalize,
    organization_fields,
    organization_ref,
)
from schema_manager.modules.schema_types.opening_hours import parse_opening_hours
from schema_manager.records import CommerceItem, ContentItem
from schema_manager.settings import SiteSettings

logger = logging.getLogger(__name__)


class OrganizationSchema:
    def get_type(self) -> str:
        return "Organization"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        schema = finalize(self.get_type(), organization_fields(settings))
        logger.debug("Generated Organization schema for: %s", settings.org_name)
        return schema


class LocalBusinessSchema:
    """Organization fields plus price range and weekly opening hours."""

    def get_type(self) -> str:
        return "LocalBusiness"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        data = organization_fields(settings)
        if settings.lb_price_range:
            data["priceRange"] = settings.lb_price_range
        hours = parse_opening_hours(settings.lb_opening_hours)
        if hours:
            data["openingHoursSpecification"] = hours

        schema = finalize(self.get_type(), data)
        logger.debug(
            "Generated LocalBusiness schema for: %s (%d opening-hours specs)",
            settings.org_name, len(hours),
        )
        return schema


class ProfessionalServiceSchema:
    def get_type(self) -> str:
        return "ProfessionalService"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        data = organization_fields(settings)
        if settings.lb_price_range:
            data["priceRange"] = settings.lb_price_range
        if settings.service_type:
            data["additionalType"] = settings.service_type

        schema = finalize(self.get_type(), data)
        logger.debug("Generated ProfessionalService schema for: %s", settings.org_name)
        return schema


class PersonSchema:
    def get_type(self) -> str:
        return "Person"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        data: dict[str, Any] = {}
        if settings.person_name:
            data["name"] = settings.person_name
        if settings.person_url:
            data["url"] = settings.person_url
        if settings.person_job_title:
            data["jobTitle"] = settings.person_job_title
        if settings.person_image:
            data["image"] = settings.person_image

        schema = finalize(self.get_type(), data)
        logger.debug("Generated Person schema for: %s", settings.person_name)
        return schema


class ServiceSchema:
    """A service offering, linked to the providing organisation if known."""

    def get_type(self) -> str:
        return "Service"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        data: dict[str, Any] = {}
        if settings.service_name:
            data["name"] = settings.service_name
        if settings.service_description:
            data["description"] = settings.service_description
        if settings.service_url:
            data["url"] = settings.service_url
        if settings.service_area:
            data["areaServed"] = settings.service_area
        if settings.service_type:
            data["serviceType"] = settings.service_type

        provider = organization_ref(settings, with_url=True)
        if provider:
            data["provider"] = provider

        schema = finalize(self.get_type(), data)
        logger.debug("Generated Service schema for: %s", settings.service_name)
        return schema
