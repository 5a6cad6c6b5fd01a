"""Product and Offer schema types.

Both have two paths: a commerce path used when the item is a store product
and commerce data is available, and a generic path built from the content
item alone that never emits price fields.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from schema_manager.modules.schema_types.fields import (
    SchemaObject,
    brand_ref,
    clean_fields,
    finalize,
    organization_ref,
)
from schema_manager.records import CommerceItem, ContentItem, StockStatus
from schema_manager.settings import SiteSettings
from schema_manager.utils.helpers import strip_all_tags, trim_words

logger = logging.getLogger(__name__)

PRODUCT_KIND = "product"

AVAILABILITY: dict[str, str] = {
    StockStatus.IN_STOCK.value: "https://schema.org/InStock",
    StockStatus.OUT_OF_STOCK.value: "https://schema.org/OutOfStock",
    StockStatus.BACK_ORDER.value: "https://schema.org/BackOrder",
}
_STATUS_ALIASES = {"backorder": StockStatus.BACK_ORDER.value}
NEW_CONDITION = "https://schema.org/NewCondition"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def availability_iri(stock_status: str) -> str:
    """Map a stock slug or schema.org name to its IRI; unknown values mean InStock."""
    if isinstance(stock_status, StockStatus):
        stock_status = stock_status.value
    key = (stock_status or "").strip().lower()
    key = _STATUS_ALIASES.get(key, key)
    return AVAILABILITY.get(key, AVAILABILITY[StockStatus.IN_STOCK.value])


def price_valid_until(now: datetime) -> str:
    """December 31 of *now*'s UTC year, as ``YYYY-12-31``."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return f"{now.year:04d}-12-31"


def uses_commerce(item: Optional[ContentItem], commerce: Optional[CommerceItem]) -> bool:
    return item is not None and commerce is not None and item.kind.name == PRODUCT_KIND


def _rating(commerce: CommerceItem) -> Optional[dict[str, Any]]:
    if commerce.review_count <= 0:
        return None
    return {
        "@type": "AggregateRating",
        "ratingValue": commerce.rating_value,
        "reviewCount": commerce.review_count,
    }


def _commerce_offer(
    settings: SiteSettings,
    item: ContentItem,
    commerce: CommerceItem,
    now: datetime,
) -> dict[str, Any]:
    offer: dict[str, Any] = {
        "url": item.url,
        "priceCurrency": commerce.currency,
        "price": commerce.price,
        "availability": availability_iri(commerce.stock_status),
        "priceValidUntil": price_valid_until(now),
    }
    seller = organization_ref(settings)
    if seller:
        offer["seller"] = seller
    return offer


class ProductSchema:
    """Product with brand, rating and a nested Offer when sold in the store."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or _utcnow

    def get_type(self) -> str:
        return "Product"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        if uses_commerce(item, commerce):
            return self._build_commerce(settings, item, commerce)
        return self._build_generic(settings, item)

    def _build_commerce(
        self, settings: SiteSettings, item: ContentItem, commerce: CommerceItem
    ) -> SchemaObject:
        description = commerce.short_description or commerce.description
        data: dict[str, Any] = {
            "name": commerce.name or item.title,
            "url": item.url,
            "description": strip_all_tags(description),
            "image": commerce.image_url,
            "sku": commerce.sku,
        }
        brand = brand_ref(settings)
        if brand:
            data["brand"] = brand
        rating = _rating(commerce)
        if rating:
            data["aggregateRating"] = rating

        offer = clean_fields(_commerce_offer(settings, item, commerce, self._clock()))
        if offer:
            data["offers"] = {"@type": "Offer", **offer}

        schema = finalize(self.get_type(), data)
        logger.debug("Generated commerce Product schema for item %s", item.id)
        return schema

    def _build_generic(self, settings: SiteSettings, item: Optional[ContentItem]) -> SchemaObject:
        data: dict[str, Any] = {}
        if item is not None:
            data["name"] = item.title
            data["url"] = item.url
            if item.excerpt:
                data["description"] = strip_all_tags(item.excerpt)
            else:
                data["description"] = trim_words(strip_all_tags(item.body), 30)
            if item.image_url:
                data["image"] = item.image_url
        brand = brand_ref(settings)
        if brand:
            data["brand"] = brand

        schema = finalize(self.get_type(), data)
        logger.debug("Generated generic Product schema")
        return schema


class OfferSchema:
    """Stand-alone Offer for a product page."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or _utcnow

    def get_type(self) -> str:
        return "Offer"

    def build(
        self,
        settings: SiteSettings,
        item: Optional[ContentItem] = None,
        commerce: Optional[CommerceItem] = None,
    ) -> SchemaObject:
        if uses_commerce(item, commerce):
            data = _commerce_offer(settings, item, commerce, self._clock())
            data["name"] = commerce.name or item.title
            data["sku"] = commerce.sku
            data["itemCondition"] = NEW_CONDITION
            logger.debug("Generated commerce Offer schema for item %s", item.id)
            return finalize(self.get_type(), data)

        data: dict[str, Any] = {}
        if item is not None:
            data["name"] = item.title
            data["url"] = item.url
        seller = organization_ref(settings)
        if seller:
            data["seller"] = seller
        logger.debug("Generated generic Offer schema")
        return finalize(self.get_type(), data)
