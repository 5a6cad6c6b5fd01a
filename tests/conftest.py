"""Shared pytest fixtures for Schema Manager tests."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'schema_manager' is importable.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from schema_manager.records import (  # noqa: E402
    Block,
    CommerceItem,
    ContentItem,
    ContentKind,
    ItemRef,
    PAGE_KIND,
    POST_KIND,
    TermRef,
)
from schema_manager.settings import SiteSettings  # noqa: E402

FIXED_NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)

PRODUCT_KIND = ContentKind(
    name="product",
    label="Products",
    has_archive=True,
    archive_url="https://example.com/shop/",
)


@pytest.fixture(autouse=True)
def _reset_db_engine():
    """Autouse fixture: reset the global DB engine before and after every test.

    This prevents cross-test pollution when tests create their own in-memory
    databases.
    """
    from schema_manager.database import reset_engine
    reset_engine()
    yield
    reset_engine()


@pytest.fixture()
def test_db():
    """Provide an in-memory SQLite database with all tables created.

    Yields a database URL string. The engine is automatically torn down
    after the test by the autouse ``_reset_db_engine`` fixture.
    """
    from schema_manager.database import init_db, reset_engine
    reset_engine()
    db_url = "sqlite:///:memory:"
    init_db(database_url=db_url, echo=False)
    yield db_url


@pytest.fixture()
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture()
def empty_settings():
    return SiteSettings.from_mapping({"enabled_post_types": ("post", "page", "product")})


@pytest.fixture()
def site_settings():
    """A fully populated local-business site."""
    return SiteSettings.from_mapping({
        "schema_type": "LocalBusiness",
        "website_schema": True,
        "breadcrumb_enabled": True,
        "enabled_post_types": ["post", "page", "product"],
        "site_name": "Example Bakery",
        "site_url": "https://example.com",
        "site_description": "Fresh bread daily.",
        "org_name": "Example Bakery Ltd",
        "org_url": "https://example.com",
        "org_logo": "https://example.com/logo.png",
        "org_phone": "+44 20 7946 0000",
        "org_email": "hello@example.com",
        "org_street": "1 High Street",
        "org_locality": "Bristol",
        "org_region": "Avon",
        "org_postal_code": "BS1 1AA",
        "org_country": "GB",
        "person_name": "Sam Baker",
        "person_url": "https://example.com/sam/",
        "person_job_title": "Head Baker",
        "lb_price_range": "££",
        "lb_opening_hours": "Mo-Fr 09:00-17:00, Sa 10:00-14:00",
        "service_name": "Wedding Cakes",
        "service_description": "Bespoke cakes.",
        "service_url": "https://example.com/cakes/",
        "service_type": "Bakery",
        "service_area": "Bristol",
    })


@pytest.fixture()
def post_item():
    """A post filed under Baking > Bread."""
    category = TermRef(
        name="Bread",
        url="https://example.com/category/baking/bread/",
        parent=TermRef(name="Baking", url="https://example.com/category/baking/"),
    )
    return ContentItem(
        id=20,
        title="Sourdough Basics",
        url="https://example.com/sourdough-basics/",
        kind=POST_KIND,
        excerpt="<p>How we feed our starter.</p>",
        body="<p>Long body text.</p>",
        published_at=datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc),
        modified_at=datetime(2024, 3, 2, 10, 30, tzinfo=timezone.utc),
        author_name="Sam Baker",
        primary_term=category,
    )


@pytest.fixture()
def page_item():
    """A page two levels below the root."""
    parent = ItemRef(
        id=11,
        title="Team",
        url="https://example.com/about/team/",
        parent=ItemRef(id=10, title="About", url="https://example.com/about/"),
    )
    return ContentItem(
        id=12,
        title="Bakers",
        url="https://example.com/about/team/bakers/",
        kind=PAGE_KIND,
        parent=parent,
    )


@pytest.fixture()
def product_item():
    return ContentItem(
        id=30,
        title="Country Loaf",
        url="https://example.com/shop/country-loaf/",
        kind=PRODUCT_KIND,
        excerpt="A crusty loaf.",
        image_url="https://example.com/loaf.jpg",
        schema_type="Product",
    )


@pytest.fixture()
def commerce_item():
    return CommerceItem(
        name="Country Loaf",
        price="4.50",
        currency="GBP",
        stock_status="instock",
        sku="LOAF-01",
        rating_value=4.8,
        review_count=23,
        image_url="https://example.com/loaf.jpg",
        short_description="<p>A crusty white sourdough.</p>",
    )


def _details_block(summary: str, answer: str) -> Block:
    paragraph_html = "<p>" + answer + "</p>" if answer else ""
    paragraph = Block(
        name="core/paragraph",
        inner_html=paragraph_html,
        inner_content=(paragraph_html,),
    )
    head = "<details><summary>" + summary + "</summary>"
    tail = "</details>"
    return Block(
        name="core/details",
        inner_html=head + tail,
        inner_blocks=(paragraph,),
        inner_content=(head, None, tail),
    )


@pytest.fixture()
def details_block():
    """Factory for a parsed accordion block with one paragraph child."""
    return _details_block


@pytest.fixture()
def sample_content():
    """Content mapping in the shape accepted by ``ContentRepository.import_content``."""
    return {
        "kinds": [
            {"name": "post", "label": "Posts"},
            {"name": "page", "label": "Pages", "hierarchical": True},
            {
                "name": "product",
                "label": "Products",
                "has_archive": True,
                "archive_url": "https://example.com/shop/",
            },
        ],
        "terms": [
            {"id": 1, "taxonomy": "category", "name": "Baking",
             "url": "https://example.com/category/baking/"},
            {"id": 2, "taxonomy": "category", "name": "Bread",
             "url": "https://example.com/category/baking/bread/", "parent_id": 1},
            {"id": 3, "taxonomy": "category", "name": "Empty",
             "url": "https://example.com/category/empty/"},
        ],
        "items": [
            {"id": 10, "kind": "page", "title": "About", "url": "https://example.com/about/"},
            {"id": 11, "kind": "page", "parent_id": 10, "title": "Team",
             "url": "https://example.com/about/team/"},
            {
                "id": 20,
                "kind": "post",
                "title": "Sourdough Basics",
                "url": "https://example.com/sourdough-basics/",
                "excerpt": "How we feed our starter.",
                "author": "Sam Baker",
                "published_at": "2024-03-01T09:00:00+00:00",
                "terms": [2],
                "content": (
                    "<!-- wp:details --><details><summary>How long?</summary>"
                    "<!-- wp:paragraph --><p>Twelve hours.</p><!-- /wp:paragraph -->"
                    "</details><!-- /wp:details -->"
                ),
            },
            {
                "id": 21,
                "kind": "post",
                "title": "Rye Notes",
                "url": "https://example.com/rye-notes/",
                "terms": [2],
            },
            {
                "id": 30,
                "kind": "product",
                "title": "Country Loaf",
                "url": "https://example.com/shop/country-loaf/",
                "schema_type": "Product",
                "product": {
                    "name": "Country Loaf",
                    "price": "4.50",
                    "currency": "GBP",
                    "stock_status": "outofstock",
                    "sku": "LOAF-01",
                    "rating_value": 4.8,
                    "review_count": 23,
                },
            },
        ],
    }


@pytest.fixture()
def seeded_db(test_db, sample_content):
    """In-memory database loaded with ``sample_content``."""
    from schema_manager.modules.content.repository import ContentRepository
    ContentRepository().import_content(sample_content)
    yield test_db
