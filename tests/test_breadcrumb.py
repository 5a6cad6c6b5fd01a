"""Tests for the breadcrumb trail assembler and BreadcrumbList schema."""

from dataclasses import replace

import pytest

from schema_manager.modules.schema_types.breadcrumb import BreadcrumbAssembler, BreadcrumbListSchema
from schema_manager.records import ContentItem, ContentKind, ItemRef, TermRef

PRODUCT_KIND = ContentKind(
    name="product", label="Products", has_archive=True, archive_url="https://example.com/shop/"
)


def _names(trail):
    return [crumb["name"] for crumb in trail]


class TestBreadcrumbAssembler:

    def test_no_item_is_home_only(self, site_settings):
        trail = BreadcrumbAssembler().assemble(site_settings)
        assert trail == [{
            "@type": "ListItem",
            "position": 1,
            "name": "Example Bakery",
            "item": "https://example.com/",
        }]

    def test_post_with_two_level_category(self, site_settings, post_item):
        trail = BreadcrumbAssembler().assemble(site_settings, post_item)
        assert _names(trail) == ["Example Bakery", "Baking", "Bread", "Sourdough Basics"]
        assert [c["position"] for c in trail] == [1, 2, 3, 4]
        assert trail[2]["item"] == "https://example.com/category/baking/bread/"

    def test_page_with_parents(self, site_settings, page_item):
        trail = BreadcrumbAssembler().assemble(site_settings, page_item)
        assert _names(trail) == ["Example Bakery", "About", "Team", "Bakers"]

    def test_product_archive(self, site_settings):
        item = ContentItem(id=30, title="Loaf", url="https://example.com/shop/loaf/", kind=PRODUCT_KIND)
        trail = BreadcrumbAssembler().assemble(site_settings, item)
        assert _names(trail) == ["Example Bakery", "Products", "Loaf"]
        assert trail[1]["item"] == "https://example.com/shop/"

    def test_archive_without_label_uses_kind_name(self, site_settings):
        kind = ContentKind(name="recipe", has_archive=True, archive_url="https://example.com/recipes/")
        item = ContentItem(id=40, title="Focaccia", url="https://example.com/recipes/focaccia/", kind=kind)
        assert _names(BreadcrumbAssembler().assemble(site_settings, item))[1] == "recipe"

    def test_page_kind_never_gets_archive(self, site_settings, page_item):
        kind = replace(page_item.kind, has_archive=True, archive_url="https://example.com/pages/")
        item = replace(page_item, kind=kind, parent=None)
        assert _names(BreadcrumbAssembler().assemble(site_settings, item)) == ["Example Bakery", "Bakers"]

    def test_terms_only_for_standard_posts(self, site_settings, post_item):
        item = replace(post_item, kind=ContentKind(name="recipe"))
        assert _names(BreadcrumbAssembler().assemble(site_settings, item)) == [
            "Example Bakery", "Sourdough Basics",
        ]

    def test_parents_ignored_for_flat_kinds(self, site_settings, post_item):
        item = replace(post_item, primary_term=None, parent=ItemRef(1, "P", "https://example.com/p/"))
        assert len(BreadcrumbAssembler().assemble(site_settings, item)) == 2

    def test_no_site_url_means_no_trail(self, empty_settings, post_item):
        assert BreadcrumbAssembler().assemble(empty_settings, post_item) == []

    @pytest.mark.parametrize("depth", [1, 3, 6])
    def test_positions_contiguous(self, site_settings, depth):
        term = None
        for level in range(depth):
            term = TermRef(name=f"T{level}", url=f"https://example.com/t{level}/", parent=term)
        item = ContentItem(id=1, title="Post", url="https://example.com/post/", primary_term=term)
        trail = BreadcrumbAssembler().assemble(site_settings, item)
        assert [c["position"] for c in trail] == list(range(1, depth + 3))

    def test_blank_names_fall_back_to_url(self, site_settings):
        settings = replace(site_settings, site_name="")
        item = ContentItem(id=5, title="", url="https://example.com/untitled/")
        trail = BreadcrumbAssembler().assemble(settings, item)
        assert _names(trail) == ["https://example.com/", "https://example.com/untitled/"]

    def test_crumbs_without_url_skipped(self, site_settings):
        settings = replace(site_settings, site_name="")
        term = TermRef(name="Cat", url="", parent=TermRef(name="Pets", url="https://example.com/pets/"))
        item = ContentItem(id=6, title="Tabby", url="https://example.com/tabby/", primary_term=term)
        trail = BreadcrumbAssembler().assemble(settings, item)
        assert _names(trail) == ["https://example.com/", "Pets", "Tabby"]
        assert [c["position"] for c in trail] == [1, 2, 3]
        for crumb in trail:
            assert all(value != "" for value in crumb.values())


class TestBreadcrumbListSchema:

    def test_item_list_element(self, site_settings, post_item):
        schema = BreadcrumbListSchema().build(site_settings, post_item)
        assert schema["@type"] == "BreadcrumbList"
        assert len(schema["itemListElement"]) == 4

    def test_empty_without_site_url(self, empty_settings, post_item):
        assert BreadcrumbListSchema().build(empty_settings, post_item) == {}
