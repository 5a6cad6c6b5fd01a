"""Tests for the database layer and the content repository."""

from dataclasses import replace

import pytest
from sqlalchemy import inspect

from schema_manager.modules.content.repository import ContentRepository
from schema_manager.modules.output import SchemaComposer


# ===========================================================================
# 1. Database setup
# ===========================================================================
class TestDatabaseSetup:

    def test_init_db_creates_tables(self, test_db):
        from schema_manager.database import get_engine

        table_names = inspect(get_engine()).get_table_names()
        for table in ("content_kinds", "content_items", "taxonomy_terms", "item_terms", "commerce_products"):
            assert table in table_names

    def test_get_session_context_manager(self, test_db):
        from sqlalchemy import text as sa_text

        from schema_manager.database import get_session

        with get_session() as session:
            assert session.execute(sa_text("SELECT 1")).scalar() == 1

    def test_check_connection(self, test_db):
        from schema_manager.database import check_connection

        ok, detail = check_connection()
        assert ok is True
        assert "memory" in detail

    def test_reset_db(self, seeded_db):
        from schema_manager.database import reset_db

        reset_db()
        with pytest.raises(ValueError):
            ContentRepository().get_item(20)


# ===========================================================================
# 2. Read side
# ===========================================================================
class TestRead:

    def test_missing_item(self, test_db):
        with pytest.raises(ValueError, match="not found"):
            ContentRepository().get_item(999)

    def test_post_snapshot(self, seeded_db):
        item = ContentRepository().get_item(20)
        assert item.title == "Sourdough Basics"
        assert item.kind.name == "post"
        assert item.author_name == "Sam Baker"
        assert item.published_at is not None
        assert item.primary_term.name == "Bread"
        assert item.primary_term.parent.name == "Baking"
        assert item.primary_term.parent.parent is None
        assert [b.name for b in item.blocks] == ["core/details"]

    def test_page_parent_chain(self, seeded_db):
        item = ContentRepository().get_item(11)
        assert item.kind.hierarchical is True
        assert item.parent.title == "About"
        assert item.parent.parent is None

    def test_commerce(self, seeded_db):
        repo = ContentRepository()
        commerce = repo.get_commerce(30)
        assert commerce.sku == "LOAF-01"
        assert commerce.stock_status == "outofstock"
        assert repo.get_commerce(20) is None

    def test_list_terms(self, seeded_db):
        terms = ContentRepository().list_terms("category")
        assert [(t["name"], t["count"]) for t in terms] == [("Baking", 0), ("Bread", 2), ("Empty", 0)]

    def test_snapshot_renders_end_to_end(self, seeded_db, site_settings):
        repo = ContentRepository()
        item = replace(repo.get_item(20), schema_type="FAQPage")
        schemas = SchemaComposer().compose(site_settings, item)
        faq = schemas[2]
        assert faq["@type"] == "FAQPage"
        assert faq["mainEntity"][0]["acceptedAnswer"]["text"] == "Twelve hours."
        crumbs = schemas[3]["itemListElement"]
        assert [c["name"] for c in crumbs] == ["Example Bakery", "Baking", "Bread", "Sourdough Basics"]

    def test_import_is_idempotent(self, seeded_db, sample_content):
        counts = ContentRepository().import_content(sample_content)
        assert counts == {"kinds": 3, "terms": 3, "items": 5}
        assert ContentRepository().list_terms("category")[1]["count"] == 2

    def test_unknown_product_field_rejected(self, test_db):
        data = {
            "kinds": [{"name": "product"}],
            "items": [{
                "id": 31, "kind": "product", "title": "Bun", "url": "https://example.com/bun/",
                "product": {"price": "1.00", "colour": "brown"},
            }],
        }
        with pytest.raises(ValueError, match="colour"):
            ContentRepository().import_content(data)
        with pytest.raises(ValueError, match="not found"):
            ContentRepository().get_item(31)


# ===========================================================================
# 3. Overrides
# ===========================================================================
class TestSaveOverrides:

    def test_saves_values(self, seeded_db):
        repo = ContentRepository()
        repo.save_overrides(20, enabled=False, schema_type=" Person ", custom_json='{"@type": "Thing"}')
        item = repo.get_item(20)
        assert item.schema_enabled is False
        assert item.schema_type == "Person"
        assert item.custom_json == '{"@type": "Thing"}'

    def test_invalid_json_is_blanked(self, seeded_db):
        item = ContentRepository().save_overrides(20, custom_json="{broken")
        assert item.custom_json == ""

    def test_unset_arguments_untouched(self, seeded_db):
        repo = ContentRepository()
        repo.save_overrides(20, schema_type="Service")
        item = repo.save_overrides(20, enabled=True)
        assert item.schema_type == "Service"
        assert item.schema_enabled is True

    def test_missing_item(self, test_db):
        with pytest.raises(ValueError):
            ContentRepository().save_overrides(1, enabled=True)


# ===========================================================================
# 4. Bulk assignment
# ===========================================================================
class TestBulkAssign:

    def test_updates_every_item_in_term(self, seeded_db):
        repo = ContentRepository()
        assert repo.bulk_assign("category", 2, "FAQPage", enable=True) == 2
        for item_id in (20, 21):
            item = repo.get_item(item_id)
            assert item.schema_type == "FAQPage"
            assert item.schema_enabled is True

    def test_enable_false_leaves_flag(self, seeded_db):
        repo = ContentRepository()
        repo.bulk_assign("category", 2, "Service")
        assert repo.get_item(21).schema_enabled is None

    @pytest.mark.parametrize("taxonomy,term_id,schema_type,message", [
        ("", 2, "FAQPage", "required"),
        ("category", 0, "FAQPage", "required"),
        ("category", 2, "", "required"),
        ("post_tag", 2, "FAQPage", "Invalid taxonomy"),
        ("category", 99, "FAQPage", "Invalid term"),
        ("category", 3, "FAQPage", "No items found"),
    ])
    def test_errors(self, seeded_db, taxonomy, term_id, schema_type, message):
        with pytest.raises(ValueError, match=message):
            ContentRepository().bulk_assign(taxonomy, term_id, schema_type)

    def test_unknown_type_rejected(self, seeded_db):
        with pytest.raises(ValueError, match="Unknown schema type"):
            ContentRepository().bulk_assign("category", 2, "Spaceship", allowed_types=["FAQPage"])
