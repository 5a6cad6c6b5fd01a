"""Tests for the shared field helpers: cleaning, wrapping, addresses, text."""

import pytest

from schema_manager.modules.schema_types.fields import (
    SCHEMA_CONTEXT,
    build_address,
    clean_fields,
    finalize,
    organization_ref,
    wrap,
)
from schema_manager.settings import SiteSettings
from schema_manager.utils.helpers import strip_all_tags, trim_words, truncate_chars


# ===========================================================================
# 1. FieldCleaner
# ===========================================================================
class TestCleanFields:

    def test_drops_empty_values(self):
        data = {"name": "Acme", "url": "", "logo": None, "sameAs": [], "address": {}}
        assert clean_fields(data) == {"name": "Acme"}

    def test_keeps_zero_and_false(self):
        data = {"reviewCount": 0, "isFamilyFriendly": False, "ratingValue": 0.0}
        assert clean_fields(data) == data

    def test_cleans_nested_dict_one_level(self):
        data = {"brand": {"@type": "Brand", "name": ""}, "offers": {"price": "", "sku": None}}
        assert clean_fields(data) == {"brand": {"@type": "Brand"}}

    def test_does_not_mutate_input(self):
        data = {"name": "Acme", "url": ""}
        clean_fields(data)
        assert data == {"name": "Acme", "url": ""}


# ===========================================================================
# 2. wrap / finalize
# ===========================================================================
class TestWrap:

    def test_wrap_puts_context_and_type_first(self):
        result = wrap("Organization", {"name": "Acme"})
        assert list(result) == ["@context", "@type", "name"]
        assert result["@context"] == SCHEMA_CONTEXT

    def test_finalize_without_name_or_url_is_empty(self):
        assert finalize("Organization", {"telephone": "123"}) == {}

    @pytest.mark.parametrize("data", [{"name": "Acme"}, {"url": "https://acme.test"}])
    def test_finalize_with_identifier(self, data):
        assert finalize("Organization", data)["@type"] == "Organization"


# ===========================================================================
# 3. AddressBuilder
# ===========================================================================
class TestBuildAddress:

    def test_all_empty_is_none(self):
        assert build_address() is None

    def test_region_and_postcode_alone_are_not_enough(self):
        assert build_address(region="Avon", postal_code="BS1 1AA") is None

    @pytest.mark.parametrize("field,key", [
        ("street", "streetAddress"),
        ("locality", "addressLocality"),
        ("country", "addressCountry"),
    ])
    def test_any_anchor_field_yields_address(self, field, key):
        address = build_address(**{field: "x"})
        assert address == {"@type": "PostalAddress", key: "x"}

    def test_full_address(self):
        address = build_address("1 High St", "Bristol", "Avon", "BS1 1AA", "GB")
        assert address == {
            "@type": "PostalAddress",
            "streetAddress": "1 High St",
            "addressLocality": "Bristol",
            "addressRegion": "Avon",
            "postalCode": "BS1 1AA",
            "addressCountry": "GB",
        }


class TestOrganizationRef:

    def test_none_without_org_name(self):
        assert organization_ref(SiteSettings()) is None

    def test_url_only_when_requested(self):
        settings = SiteSettings.from_mapping({"org_name": "Acme", "org_url": "https://acme.test"})
        assert organization_ref(settings) == {"@type": "Organization", "name": "Acme"}
        assert organization_ref(settings, with_url=True)["url"] == "https://acme.test"


# ===========================================================================
# 4. Text helpers
# ===========================================================================
class TestTextHelpers:

    def test_strip_all_tags_drops_script_bodies(self):
        html = "<p>Hello <b>world</b></p><script>alert(1)</script>"
        assert strip_all_tags(html) == "Hello world"

    def test_strip_all_tags_empty(self):
        assert strip_all_tags("") == ""

    def test_truncate_chars_at_exact_count(self):
        text = "a" * 161
        assert truncate_chars(text) == "a" * 157 + "..."
        assert truncate_chars("a" * 160) == "a" * 160

    def test_trim_words(self):
        assert trim_words("one two three", 2) == "one two…"
        assert trim_words("  one   two  ", 5) == "one two"
