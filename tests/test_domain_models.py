"""
Tests for domain models - resource ids, metafield keys and results.
"""
import pytest

from metafield_proxy.domain.models import (
    ContentDigest,
    MetafieldCoordinate,
    ResourceId,
    TranslationResult,
    TranslationSource,
)


class TestResourceId:
    """Tests for ResourceId.parse."""

    def test_parses_product_gid(self):
        resource_id = ResourceId.parse("gid://shopify/Product/111")

        assert resource_id.gid == "gid://shopify/Product/111"
        assert resource_id.resource_type == "Product"
        assert resource_id.numeric_id == 111
        assert str(resource_id) == "gid://shopify/Product/111"

    def test_promotes_numeric_id_to_product_gid(self):
        resource_id = ResourceId.parse("8123456789")

        assert resource_id.gid == "gid://shopify/Product/8123456789"
        assert resource_id.numeric_id == 8123456789

    def test_accepts_integer(self):
        assert ResourceId.parse(42).gid == "gid://shopify/Product/42"

    def test_keeps_other_resource_types(self):
        resource_id = ResourceId.parse("gid://shopify/Collection/9")

        assert resource_id.resource_type == "Collection"
        assert resource_id.numeric_id == 9

    @pytest.mark.parametrize("value", [
        "x",
        "gid://shopify/Product/",
        "gid://shopify/Product/12abc",
        "gid://other/Product/12",
        "gid://shopify/Product/12/extra",
    ])
    def test_rejects_ambiguous_values(self, value):
        with pytest.raises(ValueError):
            ResourceId.parse(value)


class TestMetafieldCoordinate:

    def test_translation_key(self):
        assert MetafieldCoordinate("custom", "desc").translation_key == "metafields.custom.desc"


class TestContentDigest:

    def test_from_content(self):
        digest = ContentDigest.from_content({
            "key": "metafields.custom.desc",
            "digest": "abc123",
            "value": "Red shoes",
            "locale": "en",
        })

        assert digest.digest == "abc123"
        assert digest.value == "Red shoes"

    def test_from_content_without_digest(self):
        assert ContentDigest.from_content({"key": "metafields.custom.desc", "digest": None}) is None


class TestTranslationResult:

    def test_source_is_the_wire_tag(self):
        result = TranslationResult("Rote Schuhe", "de", True, TranslationSource.GOOGLE_TRANSLATE_REGISTERED_REST)

        assert result.source == "google_translate_registered_rest"
        assert result.message is None
