"""Tests for entity identity resolution (identity.py)."""

import pytest

from entitoon.integration.toon.identity import (
    FALLBACK_ID_LENGTH,
    IdentityResolver,
    generate_fallback_id,
    is_truthy,
)


class TestIdentityResolver:
    """Test key field precedence and fallback ids."""

    def test_string_key_field(self):
        assert IdentityResolver().resolve({"id": "P-101"}, "id") == "P-101"

    def test_numeric_key_field(self):
        assert IdentityResolver().resolve({"id": 42}, "id") == "42"
        assert IdentityResolver().resolve({"id": 1.5}, "id") == "1.5"

    def test_boolean_key_field(self):
        assert IdentityResolver().resolve({"id": True}, "id") == "true"

    def test_custom_key_field(self):
        record = {"id": "ignored", "patient_id": "P-7"}
        assert IdentityResolver().resolve(record, "patient_id") == "P-7"

    @pytest.mark.parametrize("missing", [None, "", 0, 0.0, False, float("nan"), []])
    def test_falsy_values_use_fallback(self, missing, sequential_ids):
        resolver = IdentityResolver(sequential_ids)
        assert resolver.resolve({"id": missing}, "id") == "id00001"

    def test_absent_field_uses_fallback(self, sequential_ids):
        resolver = IdentityResolver(sequential_ids)
        assert resolver.resolve({"name": "x"}, "id") == "id00001"
        assert resolver.resolve({"name": "y"}, "id") == "id00002"

    def test_non_mapping_record_uses_fallback(self, sequential_ids):
        assert IdentityResolver(sequential_ids).resolve("text", "id") == "id00001"

    def test_default_fallback_is_eight_characters(self):
        token = IdentityResolver().resolve({}, "id")
        assert len(token) == FALLBACK_ID_LENGTH

    def test_default_fallbacks_differ(self):
        resolver = IdentityResolver()
        assert resolver.resolve({}, "id") != resolver.resolve({}, "id")

    def test_empty_factory_result_is_replaced(self):
        token = IdentityResolver(lambda: "").resolve({}, "id")
        assert len(token) == FALLBACK_ID_LENGTH

    def test_non_string_factory_result_is_stringified(self):
        assert IdentityResolver(lambda: 12345678).resolve({}, "id") == "12345678"


class TestFallbackHelpers:
    """Test fallback token generation and truthiness."""

    def test_generate_fallback_id_shape(self):
        token = generate_fallback_id()
        assert len(token) == 8
        assert all(c in "0123456789abcdef" for c in token)

    def test_is_truthy(self):
        assert is_truthy("x")
        assert is_truthy(-1)
        assert not is_truthy(float("nan"))
        assert not is_truthy(None)
