# -*- coding: utf-8 -*-
"""
backend/tests/modules/webhooks/services/test_path_extractor.py

Tests del extractor de rutas con punto/corchetes.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

import pytest

from app.modules.webhooks.services.path_extractor import extract, is_path_expression, split_path


PAYLOAD = {
    "data": {
        "buyer": {"email": "ana@example.com", "document": None},
        "items": [{"sku": "PRO-3"}, {"sku": "ADDON"}],
        "matrix": [[1, 2], [3, 4]],
    },
    "status": "approved",
}


class TestSplitPath:
    """Segmentación de rutas."""

    def test_dots_and_brackets(self):
        assert split_path("data.items[0].sku") == ["data", "items", "0", "sku"]

    def test_ignores_empty_segments(self):
        assert split_path("data..buyer.") == ["data", "buyer"]
        assert split_path("a[0][1]") == ["a", "0", "1"]

    def test_empty_path(self):
        assert split_path("") == []


class TestExtract:
    """Resolución de valores; la ausencia es None, nunca una excepción."""

    def test_nested_object(self):
        assert extract(PAYLOAD, "data.buyer.email") == "ana@example.com"

    def test_array_index(self):
        assert extract(PAYLOAD, "data.items[1].sku") == "ADDON"
        assert extract(PAYLOAD, "data.matrix[1][0]") == 3

    def test_out_of_range_index(self):
        assert extract(PAYLOAD, "data.items[5].sku") is None

    def test_non_numeric_index_on_list(self):
        assert extract(PAYLOAD, "data.items.sku") is None

    def test_negative_index_is_absent(self):
        assert extract(PAYLOAD, "data.items[-1].sku") is None

    def test_missing_key(self):
        assert extract(PAYLOAD, "data.seller.email") is None

    def test_null_intermediate_short_circuits(self):
        assert extract(PAYLOAD, "data.buyer.document.number") is None

    def test_scalar_intermediate(self):
        assert extract(PAYLOAD, "status.code") is None

    def test_empty_path_returns_payload(self):
        assert extract(PAYLOAD, "") is PAYLOAD


class TestIsPathExpression:
    @pytest.mark.parametrize(
        "field,expected",
        [("email", False), ("Plano Pro", False), ("data.email", True), ("items[0]", True)],
    )
    def test_detection(self, field, expected):
        assert is_path_expression(field) is expected
