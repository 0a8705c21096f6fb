# tests/test_models.py
import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from payloads import HEADPHONES, LAPTOP
from sdk.models import Category, Product, decode_products


def test_decode_keeps_server_order():
    products = decode_products(json.dumps([HEADPHONES, LAPTOP]))
    assert [p.id for p in products] == [2, 1]
    assert isinstance(products, tuple)


def test_decode_literal_null_is_none():
    assert decode_products("null") is None


def test_decode_empty_array():
    assert decode_products("[]") == ()


@pytest.mark.parametrize("key", ["id", "ID", "Id", "iD"])
def test_field_names_ignore_case(key):
    body = json.dumps([{key: 7, "NAME": "Cable", "pRiCe": 3.5, "Stock": 0}])
    (p,) = decode_products(body)
    assert p.id == 7
    assert p.name == "Cable"
    assert p.price == Decimal("3.5")
    assert p.stock == 0


def test_nested_category_ignores_case():
    body = json.dumps([dict(HEADPHONES, Category={"ID": 102, "NAME": "Accessories"})])
    (p,) = decode_products(body)
    assert p.category == Category(id=102, name="Accessories")


def test_unknown_fields_are_ignored():
    body = json.dumps([dict(LAPTOP, sku="LP-1", discontinued=False)])
    (p,) = decode_products(body)
    assert p.name == "Laptop"


def test_last_casing_wins_on_duplicates():
    (p,) = decode_products('[{"id": 1, "ID": 9, "name": "x", "price": 1, "stock": 1}]')
    assert p.id == 9


def test_null_category_is_absent():
    (p,) = decode_products(json.dumps([dict(LAPTOP, category=None)]))
    assert p.category is None


@pytest.mark.parametrize("missing", ["id", "name", "price", "stock"])
def test_missing_required_field_fails(missing):
    payload = {k: v for k, v in LAPTOP.items() if k != missing}
    with pytest.raises(ValidationError):
        decode_products(json.dumps([payload]))


@pytest.mark.parametrize(
    "override",
    [
        {"name": ""},
        {"price": -1},
        {"stock": -5},
        {"id": "one"},
        {"stock": 2.5},
        {"price": "1200.5"},
        {"price": True},
        {"price": None},
    ],
)
def test_out_of_range_values_fail(override):
    with pytest.raises(ValidationError):
        decode_products(json.dumps([dict(LAPTOP, **override)]))


@pytest.mark.parametrize(
    "category",
    [{"id": 101}, {"name": "Electronics"}, "Electronics", {"id": "x", "name": "Electronics"}],
)
def test_malformed_category_fails_whole_list(category):
    with pytest.raises(ValidationError):
        decode_products(json.dumps([HEADPHONES, dict(LAPTOP, category=category)]))


@pytest.mark.parametrize("body", ["not json", "", "{}", '{"id": 1}', "42", '"[]"'])
def test_non_array_payloads_fail(body):
    with pytest.raises(ValidationError):
        decode_products(body)


def test_products_are_immutable():
    (p,) = decode_products(json.dumps([LAPTOP]))
    with pytest.raises(ValidationError):
        p.stock = 0


def test_products_compare_by_value():
    a = Product(id=1, name="Laptop", price=Decimal("1200.5"), stock=25)
    (b,) = decode_products(json.dumps([dict(LAPTOP, category=None)]))
    assert a == b
