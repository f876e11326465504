"""Tests for raw payload adapters."""

import math
from decimal import Decimal
from types import SimpleNamespace

from promo_pricing.adapters import (
    calculate_from_raw,
    cart_from_raw,
    line_item_from_raw,
    promo_from_raw,
    resolve_product_id,
    to_number,
)
from promo_pricing.types import CartLineItem, DiscountResult, ProductRule


class TestResolveProductId:
    """Tests for identifier alias resolution."""

    def test_product_field(self) -> None:
        assert resolve_product_id({"product": "A"}) == "A"

    def test_product_id_field(self) -> None:
        assert resolve_product_id({"productId": "B"}) == "B"

    def test_id_field(self) -> None:
        assert resolve_product_id({"id": "C"}) == "C"

    def test_product_takes_precedence(self) -> None:
        raw = {"product": "A", "productId": "B", "id": "C"}
        assert resolve_product_id(raw) == "A"

    def test_none_falls_through(self) -> None:
        assert resolve_product_id({"product": None, "productId": "B"}) == "B"

    def test_empty_string_does_not_fall_through(self) -> None:
        """Only missing values fall back to the next alias."""
        assert resolve_product_id({"product": "", "id": "C"}) == ""

    def test_trims_whitespace(self) -> None:
        assert resolve_product_id({"product": "  A \n"}) == "A"

    def test_non_string_identifier(self) -> None:
        assert resolve_product_id({"id": 42}) == "42"

    def test_missing(self) -> None:
        assert resolve_product_id({}) == ""
        assert resolve_product_id(None) == ""

    def test_attribute_access(self) -> None:
        raw = SimpleNamespace(productId="P-1", price=5, quantity=1)
        assert resolve_product_id(raw) == "P-1"


class TestToNumber:
    """Tests for lenient numeric coercion."""

    def test_none_is_zero(self) -> None:
        assert to_number(None) == 0.0

    def test_numbers(self) -> None:
        assert to_number(3) == 3.0
        assert to_number(2.5) == 2.5
        assert to_number(Decimal("19.99")) == 19.99

    def test_bool(self) -> None:
        assert to_number(True) == 1.0

    def test_numeric_string(self) -> None:
        assert to_number(" 12.5 ") == 12.5

    def test_blank_string_is_zero(self) -> None:
        assert to_number("  ") == 0.0

    def test_garbage_is_nan(self) -> None:
        assert math.isnan(to_number("abc"))
        assert math.isnan(to_number([1]))

    def test_python_only_spellings_are_nan(self) -> None:
        """Only JavaScript number syntax is accepted from strings."""
        assert math.isnan(to_number("1_000"))
        assert math.isnan(to_number("inf"))
        assert math.isnan(to_number("infinity"))
        assert math.isnan(to_number("nan"))
        assert math.isnan(to_number("NaN"))

    def test_infinity_is_case_sensitive(self) -> None:
        assert to_number("Infinity") == math.inf
        assert to_number("-Infinity") == -math.inf
        assert math.isnan(to_number("INFINITY"))

    def test_decimal_and_exponent_forms(self) -> None:
        assert to_number("1e3") == 1000.0
        assert to_number("-2.5E-1") == -0.25
        assert to_number(".5") == 0.5
        assert to_number("5.") == 5.0

    def test_radix_literals(self) -> None:
        assert to_number("0x1F") == 31.0
        assert to_number("0b101") == 5.0
        assert math.isnan(to_number("-0x1F"))


class TestLineItemFromRaw:
    """Tests for cart line adaptation."""

    def test_string_fields(self) -> None:
        raw = {"productId": "A", "price": "19.99", "quantity": "2"}
        assert line_item_from_raw(raw) == CartLineItem("A", 19.99, 2)

    def test_quantity_is_int(self) -> None:
        item = line_item_from_raw({"product": "A", "price": 1, "quantity": 3.0})
        assert item.quantity == 3
        assert isinstance(item.quantity, int)

    def test_unit_price_alias(self) -> None:
        item = line_item_from_raw({"id": "A", "unitPrice": 7, "quantity": 1})
        assert item.unit_price == 7.0

    def test_missing_fields_are_zero(self) -> None:
        assert line_item_from_raw({"product": "A"}) == CartLineItem("A", 0.0, 0)

    def test_malformed_quantity_is_nan(self) -> None:
        item = line_item_from_raw({"product": "A", "price": 1, "quantity": "two"})
        assert math.isnan(item.quantity)


class TestCartFromRaw:
    """Tests for cart adaptation."""

    def test_adapts_each_line(self) -> None:
        cart = cart_from_raw([{"product": "A", "price": 1, "quantity": 1}, {"id": "B"}])
        assert [item.product_id for item in cart] == ["A", "B"]

    def test_not_a_list_is_empty(self) -> None:
        assert cart_from_raw(None) == ()
        assert cart_from_raw("A") == ()
        assert cart_from_raw({"product": "A"}) == ()


class TestPromoFromRaw:
    """Tests for promo descriptor adaptation."""

    def test_none(self) -> None:
        assert promo_from_raw(None) is None

    def test_unrestricted(self) -> None:
        promo = promo_from_raw({"code": "SAVE10", "discountPercent": 10})
        assert promo.code == "SAVE10"
        assert promo.discount_percent == 10.0
        assert promo.applicable_products == ()
        assert not promo.is_restricted()

    def test_rules(self) -> None:
        promo = promo_from_raw(
            {
                "discountPercent": "25",
                "applicableProducts": [
                    {"productId": "A", "maxDiscountAmount": "30"},
                    {"productId": "B", "maxDiscountAmount": None},
                    {"productId": "C"},
                ],
            }
        )
        assert promo.applicable_products == (
            ProductRule("A", 30.0),
            ProductRule("B", None),
            ProductRule("C", None),
        )

    def test_rule_ids_are_not_trimmed(self) -> None:
        promo = promo_from_raw(
            {"discountPercent": 10, "applicableProducts": [{"productId": " A "}]}
        )
        assert promo.applicable_products == (ProductRule(" A ", None),)

    def test_falsy_rule_id_is_kept(self) -> None:
        promo = promo_from_raw({"discountPercent": 10, "applicableProducts": [{"productId": 0}]})
        assert promo.applicable_products[0].product_id == "0"

    def test_applicable_products_not_a_list(self) -> None:
        promo = promo_from_raw({"discountPercent": 5, "applicableProducts": "A"})
        assert promo.applicable_products == ()

    def test_missing_percent_is_zero(self) -> None:
        assert promo_from_raw({"code": "X"}).discount_percent == 0.0


class TestCalculateFromRaw:
    """End-to-end from raw payloads."""

    def test_aliased_identifiers_match_rules(self) -> None:
        items = [
            {"product": "A", "price": 100, "quantity": 1},
            {"productId": "B", "price": "50", "quantity": 2},
            {"id": "C", "price": 10, "quantity": 1},
        ]
        promo = {
            "code": "MIX",
            "discountPercent": 50,
            "applicableProducts": [
                {"productId": "A", "maxDiscountAmount": 30},
                {"productId": "B", "maxDiscountAmount": None},
            ],
        }

        result = calculate_from_raw(items, promo)

        assert result.discount == 80.00
        assert result.eligible_items == ("A", "B")

    def test_malformed_lines_are_skipped(self) -> None:
        items = [
            {"product": "A", "price": "n/a", "quantity": 1},
            {"price": 10, "quantity": 1},
            {"id": "C", "price": 10, "quantity": 1},
        ]
        result = calculate_from_raw(items, {"discountPercent": 10})
        assert result == DiscountResult(1.0, ("C",))

    def test_infinite_price_is_skipped(self) -> None:
        items = [
            {"product": "A", "price": "inf", "quantity": 1},
            {"product": "B", "price": 10, "quantity": 1},
        ]
        result = calculate_from_raw(items, {"discountPercent": 10})
        assert result == DiscountResult(1.0, ("B",))

    def test_padded_rule_id_does_not_match(self) -> None:
        items = [{"product": "A", "price": 100, "quantity": 1}]
        promo = {"discountPercent": 10, "applicableProducts": [{"productId": " A "}]}
        assert calculate_from_raw(items, promo) == DiscountResult()

    def test_no_cart(self) -> None:
        assert calculate_from_raw(None, {"discountPercent": 10}) == DiscountResult()
