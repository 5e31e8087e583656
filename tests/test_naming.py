"""Unit tests for naming-form derivation (modgen.naming).

Tests cover:
- Word splitting across snake, kebab, camel, and Pascal spellings
- Case assembly and the snake/Pascal round trip
- The pluralization heuristic and a pluggable override
- derive_forms determinism, defaults, and validation
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from modgen.errors import ValidationError
from modgen.naming import (
    DEFAULT_IMPORT_PATH,
    derive_forms,
    pluralize,
    split_words,
    to_camel,
    to_kebab,
    to_pascal,
    to_snake,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# split_words
# ---------------------------------------------------------------------------


class TestSplitWords:
    @pytest.mark.parametrize(
        "raw",
        ["order_item", "order-item", "orderItem", "OrderItem", "order item", "Order-Item"],
    )
    def test_common_spellings_split_alike(self, raw):
        assert [w.lower() for w in split_words(raw)] == ["order", "item"]

    def test_empty_pieces_dropped(self):
        assert split_words("__order--item_") == ["order", "item"]

    def test_single_word(self):
        assert split_words("payment") == ["payment"]

    def test_consecutive_capitals_split(self):
        assert split_words("ABC") == ["A", "B", "C"]

    def test_digits_stay_with_word(self):
        assert split_words("order2Item") == ["order2", "Item"]

    def test_empty_string(self):
        assert split_words("") == []


# ---------------------------------------------------------------------------
# Case assembly
# ---------------------------------------------------------------------------


class TestCaseAssembly:
    def test_order_item_forms(self):
        assert to_pascal("order-item") == "OrderItem"
        assert to_camel("order-item") == "orderItem"
        assert to_snake("order-item") == "order_item"
        assert to_kebab("order-item") == "order-item"

    def test_pascal_input(self):
        assert to_snake("PaymentMethod") == "payment_method"
        assert to_kebab("PaymentMethod") == "payment-method"
        assert to_camel("PaymentMethod") == "paymentMethod"

    def test_every_capital_starts_a_word(self):
        assert to_snake("order_ITEM") == "order_i_t_e_m"
        assert to_pascal("ORDER") == "ORDER"

    def test_camel_of_empty(self):
        assert to_camel("") == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "order",
            "order_item",
            "order-item",
            "orderItem",
            "OrderItem",
            "a_b_c",
            "aB-c",
            "XMLParser",
            "-leading-and-trailing-",
            "user profile",
            "Mixed_case-Input spelling",
        ],
    )
    def test_snake_pascal_round_trip(self, raw):
        snake = to_snake(raw)
        assert to_snake(to_pascal(snake)) == snake

    @pytest.mark.parametrize("raw", ["orderItem", "order_item", "Order-Item"])
    def test_forms_are_case_variants_of_same_words(self, raw):
        words = [w.lower() for w in split_words(raw)]
        assert to_snake(raw).split("_") == words
        assert to_kebab(raw).split("-") == words
        assert to_pascal(raw).lower() == "".join(words)
        assert to_camel(raw).lower() == "".join(words)


# ---------------------------------------------------------------------------
# pluralize
# ---------------------------------------------------------------------------


class TestPluralize:
    @pytest.mark.parametrize(
        ("word", "plural"),
        [
            ("order", "orders"),
            ("box", "boxes"),
            ("category", "categories"),
            ("day", "days"),
            ("bus", "buses"),
            ("church", "churches"),
            ("dish", "dishes"),
            ("key", "keys"),
            ("order_item", "order_items"),
            ("company_category", "company_categories"),
        ],
    )
    def test_plural_table(self, word, plural):
        assert pluralize(word) == plural

    def test_irregular_plurals_not_special_cased(self):
        assert pluralize("person") == "persons"

    def test_single_letter_y(self):
        assert pluralize("y") == "ys"


# ---------------------------------------------------------------------------
# derive_forms
# ---------------------------------------------------------------------------


class TestDeriveForms:
    def test_order_item(self):
        forms = derive_forms("order-item")
        assert forms.raw == "order-item"
        assert forms.name == "order-item"
        assert forms.pascal == "OrderItem"
        assert forms.camel == "orderItem"
        assert forms.snake == "order_item"
        assert forms.kebab == "order-item"
        assert forms.plural == "order_items"
        assert forms.plural_kebab == "order-items"

    def test_deterministic(self):
        first = derive_forms("OrderItem", "Order item", "shop")
        second = derive_forms("OrderItem", "Order item", "shop")
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_display_name_defaults_to_raw(self):
        assert derive_forms("payment").display_name == "payment"
        assert derive_forms("payment", "   ").display_name == "payment"

    def test_display_name_kept(self):
        assert derive_forms("payment", "Payment record").display_name == "Payment record"

    def test_default_import_path(self):
        assert derive_forms("payment").import_path == DEFAULT_IMPORT_PATH

    def test_raw_is_stripped(self):
        assert derive_forms("  payment ").raw == "payment"

    def test_custom_pluralizer(self):
        irregular = {"person": "people"}

        def pluralizer(word: str) -> str:
            return irregular.get(word) or pluralize(word)

        forms = derive_forms("person", pluralizer=pluralizer)
        assert forms.plural == "people"
        assert forms.plural_kebab == "people"

    def test_forms_are_frozen(self):
        forms = derive_forms("payment")
        with pytest.raises(PydanticValidationError):
            forms.snake = "other"

    def test_as_context_contains_every_field(self):
        ctx = derive_forms("payment", import_path="shop").as_context()
        assert ctx["pascal"] == "Payment"
        assert ctx["plural"] == "payments"
        assert ctx["import_path"] == "shop"

    @pytest.mark.parametrize("raw", ["", "   ", "___", "--"])
    def test_empty_name_rejected(self, raw):
        with pytest.raises(ValidationError):
            derive_forms(raw)

    @pytest.mark.parametrize(
        "raw", ["123order", "order!", "päyment", "order.item", "return", "class", "Import", "none"]
    )
    def test_invalid_name_rejected(self, raw):
        with pytest.raises(ValidationError):
            derive_forms(raw)
