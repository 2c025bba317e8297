"""
Unit tests for the pricing engine (margins, copy rates, rounding).
"""

from decimal import Decimal

import pytest

from core.services.pricing import (
    build_quote,
    compute_final_price,
    copy_rate_for,
    format_price,
    margin_for,
    round_price,
)


class TestMarginFor:
    """Margin bands per language group."""

    def test_group_1_boundaries(self):
        assert margin_for("IT", Decimal("299.99")) == Decimal("87")
        assert margin_for("IT", Decimal("300")) == Decimal("107")
        assert margin_for("IT", Decimal("499.99")) == Decimal("107")
        assert margin_for("IT", Decimal("500")) == Decimal("100")

    def test_group_2_and_3_flat_bands(self):
        assert margin_for("EN", 100) == Decimal("97")
        assert margin_for("DE", 400) == Decimal("117")
        assert margin_for("NL", 100) == Decimal("107")
        assert margin_for("GR", 450) == Decimal("127")

    def test_percentage_band_same_for_all_groups(self):
        for code in ("PT", "FR", "HU"):
            assert margin_for(code, 1000) == Decimal("200")

    def test_percentage_band_drops_below_mid_band(self):
        # 500 * 20% = 100 is less than the 107 flat margin just below 500.
        assert margin_for("RU", Decimal("500")) < margin_for("RU", Decimal("499.99"))

    def test_unknown_code_has_no_margin(self):
        assert margin_for("XX", 250) == Decimal("0")
        assert margin_for("", 900) == Decimal("0")

    def test_code_is_case_insensitive(self):
        assert margin_for(" it ", 100) == Decimal("87")

    def test_float_cost_is_taken_literally(self):
        assert margin_for("IT", 299.99) == Decimal("87")


class TestCopyRate:
    def test_known_rates(self):
        assert copy_rate_for("DE") == Decimal("0.08")
        assert copy_rate_for("LT") == Decimal("0.02")
        assert copy_rate_for("cz") == Decimal("0.06")

    def test_unknown_code(self):
        assert copy_rate_for("XX") == Decimal("0")


class TestComputeFinalPrice:
    def test_mid_band_without_copy(self):
        assert compute_final_price(400, "IT", 0) == Decimal("507.00")

    def test_mid_band_with_copy(self):
        assert compute_final_price(400, "DE", 100) == Decimal("525.00")

    def test_unknown_code_is_cost_only(self):
        assert compute_final_price(250, "XX", 10) == Decimal("250.00")

    def test_english_mid_band(self):
        assert compute_final_price(350, "EN", 0) == Decimal("467.00")

    def test_percentage_band(self):
        assert compute_final_price(Decimal("620"), "IT", 0) == Decimal("744.00")

    def test_zero_words_adds_no_copy(self):
        assert compute_final_price(100, "LT", 0) == compute_final_price(100, "LT")

    def test_result_has_two_decimals(self):
        assert compute_final_price(Decimal("123.4"), "EN", 3).as_tuple().exponent == -2

    @pytest.mark.parametrize("code", ["IT", "EN", "NL"])
    def test_monotonic_within_bands_and_across_300(self, code):
        costs = [Decimal(c) for c in ("0", "50", "299.99", "300", "350", "499.99")]
        prices = [compute_final_price(c, code, 0) for c in costs]
        assert prices == sorted(prices)

        high = [Decimal(c) for c in ("500", "600", "1000", "2500.50")]
        high_prices = [compute_final_price(c, code, 0) for c in high]
        assert high_prices == sorted(high_prices)


class TestRounding:
    """Half-up rounding at the .005 boundary."""

    def test_half_rounds_up(self):
        assert round_price(Decimal("100.005")) == Decimal("100.01")
        assert round_price(Decimal("100.015")) == Decimal("100.02")

    def test_below_half_rounds_down(self):
        assert round_price(Decimal("100.0049")) == Decimal("100.00")

    def test_final_price_tie(self):
        # Unknown code: no margin, no copy; only rounding applies.
        assert compute_final_price(Decimal("10.125"), "XX", 0) == Decimal("10.13")

    def test_copy_price_tie(self):
        # 250.005 + 97 + 0.02 = 347.025
        assert compute_final_price(Decimal("250.005"), "LT", 1) == Decimal("347.03")


class TestQuote:
    def test_breakdown(self):
        quote = build_quote(domain_name="acme.com", language_code="de", publisher_cost=400, word_count=100)
        assert quote.language_code == "DE"
        assert quote.margin == Decimal("117")
        assert quote.copy_rate == Decimal("0.08")
        assert quote.copy_price == Decimal("8.00")
        assert quote.final_price == Decimal("525.00")

    def test_no_copy_breakdown(self):
        quote = build_quote(domain_name="acme.com", language_code="EN", publisher_cost=350)
        assert quote.word_count == 0
        assert quote.copy_price == Decimal("0")


class TestFormatPrice:
    def test_trailing_zero_trimmed_once(self):
        assert format_price(Decimal("467.00")) == "467.0"
        assert format_price(Decimal("525.50")) == "525.5"

    def test_two_decimals_kept(self):
        assert format_price(Decimal("507.25")) == "507.25"

    def test_rounds_before_formatting(self):
        assert format_price(Decimal("10.125")) == "10.13"


class TestLargeAmounts:
    """Amounts wider than the default 28-digit decimal context."""

    def test_huge_word_count_is_priced(self):
        # 350 + 97 + 10**28 * 0.04
        assert compute_final_price(350, "EN", 10**28) == Decimal(4 * 10**26 + 447)

    @pytest.mark.parametrize(
        "cost,expected",
        [
            (Decimal("1E+30"), Decimal("1.2E+30")),
            (Decimal("1" + "0" * 40), Decimal("1.2E+40")),
        ],
    )
    def test_huge_cost_is_priced(self, cost, expected):
        price = compute_final_price(cost, "EN", 0)
        assert price == expected
        assert price.as_tuple().exponent == -2

    def test_exponent_form_cost(self):
        assert compute_final_price(Decimal("1E+3"), "IT", 0) == Decimal("1200.00")

    def test_round_price_of_wide_value(self):
        assert round_price(Decimal("1" * 30 + ".005")) == Decimal("1" * 30 + ".01")

    @pytest.mark.parametrize(
        "price,expected",
        [
            (Decimal("1.2E+3"), "1200.0"),
            (Decimal("1.2E+30"), "12" + "0" * 29 + ".0"),
        ],
    )
    def test_format_exponent_form(self, price, expected):
        assert format_price(price) == expected
