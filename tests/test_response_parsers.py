"""Response parser tests."""

from decimal import Decimal

import pytest

from adapters.response_parsers import (
    PARSERS,
    canonical_decimal,
    format_scaled_integer,
    parse_direct_numeric,
    parse_error_flagged,
    parse_identity_amount,
    parse_response,
    parse_scaled_integer,
)
from core.domain.errors import EligibilityLookupError, ParserMismatch
from core.domain.models import ParserKind

WEI = 10**18


# ============================================================
# SCALED INTEGER
# ============================================================


class TestScaledInteger:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1500000000000000000", "1.5"),
            ("1000000000000000000", "1"),
            ("0", "0"),
            (str(2 * WEI + 995 * 10**15), "3"),
            (str(2 * WEI + 994 * 10**15), "2.99"),
            (str(2 * WEI + 5 * 10**15), "2.01"),
            (str(2 * WEI + 4 * 10**15), "2"),
            (str(WEI + 105 * 10**15), "1.11"),
            (str(WEI // 2), "0.5"),
            (str(999 * 10**15), "1"),
            (str(123456789 * WEI + 25 * 10**16), "123456789.25"),
        ],
    )
    def test_known_values(self, raw, expected):
        assert parse_scaled_integer({"amount": raw}) == expected

    def test_carry_increments_whole_part(self):
        # d3 == 995 rounds to 100 hundredths
        assert format_scaled_integer(7 * WEI + 995 * 10**15) == "8"
        assert format_scaled_integer(995 * 10**15) == "1"

    def test_discarded_digits_beyond_third_are_truncated(self):
        # 0.0049999... -> d3 = 4 -> rounds down
        assert format_scaled_integer(4_999_999_999_999_999) == "0"
        # 0.0050000...1 -> d3 = 5 -> rounds up
        assert format_scaled_integer(5_000_000_000_000_001) == "0.01"

    def test_values_beyond_float_precision_stay_exact(self):
        raw = 10**40 + 123 * 10**16
        assert format_scaled_integer(raw) == "10000000000000000000001.23"

    def test_accepts_json_integers(self):
        assert parse_scaled_integer({"amount": 3 * WEI}) == "3"

    def test_custom_decimals(self):
        assert parse_scaled_integer({"amount": "1500000000"}, decimals=9) == "1.5"
        assert format_scaled_integer(125, decimals=2) == "1.25"

    def test_missing_or_null_is_not_eligible(self):
        assert parse_scaled_integer({}) == "0"
        assert parse_scaled_integer({"amount": None}) == "0"
        assert parse_scaled_integer({"amount": ""}) == "0"

    @pytest.mark.parametrize("value", ["1.5", "-1", "0x10", "12abc", True, 1.5, [1]])
    def test_rejects_non_integer_values(self, value):
        with pytest.raises(ParserMismatch):
            parse_scaled_integer({"amount": value})

    def test_rejects_negative_json_integer(self):
        with pytest.raises(ParserMismatch):
            parse_scaled_integer({"amount": -5})

    def test_oversized_digit_string_is_mismatch(self):
        with pytest.raises(ParserMismatch):
            parse_response(ParserKind.SCALED_INTEGER, {"amount": "9" * 5000})


# ============================================================
# DECIMAL CANONICALIZATION
# ============================================================


class TestCanonicalDecimal:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("123.456", "123.46"),
            ("100.00", "100"),
            ("1e3", "1000"),
            ("0.005", "0.01"),
            ("0.004", "0"),
            ("-0", "0"),
            ("2.50", "2.5"),
            ("12345678901234567890123456789.999", "12345678901234567890123456790"),
        ],
    )
    def test_quantize_and_strip(self, value, expected):
        assert canonical_decimal(Decimal(value)) == expected

    def test_rejects_negative_and_non_finite(self):
        with pytest.raises(ValueError):
            canonical_decimal(Decimal("-1"))
        with pytest.raises(ValueError):
            canonical_decimal(Decimal("NaN"))


# ============================================================
# OTHER VARIANTS
# ============================================================


class TestIdentityAmount:
    def test_string_amount(self):
        assert parse_identity_amount({"amount": "250.10"}) == "250.1"

    def test_numeric_amount(self):
        assert parse_identity_amount({"amount": 42}) == "42"

    def test_missing_amount_defaults_to_zero(self):
        assert parse_identity_amount({"status": "ok"}) == "0"

    def test_non_numeric_string_is_mismatch(self):
        with pytest.raises(ParserMismatch):
            parse_identity_amount({"amount": "lots"})


class TestDirectNumeric:
    def test_integer_and_float(self):
        assert parse_direct_numeric({"totalUnclaimed": 1500}, field="totalUnclaimed") == "1500"
        assert parse_direct_numeric({"totalUnclaimed": 12.5}, field="totalUnclaimed") == "12.5"
        assert parse_direct_numeric({"totalUnclaimed": 0.1 + 0.2}, field="totalUnclaimed") == "0.3"

    def test_nested_field(self):
        payload = {"data": {"allocation": {"total": 7.777}}}
        assert parse_direct_numeric(payload, field="data.allocation.total") == "7.78"

    def test_missing_nested_field(self):
        assert parse_direct_numeric({"data": None}, field="data.allocation") == "0"

    def test_boolean_is_mismatch(self):
        with pytest.raises(ParserMismatch):
            parse_direct_numeric({"amount": True})

    def test_object_is_mismatch(self):
        with pytest.raises(ParserMismatch):
            parse_direct_numeric({"amount": {"value": 1}})

    @pytest.mark.parametrize("kind", [ParserKind.IDENTITY_AMOUNT, ParserKind.DIRECT_NUMERIC, ParserKind.ERROR_FLAGGED])
    def test_empty_string_is_not_eligible(self, kind):
        assert parse_response(kind, {"amount": ""}) == "0"


class TestErrorFlagged:
    @pytest.mark.parametrize(
        "payload",
        [
            {"error": "Address not found"},
            {"errors": ["not eligible"], "amount": 10},
            {"eligible": False, "amount": 5},
        ],
    )
    def test_flagged_payloads_are_not_eligible(self, payload):
        assert parse_error_flagged(payload) == "0"

    def test_unflagged_payload_reads_amount(self):
        assert parse_error_flagged({"eligible": True, "amount": 7.25}) == "7.25"
        assert parse_error_flagged({"error": None, "amount": "3"}) == "3"


class TestRegistry:
    def test_every_kind_has_a_parser(self):
        assert set(PARSERS) == set(ParserKind)

    @pytest.mark.parametrize("kind", list(ParserKind))
    def test_non_object_payload_is_mismatch(self, kind):
        with pytest.raises(ParserMismatch):
            parse_response(kind, ["not", "an", "object"])

    def test_dispatch_uses_field_and_decimals(self):
        assert parse_response(ParserKind.SCALED_INTEGER, {"wei": "2500000"}, field="wei", decimals=6) == "2.5"

    def test_mismatch_is_a_lookup_error(self):
        with pytest.raises(EligibilityLookupError):
            parse_response(ParserKind.DIRECT_NUMERIC, "text")
        with pytest.raises(LookupError):
            parse_response(ParserKind.DIRECT_NUMERIC, 12)
