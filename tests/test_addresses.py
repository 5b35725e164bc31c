"""Address validation and normalization tests."""

import pytest

from core.domain.addresses import AddressValidator, normalize_address, validate_address
from core.domain.chain import ChainFamily, get_display_name
from core.domain.errors import ValidationFailure

from conftest import EVM_LOWER, EVM_UPPER, FUEL_ADDRESS, SOL_ADDRESS


class TestEvmAddresses:
    def test_accepts_lower_and_upper_case(self):
        assert validate_address(EVM_LOWER, ChainFamily.EVM)
        assert validate_address(EVM_UPPER, ChainFamily.EVM)
        assert validate_address("0x" + "aB" * 20, ChainFamily.EVM)

    @pytest.mark.parametrize("length", [39, 41])
    def test_rejects_wrong_length(self, length):
        assert not validate_address("0x" + "a" * length, ChainFamily.EVM)

    def test_rejects_missing_prefix_and_non_hex(self):
        assert not validate_address("ab" * 21, ChainFamily.EVM)
        assert not validate_address("0x" + "g" * 40, ChainFamily.EVM)

    def test_rejects_surrounding_whitespace(self):
        assert not validate_address(f" {EVM_LOWER}", ChainFamily.EVM)
        assert not validate_address(f"{EVM_LOWER}\n", ChainFamily.EVM)

    def test_lower_casing_never_changes_verdict(self):
        for candidate in (EVM_UPPER, "0x" + "Ff" * 20, "0X" + "a" * 39):
            if validate_address(candidate, ChainFamily.EVM):
                assert validate_address(candidate.lower(), ChainFamily.EVM)


class TestFuelAddresses:
    def test_accepts_fuel_prefix_with_38_alphanumerics(self):
        assert validate_address(FUEL_ADDRESS, ChainFamily.FUEL)

    def test_rejects_other_prefix(self):
        assert not validate_address("fuei" + "q" * 38, ChainFamily.FUEL)
        assert not validate_address("0x" + "a" * 40, ChainFamily.FUEL)

    def test_rejects_wrong_length(self):
        assert not validate_address("fuel" + "q" * 37, ChainFamily.FUEL)
        assert not validate_address("fuel" + "q" * 39, ChainFamily.FUEL)

    def test_lower_cased_upper_prefix_is_accepted(self):
        assert validate_address(normalize_address("FUEL" + "Q" * 38, ChainFamily.FUEL), ChainFamily.FUEL)


class TestSolanaAddresses:
    def test_accepts_base58(self):
        assert validate_address(SOL_ADDRESS, ChainFamily.SOL)

    @pytest.mark.parametrize("bad_char", ["0", "O", "I", "l"])
    def test_rejects_non_base58_characters(self, bad_char):
        assert not validate_address(bad_char + SOL_ADDRESS[1:], ChainFamily.SOL)

    def test_rejects_out_of_range_length(self):
        assert not validate_address("1" * 31, ChainFamily.SOL)
        assert not validate_address("1" * 45, ChainFamily.SOL)

    def test_normalization_preserves_case(self):
        assert normalize_address(f"  {SOL_ADDRESS} ", ChainFamily.SOL) == SOL_ADDRESS


class TestValidatorMisc:
    def test_family_mismatch_is_invalid(self):
        assert not validate_address(EVM_LOWER, ChainFamily.SOL)
        assert not validate_address(FUEL_ADDRESS, ChainFamily.EVM)

    def test_non_string_is_invalid(self):
        assert not validate_address(None, ChainFamily.EVM)  # type: ignore[arg-type]

    def test_callable_validator(self):
        validator = AddressValidator()
        assert validator(EVM_LOWER, ChainFamily.EVM)
        assert not validator.validate("notanaddress", ChainFamily.EVM)

    def test_ensure_raises_validation_failure(self):
        validator = AddressValidator()
        validator.ensure(SOL_ADDRESS, ChainFamily.SOL)
        with pytest.raises(ValidationFailure) as excinfo:
            validator.ensure("fuelshort", ChainFamily.FUEL)
        assert excinfo.value.address == "fuelshort"
        assert isinstance(excinfo.value, ValueError)

    def test_evm_normalization_lower_cases(self):
        assert normalize_address(f"\t{EVM_UPPER} ", ChainFamily.EVM) == EVM_UPPER.lower()

    def test_display_names(self):
        assert get_display_name(ChainFamily.EVM).startswith("Ethereum")
        assert "Fuel" in ChainFamily.FUEL.display_name
        assert ChainFamily.parse(" sol ") is ChainFamily.SOL
        with pytest.raises(ValueError):
            ChainFamily.parse("btc")
