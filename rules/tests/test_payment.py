"""Unit tests for IBAN and card number helpers."""

import pytest

from ledger.models import BinMapping
from rules.payment import (
    card_prefix,
    find_bin_mapping,
    iban_to_integer,
    is_valid_iban,
    normalize_iban,
    rotate_iban,
)


class TestIbanChecksum:
    """Tests for the ISO 7064 mod-97 check."""

    @pytest.mark.parametrize("iban", [
        "EE382200221020145685",
        "DE89370400440532013000",
        "GB82WEST12345698765432",
    ])
    def test_valid_ibans(self, iban):
        """Known good IBANs leave remainder 1."""
        assert is_valid_iban(iban)
        assert iban_to_integer(rotate_iban(iban)) % 97 == 1

    @pytest.mark.parametrize("iban", [
        "EE382200221020145686",
        "DE89370400440532013001",
        "GB82WEST12345698765433",
        "GB83WEST12345698765432",
    ])
    def test_single_character_change_fails(self, iban):
        """Changing one character breaks the checksum."""
        assert not is_valid_iban(iban)

    def test_spaces_and_lowercase_are_normalized(self):
        """Printed format with spaces is accepted."""
        assert normalize_iban("gb82 west 1234 5698 7654 32") == "GB82WEST12345698765432"
        assert is_valid_iban("GB82 WEST 1234 5698 7654 32")

    def test_zero_iban_fails_checksum(self):
        """EE38 followed by zeros rotates to 141438, remainder 12."""
        assert iban_to_integer(rotate_iban("EE380000000000000000")) == 141438
        assert not is_valid_iban("EE38 0000 0000 0000 0000")

    def test_rotation_moves_first_four_characters(self):
        assert rotate_iban("GB82WEST1234") == "WEST1234GB82"

    def test_letters_map_to_two_digits(self):
        assert iban_to_integer("A0Z") == int("10035")

    @pytest.mark.parametrize("iban", ["", "EE3", "EE38-2200-2210", "EE38220022102014568$", "ÉE382200221020145685"])
    def test_malformed_input_is_invalid(self, iban):
        """Short strings or non alphanumeric characters never validate."""
        assert not is_valid_iban(iban)


class TestCardPrefix:
    """Tests for extracting and matching card BINs."""

    def test_first_ten_digits(self):
        assert card_prefix("4000000000123456") == 4000000000

    def test_short_number_has_no_prefix(self):
        assert card_prefix("400000") is None

    def test_non_digit_prefix(self):
        assert card_prefix("40000X0000123456") is None

    def test_custom_length(self):
        assert card_prefix("4000000000123456", length=6) == 400000

    def test_range_bounds_are_inclusive(self):
        mapping = BinMapping(name="b", range_from=4000000000, range_to=4999999999, card_type="DC", country="FIN")

        assert find_bin_mapping(4000000000, [mapping]) is mapping
        assert find_bin_mapping(4999999999, [mapping]) is mapping
        assert find_bin_mapping(5000000000, [mapping]) is None

    def test_first_matching_range_wins(self):
        """Overlapping ranges resolve to the earlier mapping."""
        first = BinMapping(name="first", range_from=1, range_to=100, card_type="DC", country="FIN")
        second = BinMapping(name="second", range_from=50, range_to=150, card_type="CC", country="FIN")

        assert find_bin_mapping(75, [first, second]) is first
        assert find_bin_mapping(120, [first, second]) is second


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
