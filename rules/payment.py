"""
IBAN and card number helpers used by the payment method rule.
"""

from typing import Optional, Sequence

from ledger.models import BinMapping

IBAN_MODULUS = 97
IBAN_MIN_LENGTH = 5


def normalize_iban(iban: str) -> str:
    """Drop whitespace and uppercase, e.g. 'ee38 2200 ...' -> 'EE382200...'."""
    return "".join(iban.split()).upper()


def rotate_iban(iban: str) -> str:
    """Move the country code and check digits to the end."""
    return iban[4:] + iban[:4]


def iban_to_integer(rotated: str) -> int:
    """Replace letters with 10..35 (A=10, Z=35) and read the digits as one integer."""
    digits = []
    for char in rotated:
        if char.isdigit():
            digits.append(char)
        elif "A" <= char <= "Z":
            digits.append(str(int(char, 36)))
        else:
            raise ValueError(f"invalid IBAN character {char!r}")
    return int("".join(digits))


def is_valid_iban(iban: str) -> bool:
    """ISO 7064 mod-97 check: the rotated numeric form must leave remainder 1."""
    normalized = normalize_iban(iban)
    if len(normalized) < IBAN_MIN_LENGTH or not normalized.isascii() or not normalized.isalnum():
        return False
    try:
        return iban_to_integer(rotate_iban(normalized)) % IBAN_MODULUS == 1
    except ValueError:
        return False


def card_prefix(account_number: str, length: int = 10) -> Optional[int]:
    """Numeric value of the first `length` characters, or None if they are not all digits."""
    prefix = account_number[:length]
    if len(prefix) < length or not prefix.isascii() or not prefix.isdigit():
        return None
    return int(prefix)


def find_bin_mapping(prefix: int, bin_mappings: Sequence[BinMapping]) -> Optional[BinMapping]:
    """First mapping whose range contains the prefix. Ranges are expected to be disjoint."""
    for mapping in bin_mappings:
        if mapping.contains(prefix):
            return mapping
    return None
