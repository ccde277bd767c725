"""Factories and sample account numbers shared by the test suites."""

from ledger.models import BinMapping, Transaction, User

# Valid IBANs (mod-97 remainder 1)
EE_IBAN = "EE382200221020145685"
DE_IBAN = "DE89370400440532013000"
GB_IBAN = "GB82WEST12345698765432"

# First 10 digits fall inside the FIN debit range below
FI_DEBIT_CARD = "4000000000123456"
FI_DEBIT_CARD_2 = "4000000001654321"
CREDIT_CARD = "5100000000123456"


def make_user(user_id="1", **overrides) -> User:
    data = {
        "id": user_id,
        "username": f"user{user_id}",
        "balance": 100.0,
        "country": "EE",
        "frozen": False,
        "deposit_min": 1.0,
        "deposit_max": 1000.0,
        "withdraw_min": 1.0,
        "withdraw_max": 500.0,
    }
    data.update(overrides)
    return User(**data)


def make_transaction(tx_id="t1", user_id="1", type="DEPOSIT", amount=50.0,
                     method="TRANSFER", account_number=EE_IBAN) -> Transaction:
    return Transaction(
        id=tx_id, user_id=user_id, type=type, amount=amount,
        method=method, account_number=account_number,
    )


def make_bin_mappings() -> list[BinMapping]:
    return [
        BinMapping(name="Nordic Bank", range_from=4000000000, range_to=4999999999, card_type="DC", country="FIN"),
        BinMapping(name="Credit Union", range_from=5000000000, range_to=5999999999, card_type="CC", country="FIN"),
        BinMapping(name="Baltic Bank", range_from=6000000000, range_to=6999999999, card_type="DC", country="EST"),
    ]
