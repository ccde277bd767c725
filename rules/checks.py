"""
The validation rules, in the order the chain runs them.

Each check takes the transaction and the shared context and returns a
decline reason, or None when the transaction passes.
"""

from enum import Enum
from typing import Optional

from ledger.models import PaymentMethod, Transaction, TransactionType

from .context import ValidationContext
from .payment import card_prefix, find_bin_mapping, is_valid_iban, normalize_iban


class DeclineReason(str, Enum):
    ACCOUNT_USED_BY_ANOTHER_USER = "Account used by another user"
    NON_UNIQUE_TRANSACTION_ID = "Non-unique transaction ID"
    USER_NOT_FOUND = "User not found"
    USER_FROZEN = "User is frozen"
    INVALID_AMOUNT = "Invalid amount"
    DEPOSIT_OUT_OF_BOUNDS = "Deposit amount out of bounds"
    WITHDRAW_OUT_OF_BOUNDS = "Withdraw amount out of bounds"
    WITHDRAW_WITHOUT_DEPOSIT = "Withdrawal not allowed from account without prior deposit"
    INVALID_TRANSACTION_TYPE = "Invalid transaction type"
    COUNTRY_CODE_MISMATCH = "Country code mismatch"
    INVALID_IBAN = "Invalid IBAN"
    INVALID_CARD_NUMBER = "Invalid card number"
    BIN_NOT_IN_RANGE = "BIN not in range"
    CARD_COUNTRY_MISMATCH = "Country mismatch"
    NOT_A_DEBIT_CARD = "Not a debit card"
    INVALID_PAYMENT_METHOD = "Invalid payment method"
    NEW_ACCOUNT_AFTER_DECLINE = "Cannot use new account after prior decline"


def check_account_ownership(transaction: Transaction, context: ValidationContext) -> Optional[DeclineReason]:
    owner = context.accepted_accounts.get(transaction.account_number)
    if owner is not None and owner != transaction.user_id:
        return DeclineReason.ACCOUNT_USED_BY_ANOTHER_USER
    return None


def check_identity(transaction: Transaction, context: ValidationContext) -> Optional[DeclineReason]:
    if transaction.id in context.used_transaction_ids:
        return DeclineReason.NON_UNIQUE_TRANSACTION_ID
    context.used_transaction_ids.add(transaction.id)

    user = context.reference.get_user(transaction.user_id)
    if user is None:
        return DeclineReason.USER_NOT_FOUND
    if user.frozen:
        return DeclineReason.USER_FROZEN
    return None


def check_amount_limits(transaction: Transaction, context: ValidationContext) -> Optional[DeclineReason]:
    user = context.reference.get_user(transaction.user_id)
    amount = transaction.amount

    if transaction.type == TransactionType.DEPOSIT.value:
        if amount <= 0:
            return DeclineReason.INVALID_AMOUNT
        if not user.deposit_min <= amount <= user.deposit_max:
            return DeclineReason.DEPOSIT_OUT_OF_BOUNDS
        return None

    if transaction.type == TransactionType.WITHDRAW.value:
        if amount <= 0:
            return DeclineReason.INVALID_AMOUNT
        # Balances are only written after every verdict is known, so this
        # compares against the balance the batch started with.
        if not user.withdraw_min <= amount <= user.withdraw_max or amount > user.balance:
            return DeclineReason.WITHDRAW_OUT_OF_BOUNDS
        if not context.has_deposited(transaction.user_id, transaction.account_number):
            return DeclineReason.WITHDRAW_WITHOUT_DEPOSIT
        return None

    return DeclineReason.INVALID_TRANSACTION_TYPE


def check_payment_method(transaction: Transaction, context: ValidationContext) -> Optional[DeclineReason]:
    if transaction.method == PaymentMethod.TRANSFER.value:
        return _check_transfer(transaction, context)
    if transaction.method == PaymentMethod.CARD.value:
        return _check_card(transaction, context)
    return DeclineReason.INVALID_PAYMENT_METHOD


def _check_transfer(transaction: Transaction, context: ValidationContext) -> Optional[DeclineReason]:
    user = context.reference.get_user(transaction.user_id)
    iban = normalize_iban(transaction.account_number)
    if iban[:2] != user.country:
        return DeclineReason.COUNTRY_CODE_MISMATCH
    if not is_valid_iban(iban):
        return DeclineReason.INVALID_IBAN
    return None


def _check_card(transaction: Transaction, context: ValidationContext) -> Optional[DeclineReason]:
    prefix = card_prefix(transaction.account_number, context.processing.bin_prefix_length)
    if prefix is None:
        return DeclineReason.INVALID_CARD_NUMBER

    mapping = find_bin_mapping(prefix, context.reference.bin_mappings)
    if mapping is None:
        return DeclineReason.BIN_NOT_IN_RANGE

    # TODO: match against the transaction's own user once product confirms;
    # this only checks that some user in the batch shares the card's country.
    if mapping.country[:2] not in context.reference.user_countries:
        return DeclineReason.CARD_COUNTRY_MISMATCH

    if mapping.card_type != context.processing.debit_card_type:
        return DeclineReason.NOT_A_DEBIT_CARD
    return None
