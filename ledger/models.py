from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class TransactionType(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"


class PaymentMethod(str, Enum):
    TRANSFER = "TRANSFER"
    CARD = "CARD"


class EventStatus(str, Enum):
    APPROVED = "APPROVED"
    DECLINED = "DECLINED"


class User(BaseModel):
    id: str
    username: str = ""
    balance: float
    country: str = Field(..., description="ISO 3166-1 alpha-2 country code")
    frozen: bool = Field(default=False, description="Input tables use 0 for active, 1 for frozen")
    deposit_min: float
    deposit_max: float
    withdraw_min: float
    withdraw_max: float

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "1",
            "username": "john",
            "balance": 100.00,
            "country": "EE",
            "frozen": False,
            "deposit_min": 10.00,
            "deposit_max": 1000.00,
            "withdraw_min": 10.00,
            "withdraw_max": 500.00,
        }
    })


class Transaction(BaseModel):
    """A single row of the batch. The type and method are free strings so
    that unknown values reach the rule chain and get declined there."""

    id: str
    user_id: str
    type: str
    amount: float
    method: str
    account_number: str

    model_config = ConfigDict(frozen=True, json_schema_extra={
        "example": {
            "id": "tx-1",
            "user_id": "1",
            "type": "DEPOSIT",
            "amount": 50.00,
            "method": "TRANSFER",
            "account_number": "EE382200221020145685",
        }
    })

    @property
    def is_card(self) -> bool:
        return self.method == PaymentMethod.CARD.value


class BinMapping(BaseModel):
    name: str = ""
    range_from: int = Field(..., description="Lowest 10-digit card prefix, inclusive")
    range_to: int = Field(..., description="Highest 10-digit card prefix, inclusive")
    card_type: str = Field(..., description="DC for debit, CC for credit")
    country: str = Field(..., description="ISO 3166-1 alpha-3 country code")

    model_config = ConfigDict(frozen=True)

    def contains(self, prefix: int) -> bool:
        return self.range_from <= prefix <= self.range_to


class Event(BaseModel):
    transaction_id: str
    status: EventStatus
    message: str

    model_config = ConfigDict(frozen=True)

    @property
    def approved(self) -> bool:
        return self.status == EventStatus.APPROVED


class UserBalance(BaseModel):
    user_id: str
    balance: float


class BatchRequest(BaseModel):
    users: list[User]
    transactions: list[Transaction]
    bin_mappings: list[BinMapping] = Field(default_factory=list)


class BatchResponse(BaseModel):
    events: list[Event]
    balances: list[UserBalance]
    approved_count: int
    declined_count: int
    message: Optional[str] = None
