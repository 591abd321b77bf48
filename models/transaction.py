from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
import uuid

from errors import InvalidAmountError, MissingDescriptionError
from models.category import TRANSACTION_TYPES, INCOME, coerce_category


def new_transaction_id() -> str:
    """Mint an opaque unique transaction identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Transaction:
    id: str  # opaque, minted on creation, never taken from CSV input
    date: date
    amount: Decimal  # always non-negative, sign carried by type
    description: str
    category: str  # one of models.category.CATEGORIES
    type: str  # 'income' or 'expense'

    @property
    def signed_amount(self) -> Decimal:
        """Economic sign of the transaction: +amount for income, -amount for expense."""
        return self.amount if self.type == INCOME else -self.amount

    @property
    def duplicate_key(self) -> tuple:
        """Fields that identify the same real-world transaction across imports."""
        return (self.date, self.description, self.amount)

    @classmethod
    def create(
        cls,
        transaction_date: date,
        amount,
        description: str,
        category: str,
        type: str,
    ) -> "Transaction":
        """Create a Transaction from manual entry with a fresh ID.

        Raises:
            InvalidAmountError: If amount is non-numeric, non-finite or <= 0.
            MissingDescriptionError: If description is empty or only whitespace.
            ValueError: If type is not 'income' or 'expense'.
        """
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation:
            raise InvalidAmountError(amount)
        if not value.is_finite() or value <= 0:
            raise InvalidAmountError(amount)

        description = (description or "").strip()
        if not description:
            raise MissingDescriptionError()

        type_value = (type or "").strip().lower()
        if type_value not in TRANSACTION_TYPES:
            raise ValueError(
                f"Invalid transaction type '{type}': must be 'income' or 'expense'"
            )

        return cls(
            id=new_transaction_id(),
            date=transaction_date,
            amount=value,
            description=description,
            category=coerce_category(category),
            type=type_value,
        )
