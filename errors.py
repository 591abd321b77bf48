"""Error kinds raised by the ledger core.

All of them subclass ValueError so callers that treat bad input generically
can keep catching ValueError.
"""

from typing import Iterable


class BudgetBuddyError(Exception):
    """Base class for ledger errors."""


class MissingColumnsError(BudgetBuddyError, ValueError):
    """CSV header lacks one or more required columns. Fatal for the file."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            "CSV file is missing required columns: "
            f"{', '.join(self.missing)}. "
            "Required: date, amount, description, category, type"
        )


class MalformedRowError(BudgetBuddyError, ValueError):
    """A single CSV row could not be converted. The row is skipped."""

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Malformed row on line {line_number}: {reason}")


class EmptyImportError(BudgetBuddyError, ValueError):
    """The CSV file yielded zero valid transactions."""

    def __init__(self, message: str = "No valid transactions found in the CSV file."):
        super().__init__(message)


class InvalidAmountError(BudgetBuddyError, ValueError):
    """Amount is non-numeric, non-finite, or not strictly positive."""

    def __init__(self, raw_amount):
        self.raw_amount = raw_amount
        super().__init__(
            f"Invalid amount '{raw_amount}': must be a number greater than zero"
        )


class MissingDescriptionError(BudgetBuddyError, ValueError):
    """Manual entry with an empty or whitespace-only description."""

    def __init__(self):
        super().__init__("Description must not be empty")
