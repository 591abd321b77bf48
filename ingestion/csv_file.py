"""Budget Buddy CSV format: parsing, validation and serialization.

Header (any order, case-insensitive on import): date,amount,description,category,type
"""

import csv
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List

from dateutil import parser as date_parser

from errors import EmptyImportError, MalformedRowError, MissingColumnsError
from models.category import coerce_category, resolve_type
from models.transaction import Transaction, new_transaction_id

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["date", "amount", "description", "category", "type"]
DELIMITER = ","
BOM = "\ufeff"

_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


@dataclass
class ParseResult:
    """Transactions parsed from a file plus the rows that were skipped."""

    transactions: List[Transaction] = field(default_factory=list)
    skipped: List[MalformedRowError] = field(default_factory=list)


def _column_indices(header: List[str]) -> Dict[str, int]:
    """Map each required column to its position in the header.

    Raises:
        MissingColumnsError: If any required column is absent.
    """
    normalized = [h.strip().lower() for h in header]
    missing = [col for col in CSV_COLUMNS if col not in normalized]
    if missing:
        raise MissingColumnsError(missing)
    return {col: normalized.index(col) for col in CSV_COLUMNS}


def parse_full_date(value: str) -> date:
    """Parse a free-form date that names a year, a month and a day.

    dateutil fills missing parts from a default date, so the value is parsed
    against two defaults that differ in every part; any disagreement means
    the value left a part unspecified.

    Raises:
        ValueError: If the value is not a date or is only partly specified.
    """
    try:
        first = date_parser.parse(value, default=_DEFAULT_A).date()
        second = date_parser.parse(value, default=_DEFAULT_B).date()
    except (ValueError, OverflowError):
        raise ValueError(f"unparseable date '{value}'")
    if first != second:
        raise ValueError(f"incomplete date '{value}'")
    return first


def _parse_date(value: str, line_number: int) -> date:
    if not value:
        raise MalformedRowError(line_number, "missing date")
    try:
        return parse_full_date(value)
    except ValueError as e:
        raise MalformedRowError(line_number, str(e))


def _parse_amount(value: str, line_number: int) -> Decimal:
    """Parse the raw amount keeping its sign (needed for the type heuristic)."""
    try:
        amount = Decimal(value.replace(",", ""))
    except InvalidOperation:
        raise MalformedRowError(line_number, f"amount '{value}' is not a number")
    if not amount.is_finite():
        raise MalformedRowError(line_number, f"amount '{value}' is not a number")
    return amount


def row_to_transaction(
    row: List[str], columns: Dict[str, int], header_length: int, line_number: int
) -> Transaction:
    """Convert a CSV row to a Transaction object.

    Args:
        row: Raw field values for one line.
        columns: Column name -> index, from the header.
        header_length: Number of fields in the header row.
        line_number: Line number used in diagnostics (header is line 1).

    Returns:
        Transaction with a freshly minted ID.

    Raises:
        MalformedRowError: If the field count is wrong, or the date or
            amount cannot be parsed.
    """
    values = [v.strip() for v in row]
    if len(values) != header_length:
        raise MalformedRowError(
            line_number,
            f"expected {header_length} fields, got {len(values)}",
        )

    amount_value = _parse_amount(values[columns["amount"]], line_number)
    transaction_date = _parse_date(values[columns["date"]], line_number)

    return Transaction(
        id=new_transaction_id(),
        date=transaction_date,
        amount=abs(amount_value),
        description=values[columns["description"]],
        category=coerce_category(values[columns["category"]]),
        type=resolve_type(values[columns["type"]], amount_value),
    )


def parse_csv_detailed(text: str) -> ParseResult:
    """Parse CSV text, returning valid transactions and skipped-row diagnostics.

    Raises:
        EmptyImportError: If the text has no lines or no valid rows.
        MissingColumnsError: If the header lacks a required column.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    # Rows end at "\n" only; other Unicode line separators stay inside fields
    lines = [line.rstrip("\r") for line in text.split("\n")]
    lines = [line for line in lines if line.strip()]
    if not lines:
        raise EmptyImportError("Empty CSV file")

    reader = csv.reader(lines, delimiter=DELIMITER)
    header = next(reader)
    columns = _column_indices(header)
    logger.info("Validated CSV header")

    result = ParseResult()
    for line_number, row in enumerate(reader, start=2):
        try:
            result.transactions.append(
                row_to_transaction(row, columns, len(header), line_number)
            )
        except MalformedRowError as e:
            logger.warning(f"Skipping line {line_number}: {e.reason}")
            result.skipped.append(e)

    if not result.transactions:
        raise EmptyImportError()

    logger.info(
        f"Successfully parsed {len(result.transactions)} transactions "
        f"({len(result.skipped)} skipped)"
    )
    return result


def parse_csv(text: str) -> List[Transaction]:
    """Parse CSV text into validated transactions.

    Rows with the wrong number of fields or an unparseable date/amount are
    skipped with a warning. Unknown categories become "Other"; an unknown
    or empty type is inferred from the sign of the raw amount.

    Raises:
        EmptyImportError: If no valid transactions were found.
        MissingColumnsError: If the header lacks a required column.
    """
    return parse_csv_detailed(text).transactions


def _format_amount(amount: Decimal) -> str:
    return format(amount, "f")


def _format_description(description: str) -> str:
    # Only the delimiter triggers quoting; embedded quotes and newlines are not escaped.
    if DELIMITER in description:
        return f'"{description}"'
    return description


def generate_csv(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions to CSV text in the order given."""
    lines = [DELIMITER.join(CSV_COLUMNS)]
    for t in transactions:
        lines.append(
            DELIMITER.join(
                [
                    t.date.isoformat(),
                    _format_amount(t.amount),
                    _format_description(t.description),
                    t.category,
                    t.type,
                ]
            )
        )
    return "\n".join(lines) + "\n"


def export_filename(product_name: str, today: date) -> str:
    """Build the export filename: <product>_transactions_<ISO-date>.csv"""
    return f"{product_name}_transactions_{today.isoformat()}.csv"
