"""Import merge: reconcile parsed CSV transactions against an existing ledger.

A candidate duplicates an existing transaction when date, description and
amount all match exactly. Category and type are not part of the key, so a
re-imported row with a different category is still treated as the same
transaction.

Candidates are only checked against the existing ledger, not against each
other: two identical rows in one file are both added the first time, and
both dropped on re-import. Re-importing the same file is therefore a no-op.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from ingestion.csv_file import parse_csv_detailed
from models.transaction import Transaction

logger = logging.getLogger(__name__)

IMPORTED = "imported"  # preview only, nothing merged
ADDED = "added"  # at least one new transaction merged
NOOP = "noop"  # every candidate was a duplicate


@dataclass(frozen=True)
class ImportResult:
    """Tagged outcome of a preview or merge.

    Attributes:
        kind: IMPORTED, ADDED or NOOP.
        transactions: Parsed candidates (IMPORTED) or newly added ones (ADDED).
        ledger: Full replacement ledger to persist (ADDED), the unchanged
            ledger (NOOP), or empty for a preview.
        skipped_rows: Malformed rows dropped while parsing.
    """

    kind: str
    transactions: List[Transaction] = field(default_factory=list)
    ledger: List[Transaction] = field(default_factory=list)
    skipped_rows: int = 0

    @property
    def count(self) -> int:
        return len(self.transactions)

    @property
    def changed(self) -> bool:
        """True when the ledger must be saved."""
        return self.kind == ADDED


def import_merge(
    candidates: Iterable[Transaction],
    existing: Iterable[Transaction],
    skipped_rows: int = 0,
) -> ImportResult:
    """Append non-duplicate candidates to the existing ledger.

    Duplicates are dropped silently. The existing ledger is not modified;
    the merged ledger is returned for the caller to persist.
    """
    existing = list(existing)
    existing_keys = {t.duplicate_key for t in existing}

    added = [c for c in candidates if c.duplicate_key not in existing_keys]

    if not added:
        logger.info("No new transactions to import")
        return ImportResult(kind=NOOP, ledger=existing, skipped_rows=skipped_rows)

    logger.info(f"Merging {len(added)} new transaction(s) into ledger of {len(existing)}")
    return ImportResult(
        kind=ADDED,
        transactions=added,
        ledger=existing + added,
        skipped_rows=skipped_rows,
    )


def preview_import(text: str) -> ImportResult:
    """Parse and validate CSV text without consulting any ledger.

    Raises:
        MissingColumnsError: If the header lacks a required column.
        EmptyImportError: If no valid rows were found.
    """
    parsed = parse_csv_detailed(text)
    return ImportResult(
        kind=IMPORTED,
        transactions=parsed.transactions,
        skipped_rows=len(parsed.skipped),
    )


def import_csv(text: str, existing: Iterable[Transaction]) -> ImportResult:
    """Parse CSV text and merge it into the existing ledger.

    Raises:
        MissingColumnsError: If the header lacks a required column.
        EmptyImportError: If no valid rows were found.
    """
    parsed = parse_csv_detailed(text)
    return import_merge(parsed.transactions, existing, len(parsed.skipped))
