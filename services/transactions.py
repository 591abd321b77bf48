"""Transaction service: ledger persistence with full-replace semantics."""

from typing import List, Optional
from datetime import date
from decimal import Decimal
from models.transaction import Transaction

_TRANSACTION_FIELDS = "id, date, amount, description, category, transaction_type"

_TRANSACTION_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_TRANSACTION_FIELDS.split(',')))})"
)


class TransactionService:
    """Service for loading and saving the transaction ledger.

    The ledger is read in full and written back in full. Concurrent writers
    are not coordinated: the last save wins.
    """

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def load_all(self) -> List[Transaction]:
        """Get the full ledger.

        Returns:
            List of Transaction objects, newest date first.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_FIELDS}
                FROM transactions
                ORDER BY date DESC, rowid
                """
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def save_all(self, transactions: List[Transaction]) -> int:
        """Replace the stored ledger with the given transactions.

        Args:
            transactions: The complete ledger to store.

        Returns:
            Number of transactions stored.

        Raises:
            Exception: If the write fails. The previous ledger is kept.
        """
        with self.db_manager.connect() as conn:
            try:
                conn.execute("DELETE FROM transactions")
                conn.executemany(
                    f"""
                    INSERT INTO transactions ({_TRANSACTION_FIELDS})
                    VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                    """,
                    [self._transaction_to_row(t) for t in transactions],
                )
                conn.commit()
            except Exception:
                conn.rollback()
                raise

        return len(transactions)

    def create(self, transaction: Transaction) -> Transaction:
        """Add a single transaction by rewriting the ledger with it appended."""
        ledger = self.load_all()
        ledger.append(transaction)
        self.save_all(ledger)
        return transaction

    def delete(self, transaction_id: str) -> bool:
        """Remove a transaction by ID.

        Returns:
            True if a transaction was removed, False if the ID was unknown.
        """
        ledger = self.load_all()
        remaining = [t for t in ledger if t.id != transaction_id]
        if len(remaining) == len(ledger):
            return False
        self.save_all(remaining)
        return True

    def find(self, transaction_id: str) -> Optional[Transaction]:
        """Get a single transaction by ID, or None if not found."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_FIELDS} FROM transactions WHERE id = ?",
                (transaction_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def _transaction_to_row(self, t: Transaction) -> tuple:
        return (
            t.id,
            t.date.isoformat(),
            str(t.amount),
            t.description,
            t.category,
            t.type,
        )

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            date=date.fromisoformat(row[1]),
            amount=Decimal(row[2]),
            description=row[3],
            category=row[4],
            type=row[5],
        )
