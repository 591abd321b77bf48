"""Budget service for database operations."""

from decimal import Decimal
from models.budget import Budget, BudgetItem


class BudgetService:
    """Service for loading and saving the budget (full replace)."""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def load(self) -> Budget:
        """Get the stored budget, in the order its items were saved."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT category, amount FROM budget_items ORDER BY position"
            )
            return Budget(
                items=[
                    BudgetItem(category=row[0], amount=Decimal(row[1]))
                    for row in cursor.fetchall()
                ]
            )

    def save(self, budget: Budget) -> None:
        """Replace the stored budget.

        Raises:
            Exception: If the write fails. The previous budget is kept.
        """
        with self.db_manager.connect() as conn:
            try:
                conn.execute("DELETE FROM budget_items")
                conn.executemany(
                    "INSERT INTO budget_items (category, amount) VALUES (?, ?)",
                    [(item.category, str(item.amount)) for item in budget.items],
                )
                conn.commit()
            except Exception:
                conn.rollback()
                raise
