"""Budget model: target monthly allocation per category."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional


@dataclass
class BudgetItem:
    """Target monthly amount for a single category."""

    category: str
    amount: Decimal


@dataclass
class Budget:
    """Collection of per-category budget targets.

    The type does not enforce one entry per category; set_amount keeps a
    budget well-formed by replacing an existing entry instead of adding one.
    """

    items: List[BudgetItem] = field(default_factory=list)

    def get(self, category: str) -> Optional[BudgetItem]:
        for item in self.items:
            if item.category == category:
                return item
        return None

    def set_amount(self, category: str, amount: Decimal) -> None:
        existing = self.get(category)
        if existing is not None:
            existing.amount = amount
        else:
            self.items.append(BudgetItem(category=category, amount=amount))

    def remove(self, category: str) -> bool:
        before = len(self.items)
        self.items = [item for item in self.items if item.category != category]
        return len(self.items) < before

    def as_mapping(self) -> Dict[str, Decimal]:
        """Category -> amount. Later duplicates win."""
        return {item.category: item.amount for item in self.items}

    @property
    def total(self) -> Decimal:
        return sum((item.amount for item in self.items), Decimal("0"))
