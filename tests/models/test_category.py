from decimal import Decimal

from models.category import (
    CATEGORIES,
    coerce_category,
    is_valid_category,
    resolve_type,
)


class TestCategories:
    """Tests for category validation and fallback."""

    def test_fixed_enumeration(self):
        assert CATEGORIES == (
            "Housing",
            "Food",
            "Transportation",
            "Entertainment",
            "Healthcare",
            "Shopping",
            "Utilities",
            "Income",
            "Other",
        )

    def test_valid_category(self):
        assert is_valid_category("Food")
        assert coerce_category("Food") == "Food"

    def test_category_is_case_sensitive(self):
        """Test that 'food' is not the same as 'Food'."""
        assert not is_valid_category("food")
        assert coerce_category("food") == "Other"

    def test_empty_category_falls_back(self):
        assert coerce_category("") == "Other"


class TestResolveType:
    """Tests for the type fallback heuristic."""

    def test_explicit_types_kept(self):
        assert resolve_type("income", Decimal("-5")) == "income"
        assert resolve_type("expense", Decimal("5")) == "expense"

    def test_type_lowercased(self):
        assert resolve_type("Expense", Decimal("5")) == "expense"

    def test_negative_amount_means_expense(self):
        assert resolve_type("debit", Decimal("-5")) == "expense"

    def test_positive_amount_means_income(self):
        assert resolve_type("", Decimal("5")) == "income"

    def test_zero_amount_means_income(self):
        assert resolve_type(None, Decimal("0")) == "income"
