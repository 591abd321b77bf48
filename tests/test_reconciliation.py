import pytest
from decimal import Decimal

from errors import EmptyImportError, MissingColumnsError
from reconciliation import (
    ADDED,
    IMPORTED,
    NOOP,
    import_csv,
    import_merge,
    preview_import,
)
from tests.helpers import make_transaction, tuples

HEADER = "date,amount,description,category,type"


@pytest.fixture
def ledger():
    return [
        make_transaction("2024-01-01", 1000, "Salary", "Income", "income"),
        make_transaction("2024-01-02", 200, "Groceries", "Food", "expense"),
    ]


class TestDuplicateKey:
    """Tests for which candidates import_merge treats as duplicates."""

    def test_exact_match(self, ledger):
        candidate = make_transaction("2024-01-02", 200, "Groceries", "Food", "expense")

        assert import_merge([candidate], ledger).kind == NOOP

    def test_category_and_type_ignored(self, ledger):
        """Test that a recategorized row is still a duplicate."""
        candidate = make_transaction("2024-01-02", 200, "Groceries", "Shopping", "income")

        assert import_merge([candidate], ledger).kind == NOOP

    def test_amount_compared_numerically(self, ledger):
        candidate = make_transaction("2024-01-02", "200.00", "Groceries")

        assert import_merge([candidate], ledger).kind == NOOP

    @pytest.mark.parametrize(
        "date_str,amount,description",
        [
            ("2024-01-03", 200, "Groceries"),
            ("2024-01-02", "200.01", "Groceries"),
            ("2024-01-02", 200, "groceries"),
        ],
    )
    def test_differing_key_field(self, ledger, date_str, amount, description):
        candidate = make_transaction(date_str, amount, description)

        result = import_merge([candidate], ledger)

        assert result.kind == ADDED
        assert result.transactions == [candidate]


class TestImportMerge:
    """Tests for import_merge function."""

    def test_one_duplicate_one_new(self, ledger):
        """Test that only the genuinely new row is added."""
        candidates = [
            make_transaction("2024-01-02", 200, "Groceries", "Food", "expense"),
            make_transaction("2024-01-05", 45, "Cinema", "Entertainment", "expense"),
        ]

        result = import_merge(candidates, ledger)

        assert result.kind == ADDED
        assert result.count == 1
        assert result.transactions[0].description == "Cinema"
        assert len(result.ledger) == 3
        assert result.ledger[:2] == ledger
        assert result.changed is True

    def test_all_duplicates_is_noop(self, ledger):
        """Test that zero additions is distinct from a successful merge."""
        candidates = [make_transaction("2024-01-01", 1000, "Salary", "Income", "income")]

        result = import_merge(candidates, ledger)

        assert result.kind == NOOP
        assert result.count == 0
        assert result.ledger == ledger
        assert result.changed is False

    def test_existing_ledger_not_mutated(self, ledger):
        before = list(ledger)

        import_merge([make_transaction("2024-02-01", 1, "New")], ledger)

        assert ledger == before

    def test_merge_into_empty_ledger(self):
        candidates = [make_transaction("2024-02-01", 1, "New")]

        result = import_merge(candidates, [])

        assert result.kind == ADDED
        assert result.ledger == candidates

    def test_in_file_duplicates_are_both_added(self):
        """Test that candidates are only checked against the existing ledger."""
        candidates = [
            make_transaction("2024-02-01", 3, "Coffee"),
            make_transaction("2024-02-01", 3, "Coffee"),
        ]

        result = import_merge(candidates, [])

        assert result.count == 2

    def test_empty_candidates_is_noop(self, ledger):
        result = import_merge([], ledger)

        assert result.kind == NOOP


class TestImportCsv:
    """Tests for parse-and-merge of CSV text."""

    def test_idempotent_reimport(self, ledger):
        """Test that importing the same file twice adds nothing the second time."""
        text = (
            f"{HEADER}\n"
            "2024-01-02,200,Groceries,Food,expense\n"
            "2024-01-05,45,Cinema,Entertainment,expense\n"
            "2024-01-06,12.5,\"Taxi, airport\",Transportation,expense\n"
        )

        first = import_csv(text, ledger)
        second = import_csv(text, first.ledger)

        assert first.kind == ADDED
        assert first.count == 2
        assert second.kind == NOOP
        assert second.count == 0
        assert tuples(second.ledger) == tuples(first.ledger)

    def test_skipped_rows_reported(self):
        text = f"{HEADER}\n2024-01-05,45,Cinema,Entertainment,expense\nbad,row\n"

        result = import_csv(text, [])

        assert result.count == 1
        assert result.skipped_rows == 1

    def test_missing_columns_propagates(self, ledger):
        with pytest.raises(MissingColumnsError):
            import_csv("date,amount\n2024-01-01,5\n", ledger)

    def test_empty_import_propagates(self, ledger):
        with pytest.raises(EmptyImportError):
            import_csv(f"{HEADER}\n", ledger)


class TestPreviewImport:
    """Tests for preview mode."""

    def test_preview_returns_parsed_transactions(self):
        text = f"{HEADER}\n2024-01-05,45,Cinema,Entertainment,expense\n"

        result = preview_import(text)

        assert result.kind == IMPORTED
        assert result.count == 1
        assert result.transactions[0].amount == Decimal("45")
        assert result.ledger == []
        assert result.changed is False

    def test_preview_does_not_dedupe(self):
        """Test that preview ignores any ledger and shows every valid row."""
        text = (
            f"{HEADER}\n"
            "2024-01-02,200,Groceries,Food,expense\n"
            "2024-01-02,200,Groceries,Food,expense\n"
        )

        result = preview_import(text)

        assert result.count == 2
