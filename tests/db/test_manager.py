from cli.migrate import apply_pending_migrations
from db.manager import DatabaseManager


class TestDatabaseManager:
    """Tests for DatabaseManager against a file-backed database."""

    def test_connect_creates_data_dir(self, test_config):
        manager = DatabaseManager(test_config)
        assert not test_config.db_data_dir.exists()

        with manager.connect() as conn:
            conn.execute("SELECT 1")

        assert manager.get_db_path() == test_config.db_data_dir / "test.db"
        assert manager.get_db_path().exists()

    def test_migrations_dir_holds_initial_schema(self, test_config):
        manager = DatabaseManager(test_config)

        assert (manager.get_migrations_dir() / "001_initial.sql").exists()

    def test_schema_applies_once(self, test_config):
        manager = DatabaseManager(test_config)

        with manager.connect() as conn:
            first = apply_pending_migrations(conn, manager.get_migrations_dir())
            second = apply_pending_migrations(conn, manager.get_migrations_dir())
            tables = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }

        assert first == ["001_initial.sql"]
        assert second == []
        assert {"transactions", "budget_items"} <= tables
