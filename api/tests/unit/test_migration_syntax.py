"""Tests for migration file syntax and structure."""

import importlib.util
from pathlib import Path

from seekpage.db.models import Base, Entry
from seekpage.models.entries import ENTRY_COLUMNS


MIGRATIONS_DIR = Path(__file__).parent.parent.parent / "migrations"


class TestMigrationSyntax:
    """Migration files load and match the SQLAlchemy models."""

    def test_entries_migration_imports(self):
        migration_files = list((MIGRATIONS_DIR / "versions").glob("*_create_entries.py"))
        assert len(migration_files) == 1

        spec = importlib.util.spec_from_file_location("migration", migration_files[0])
        migration_module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(migration_module)

        assert callable(migration_module.upgrade)
        assert callable(migration_module.downgrade)
        assert migration_module.down_revision is None
        assert isinstance(migration_module.revision, str)

    def test_migration_creates_listing_indexes(self):
        content = next((MIGRATIONS_DIR / "versions").glob("*_create_entries.py")).read_text()

        assert "create_table('entries'" in content
        for index in Entry.__table__.indexes:
            assert index.name in content
            assert f"drop_index('{index.name}'" in content

    def test_alembic_env_syntax(self):
        content = (MIGRATIONS_DIR / "env.py").read_text()

        assert "from alembic import context" in content
        assert "def run_migrations_offline()" in content
        assert "def run_migrations_online()" in content
        assert "from seekpage.db.models import" in content

    def test_models_cover_selected_columns(self):
        assert Entry.__tablename__ == "entries"
        assert set(ENTRY_COLUMNS) == set(Entry.__table__.columns.keys())
        assert "entries" in Base.metadata.tables

    def test_every_listing_index_ends_in_id(self):
        for index in Entry.__table__.indexes:
            assert [c.name for c in index.columns][-1] == "id", index.name
