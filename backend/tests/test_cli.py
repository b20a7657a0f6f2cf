"""
Bookshelf API — Developer CLI Tests
====================================

What:  Tests for `bookshelf dev-setup`.
How:   Typer's CliRunner invokes the command against the SQLite test
       database. The command itself skips migrations (--no-migrate, tables
       created by the fixture) or has them patched out; run_migrations is
       tested on its own against the real Alembic revisions.

What we test:
    ✅ Sample authors are seeded
    ✅ The printed token authenticates as the developer user
    ✅ A second run reuses the developer user
    ✅ A missing alembic.ini exits with code 1
    ✅ run_migrations builds the schema and can be re-run from scratch
"""

import asyncio
from unittest.mock import patch

from sqlalchemy import func, inspect, select
from typer.testing import CliRunner

from bookshelf.auth import DatabaseTokenValidator
from bookshelf.cli import DEFAULT_ALEMBIC_INI, cli, run_migrations
from bookshelf.database import engine, session_scope
from bookshelf.models.author import Author
from bookshelf.models.user import User
from bookshelf.repositories.author_repository import SQLAlchemyAuthorStore

runner = CliRunner()


def printed_token(output: str) -> str:
    lines = output.splitlines()
    marker = next(i for i, line in enumerate(lines) if "Personal access token:" in line)
    return lines[marker + 1].strip()


async def count_rows(model) -> int:
    async with session_scope() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def validate(token: str):
    async with session_scope() as session:
        return await DatabaseTokenValidator(session).validate(token)


class TestDevSetup:

    def test_seeds_authors_and_prints_working_token(self, sync_database):
        result = runner.invoke(cli, ["dev-setup", "--no-migrate", "--seed-authors", "3"])

        assert result.exit_code == 0, result.output
        assert "john@example.com" in result.output
        assert asyncio.run(count_rows(Author)) == 3

        principal = asyncio.run(validate(printed_token(result.output)))
        assert principal.email == "john@example.com"
        assert principal.name == "John Doe"

    def test_second_run_reuses_user(self, sync_database):
        runner.invoke(cli, ["dev-setup", "--no-migrate", "--seed-authors", "0"])
        result = runner.invoke(cli, ["dev-setup", "--no-migrate", "--seed-authors", "0"])

        assert result.exit_code == 0, result.output
        assert "already exists" in result.output
        assert asyncio.run(count_rows(User)) == 1
        assert asyncio.run(count_rows(Author)) == 0

    def test_runs_migrations_by_default(self, sync_database):
        with patch("bookshelf.cli.run_migrations") as mock_migrate:
            result = runner.invoke(cli, ["dev-setup", "--seed-authors", "0"])

        assert result.exit_code == 0, result.output
        mock_migrate.assert_called_once_with(DEFAULT_ALEMBIC_INI)

    def test_missing_alembic_config(self, tmp_path):
        result = runner.invoke(
            cli, ["dev-setup", "--alembic-config", str(tmp_path / "missing.ini")]
        )

        assert result.exit_code == 1
        assert "not found" in result.output


async def create_author_row() -> None:
    async with session_scope() as session:
        await SQLAlchemyAuthorStore(session).create({"name": "Jane Austen"})


async def table_names() -> set:
    async with engine.connect() as conn:
        return set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))


class TestRunMigrations:

    def test_fresh_migration_creates_schema(self, empty_database):
        run_migrations(DEFAULT_ALEMBIC_INI)

        assert {"authors", "users", "personal_access_tokens"} <= asyncio.run(table_names())

    def test_rerun_starts_from_an_empty_schema(self, empty_database):
        run_migrations(DEFAULT_ALEMBIC_INI)
        asyncio.run(create_author_row())

        run_migrations(DEFAULT_ALEMBIC_INI)

        assert {"authors", "users", "personal_access_tokens"} <= asyncio.run(table_names())
        assert asyncio.run(count_rows(Author)) == 0

