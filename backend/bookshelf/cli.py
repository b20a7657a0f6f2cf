"""
Bookshelf API — Developer CLI
==============================

What:  `bookshelf dev-setup` bootstraps a local development environment.
How:   Typer command, Rich output. Steps:
           1. fresh migration (alembic downgrade base + upgrade head)
           2. seed sample authors
           3. create (or reuse) the developer user
           4. issue a personal access token and print it once
Who:   Developers, after cloning the repository and starting the database.

Example:
    bookshelf dev-setup
    bookshelf dev-setup --no-migrate --seed-authors 0
"""

import asyncio
from pathlib import Path
from typing import Tuple

import typer
from alembic import command
from alembic.config import Config
from rich.console import Console
from rich.panel import Panel

from bookshelf.config import settings
from bookshelf.database import dispose_engine, session_scope
from bookshelf.main import setup_logging
from bookshelf.repositories.author_repository import SQLAlchemyAuthorStore
from bookshelf.services.token_service import get_or_create_user, issue_personal_access_token

cli = typer.Typer(
    name="bookshelf",
    help="Bookshelf API developer tooling",
    add_completion=False,
)
console = Console()

DEFAULT_ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"

SAMPLE_AUTHOR_NAMES = [
    "Jane Austen",
    "Mary Shelley",
    "Charles Dickens",
    "George Eliot",
    "Leo Tolstoy",
    "Virginia Woolf",
    "Herman Melville",
    "Fyodor Dostoevsky",
]

DEV_TOKEN_NAME = "Development Token"


@cli.callback()
def main() -> None:
    """Bookshelf API developer tooling."""


def run_migrations(alembic_ini: Path) -> None:
    """Drop every table managed by Alembic and migrate back up to head."""
    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(alembic_ini.parent / "alembic"))
    command.downgrade(config, "base")
    command.upgrade(config, "head")


async def bootstrap(seed_authors: int) -> Tuple[str, str]:
    """
    Seed authors, ensure the developer user, issue a token.

    Returns:
        (developer email, plaintext personal access token)
    """
    try:
        async with session_scope() as session:
            store = SQLAlchemyAuthorStore(session)
            for i in range(seed_authors):
                name = SAMPLE_AUTHOR_NAMES[i % len(SAMPLE_AUTHOR_NAMES)]
                await store.create({"name": name})

            user, created = await get_or_create_user(
                session, settings.dev_user_name, settings.dev_user_email
            )
            if created:
                console.print(f"[green]✓[/green] {user.name} created")
            else:
                console.print(f"[yellow]•[/yellow] {user.name} already exists, reusing")

            _, plaintext = await issue_personal_access_token(session, user, DEV_TOKEN_NAME)
            return user.email, plaintext
    finally:
        await dispose_engine()


@cli.command(name="dev-setup")
def dev_setup(
    migrate: bool = typer.Option(
        True, "--migrate/--no-migrate", help="Run a fresh migration first"
    ),
    seed_authors: int = typer.Option(
        5, "--seed-authors", min=0, help="Number of sample authors to create"
    ),
    alembic_config: Path = typer.Option(
        DEFAULT_ALEMBIC_INI, "--alembic-config", help="Path to alembic.ini"
    ),
):
    """Set up the development environment and print a bearer token."""
    setup_logging()
    console.print()
    console.print(
        Panel.fit("[bold cyan]Setting up development environment[/bold cyan]", border_style="cyan")
    )

    if migrate:
        if not alembic_config.exists():
            console.print(f"[red]✗ Alembic config not found:[/red] {alembic_config}")
            raise typer.Exit(code=1)
        console.print("Migrating database (fresh)...")
        run_migrations(alembic_config)
        console.print("[green]✓[/green] Database migrated")

    email, token = asyncio.run(bootstrap(seed_authors))

    if seed_authors:
        console.print(f"[green]✓[/green] Seeded {seed_authors} authors")
    console.print(f"[yellow]Email:[/yellow] {email}")
    console.print("[yellow]Personal access token:[/yellow]")
    # Plain print so the token is never wrapped or styled
    print(token)
    console.print()
    console.print("[bold green]All done. Bye![/bold green]")


if __name__ == "__main__":
    cli()
