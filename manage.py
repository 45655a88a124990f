import asyncio
import subprocess
from typing import Annotated

from rich import print

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine
import typer

from app.core.config import settings

app = typer.Typer()


async def clear_alembic_task(database_url: str | None = None) -> None:
    """
    Empty the alembic_version table so migrations can be re-stamped.

    A missing table is reported and left alone.
    """
    engine = create_async_engine(database_url or settings.DATABASE_URL)
    print("[yellow]Clearing Alembic version history[/yellow]")
    try:
        async with engine.begin() as connection:
            result = await connection.execute(text("DELETE FROM alembic_version"))
        if result.rowcount:
            print(f"[green]Removed {result.rowcount} alembic_version row(s)[/green]")
        else:
            print("[cyan]Alembic version history is already empty[/cyan]")
    except SQLAlchemyError as e:
        print(f"[red]Could not clear Alembic version history:[/red] {e}")
    finally:
        await engine.dispose()


async def init_db_task() -> None:
    """Create every table directly from the models, bypassing Alembic."""
    from app.core.db import dispose_db, init_db

    try:
        await init_db()
        print("[green]Database tables created[/green]")
    except SQLAlchemyError as e:
        print(f"[red]Error creating tables:[/red] {str(e)}")
        raise typer.Exit(1)
    finally:
        await dispose_db()


async def clear_tokens_task(dry_run: bool = False) -> None:
    """
    Purge expired pending registrations and stale password reset challenges.

    Deleting a pending registration also deletes its OTP challenge through the
    foreign key cascade.

    Args:
        dry_run: If True, roll back instead of committing.
    """
    from app.core.db import AsyncSessionLocal, dispose_db
    from app.core.db.crud import password_reset_challenge_db, pending_registration_db
    from app.core.utils import utc_now

    now = utc_now()
    try:
        async with AsyncSessionLocal() as session:
            pending = await pending_registration_db.delete_expired(
                session, now, commit_self=False
            )
            resets = await password_reset_challenge_db.delete_expired_or_used(
                session, now, commit_self=False
            )
            if dry_run:
                print("[yellow]DRY RUN - No changes will be made[/yellow]")
                await session.rollback()
            else:
                await session.commit()
    finally:
        await dispose_db()

    print(
        f"[green]Cleanup complete:[/green] {pending} pending registration(s), "
        f"{resets} password reset challenge(s)"
    )


async def generate_openapi_task(output: str) -> None:
    from app.core.utils import generate_openapi_json, write_to_file_async
    from app.main import app as fastapi_app

    await write_to_file_async(output, generate_openapi_json(fastapi_app))


def _run(command: str, done: str | None = None) -> None:
    """Run a shell command, echoing it first; a failing exit status propagates."""
    print(f"[cyan]$ {command}[/cyan]")
    try:
        subprocess.run(command, shell=True, check=True)
    except subprocess.CalledProcessError as e:
        print(f"[red]Error:[/red] {e}")
        raise
    if done:
        print(f"[green]{done}[/green]")


@app.command()
def clearalembic():
    """Deletes every row of alembic_version in the configured database."""
    asyncio.run(clear_alembic_task())


@app.command()
def makemigrations(comment: Annotated[str, typer.Argument()] = "auto"):
    """Autogenerates an Alembic revision from the current models."""
    _run(f'alembic revision --autogenerate -m "{comment}"', "Make migrations complete")


@app.command()
def showmigrations():
    """Prints the Alembic revision history."""
    _run("alembic history", "Show migrations complete")


@app.command()
def migrate():
    """Upgrades the database schema to the latest revision."""
    _run("alembic upgrade head", "Migration complete")


@app.command()
def initdb():
    """
    Creates all tables from the SQLAlchemy models.

    Meant for local development against SQLite; use `migrate` elsewhere.
    """
    asyncio.run(init_db_task())


@app.command()
def cleartokens(
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Count what would be deleted, then roll back",
        ),
    ] = False,
):
    """
    Deletes expired pending registrations and expired or used reset codes.

    Examples:
        python manage.py cleartokens
        python manage.py cleartokens --dry-run
    """
    asyncio.run(clear_tokens_task(dry_run))


@app.command()
def runserver():
    """Serves the API with uvicorn, with autoreload when DEBUG is on."""
    if settings.DEBUG:
        _run("uvicorn app.main:app --host 127.0.0.1 --port 8000 --reload")
    else:
        _run("uvicorn app.main:app --host 0.0.0.0 --port 8000")


@app.command()
def generateopenapi(
    output: Annotated[str, typer.Option(help="Where to write the schema")] = "openapi.json",
):
    """Writes the OpenAPI schema of the API to a JSON file."""
    asyncio.run(generate_openapi_task(output))
    print(f"[green]OpenAPI schema generated at {output}[/green]")


@app.callback()
def main(ctx: typer.Context):
    print(f"Executing the command: {ctx.invoked_subcommand}")


if __name__ == "__main__":
    app()
