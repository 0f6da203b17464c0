"""Defines the CLI for database management."""

from dam_license.cli.async_typer import AsyncTyper
from dam_license.cli.common import console, open_world

app = AsyncTyper(name="db", help="Commands for database management.", add_completion=False, no_args_is_help=True)


@app.command(name="init")
async def init_db() -> None:
    """Create the database tables of the selected world."""
    async with open_world() as world:
        await world.create_db_and_tables()
    console.print(f"Database for world '{world.name}' initialized.")
