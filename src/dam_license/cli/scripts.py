"""Defines the CLI for running administrative scripts."""

import asyncio
from typing import Annotated

import typer
from rich.table import Table

from dam_license.cli.async_typer import AsyncTyper
from dam_license.cli.common import CLI_ERRORS, console, fail
from dam_license.cli.state import global_state
from dam_license.scripts import ScriptExecutor, ScriptRegistry

app = AsyncTyper(name="script", help="Commands for running administrative scripts.", add_completion=False, no_args_is_help=True)


@app.command(name="list")
def list_scripts() -> None:
    """List the available scripts."""
    try:
        world = global_state.create_world()
    except CLI_ERRORS as e:
        fail(e)
    registry = world.get_resource(ScriptRegistry)
    asyncio.run(world.close())

    table = Table(title="Scripts")
    table.add_column("Name")
    table.add_column("Description")
    for name in registry.names():
        table.add_row(name, registry.get(name).description)
    console.print(table)


@app.command(name="run", context_settings={"ignore_unknown_options": True})
def run_script(
    name: Annotated[str, typer.Argument(help="Name of the script.")],
    args: Annotated[list[str] | None, typer.Argument(help="Arguments passed to the script.")] = None,
) -> None:
    """Run a script on the world's script pool and wait for it to finish."""
    try:
        world = global_state.create_world()
    except CLI_ERRORS as e:
        fail(e)
    try:
        result = world.get_resource(ScriptExecutor).submit(name, args or []).result()
    except CLI_ERRORS as e:
        fail(e)
    finally:
        asyncio.run(world.close())

    console.print(result.message, highlight=False)
    for key, count in sorted(result.counts.items()):
        console.print(f"  {key}: {count}")
