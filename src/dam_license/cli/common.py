"""Helpers shared by the CLI command groups."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import NoReturn

import typer
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from dam_license.cli.state import global_state
from dam_license.core.exceptions import DamLicenseException
from dam_license.core.world import World

# Failures reported to the user as an error message and exit code 1.
CLI_ERRORS: tuple[type[BaseException], ...] = (DamLicenseException, LookupError, OSError, SQLAlchemyError, ValueError)

console = Console()
error_console = Console(stderr=True)


def fail(error: BaseException) -> NoReturn:
    """Report an error and exit with status 1."""
    error_console.print(f"[bold red]Error:[/] {error}", highlight=False)
    raise typer.Exit(1) from error


@asynccontextmanager
async def open_world() -> AsyncIterator[World]:
    """
    Build the selected world for one command and close it afterwards.

    Errors raised inside the block are reported through :func:`fail`.
    """
    try:
        world = global_state.create_world()
    except CLI_ERRORS as e:
        fail(e)
    try:
        yield world
    except CLI_ERRORS as e:
        fail(e)
    finally:
        await world.close()
