"""Main CLI entry point for dam_license."""

from pathlib import Path
from typing import Annotated

import typer

from dam_license.cli import db, items, license, scripts
from dam_license.cli.common import console
from dam_license.cli.state import DEFAULT_WORLD_NAME, global_state
from dam_license.core.config import list_world_names
from dam_license.core.logging_config import setup_logging

app = typer.Typer(
    name="dam-license",
    help="Creative Commons license management for repository items.",
    add_completion=False,
    no_args_is_help=True,
)

app.add_typer(db.app, name="db")
app.add_typer(items.app, name="item")
app.add_typer(license.app, name="license")
app.add_typer(scripts.app, name="script")


@app.command(name="list-worlds")
def cli_list_worlds() -> None:
    """List all worlds defined in the configuration file."""
    worlds = list_world_names(global_state.config_path)
    if not worlds:
        typer.secho("No worlds are defined in the configuration.", fg=typer.colors.YELLOW)
        return
    console.print("Defined worlds:")
    for world_name in worlds:
        active_marker = " (active)" if world_name == global_state.world_name else ""
        console.print(f"  - {world_name}{active_marker}", highlight=False)


@app.callback()
def main_callback(
    world: Annotated[
        str,
        typer.Option("--world", "-w", help="Name of the world to operate on.", envvar="DAM_CURRENT_WORLD"),
    ] = DEFAULT_WORLD_NAME,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to the configuration file (e.g., dam.toml).",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    log_level: Annotated[str | None, typer.Option("--log-level", help="Logging level, e.g. INFO.")] = None,
) -> None:
    """Select the world and configuration file, and set up logging."""
    setup_logging(log_level)
    global_state.world_name = world
    global_state.config_path = config_file


def main() -> None:
    """Run the CLI."""
    app()


if __name__ == "__main__":
    main()
