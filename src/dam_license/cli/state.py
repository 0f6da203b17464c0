"""Manages the shared state of the CLI application."""

import logging
from pathlib import Path

from dam_license.core.config import load_world_settings
from dam_license.core.world import World, create_world
from dam_license.plugin import LicensePlugin

logger = logging.getLogger(__name__)

DEFAULT_WORLD_NAME = "default"


class GlobalState:
    """Holds the options given to the top-level command."""

    def __init__(self) -> None:
        self.world_name: str = DEFAULT_WORLD_NAME
        self.config_path: Path | None = None

    def create_world(self) -> World:
        """
        Build a fresh World for the selected world name from the configuration file.

        Each command gets its own World, as database engines are bound to the event
        loop of the command that uses them. Callers close it when done.

        Raises:
            FileNotFoundError: If no configuration file is found.
            ValueError: If the world is not defined in it.

        """
        settings = load_world_settings(self.world_name, self.config_path)
        logger.debug("Instantiating world '%s'.", self.world_name)
        return create_world(self.world_name, settings, plugins=[LicensePlugin()])


global_state = GlobalState()
