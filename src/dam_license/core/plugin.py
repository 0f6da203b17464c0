"""Core plugin protocol."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from dam_license.core.world import World


class Plugin(Protocol):
    """A protocol for plugins that can be added to a World."""

    def build(self, world: "World") -> None:
        """
        Build the plugin, adding resources to the world.

        Args:
            world: The world to build the plugin into.

        """
        ...
