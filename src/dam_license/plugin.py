"""Plugin definition for the `dam_license` package."""

from dam_license.core.database import DatabaseManager
from dam_license.core.plugin import Plugin
from dam_license.core.world import World
from dam_license.functions.file_storage_resource import FileStorageResource
from dam_license.scripts import DEFAULT_RUNNERS, ScriptExecutor, ScriptRegistry
from dam_license.services import CreativeCommonsService


class LicensePlugin(Plugin):
    """Provides Creative Commons licensing and the administrative scripts."""

    def build(self, world: "World") -> None:
        """
        Build the plugin by adding its resources to the world.

        Args:
            world: The world to build the plugin in.

        """
        settings = world.settings

        if not world.has_resource(DatabaseManager):
            world.add_resource(DatabaseManager(settings.database_url), DatabaseManager)

        storage = FileStorageResource(settings.asset_storage_path)
        world.add_resource(storage, FileStorageResource)
        world.logger.debug("Added FileStorageResource for World '%s'.", world.name)

        world.add_resource(CreativeCommonsService(settings.creative_commons, storage), CreativeCommonsService)

        registry = ScriptRegistry()
        for runner_class in DEFAULT_RUNNERS:
            registry.register(runner_class)
        world.add_resource(registry, ScriptRegistry)
        world.add_resource(ScriptExecutor(world, registry, settings.scripts.core_pool_size), ScriptExecutor)
        world.logger.debug(
            "Added script executor with %d worker(s) for World '%s'.", settings.scripts.core_pool_size, world.name
        )
