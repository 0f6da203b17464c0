"""Core World class for repository worlds."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dam_license.core.config import WorldSettings
from dam_license.core.context import Context
from dam_license.core.database import DatabaseManager
from dam_license.core.plugin import Plugin
from dam_license.core.resources import ResourceManager
from dam_license.models.auth import EPersonComponent
from dam_license.models.content import BitstreamComponent

logger = logging.getLogger(__name__)

T = TypeVar("T")


class World:
    """
    An isolated repository instance.

    Each World encapsulates its own settings, database connection and resources.
    Plugins populate the resources; operations run inside a :class:`Context`
    obtained from :meth:`context`.
    """

    def __init__(self, name: str, settings: WorldSettings):
        """Initialize the World."""
        if not isinstance(settings, WorldSettings):
            raise TypeError(f"settings must be an instance of WorldSettings, got {type(settings)}")

        self.name = name
        self.settings = settings
        self.logger = logging.getLogger(f"{__name__}.{self.name}")
        self.resource_manager = ResourceManager()
        self._registered_plugin_types: set[type[Any]] = set()
        self.add_resource(self)
        self.add_resource(settings, WorldSettings)
        self.logger.info("World '%s' instance created.", self.name)

    def add_resource(self, instance: object, resource_type: type[Any] | None = None) -> None:
        """Add a resource to the world's resource manager."""
        self.resource_manager.add_resource(instance, resource_type)
        self.logger.debug("Added resource type %s to World '%s'.", resource_type or type(instance), self.name)

    def get_resource(self, resource_type: type[T]) -> T:
        """Get a resource from the world's resource manager."""
        return self.resource_manager.get_resource(resource_type)

    def has_resource(self, resource_type: type[Any]) -> bool:
        """Check if a resource is available in the world's resource manager."""
        return self.resource_manager.has_resource(resource_type)

    def add_plugin(self, plugin: Plugin) -> "World":
        """Add a plugin to the world, building it once per plugin type."""
        plugin_type = type(plugin)
        if plugin_type not in self._registered_plugin_types:
            self.logger.info("Adding plugin %s to world '%s'.", plugin_type.__name__, self.name)
            plugin.build(self)
            self._registered_plugin_types.add(plugin_type)
        else:
            self.logger.debug(
                "Plugin %s is already registered in world '%s'. Skipping.", plugin_type.__name__, self.name
            )
        return self

    async def create_db_and_tables(self) -> None:
        """Create the world's database tables."""
        await self.get_resource(DatabaseManager).create_db_and_tables()

    @asynccontextmanager
    async def context(
        self, user_email: str | None = None, ignore_authorization: bool = False
    ) -> AsyncGenerator[Context, None]:
        """
        Open a Context bound to a new transaction.

        The transaction is committed when the block exits normally and rolled back
        when it raises. Stored content the block orphaned is deleted after the
        commit; on rollback it is left in place.

        Args:
            user_email: Email of the EPerson to act as; anonymous when None.
            ignore_authorization: Start with authorization checks switched off.

        Raises:
            LookupError: If `user_email` does not belong to a registered EPerson.

        """
        session = self.get_resource(DatabaseManager).get_db_session()
        try:
            async with session.begin():
                user = None
                if user_email is not None:
                    result = await session.execute(select(EPersonComponent).where(EPersonComponent.email == user_email))
                    user = result.scalar_one_or_none()
                    if user is None:
                        raise LookupError(f"EPerson '{user_email}' not found.")
                context = Context(session, current_user=user)
                if ignore_authorization:
                    with context.authorization_ignored():
                        yield context
                else:
                    yield context
            await self._delete_orphaned_content(session, context)
        finally:
            await session.close()

    async def _delete_orphaned_content(self, session: AsyncSession, context: Context) -> None:
        pending = dict(context.pending_content_deletions)
        context.pending_content_deletions.clear()
        if not pending:
            return

        async with session.begin():
            stmt = select(BitstreamComponent.checksum).where(BitstreamComponent.checksum.in_(list(pending)))
            still_referenced = set((await session.execute(stmt)).scalars().all())

        for content_hash, storage in pending.items():
            if content_hash in still_referenced:
                continue
            try:
                storage.delete(content_hash)
            except OSError:
                # The commit stands; the content is merely left behind.
                self.logger.warning("Could not delete orphaned content %s.", content_hash, exc_info=True)

    async def close(self) -> None:
        """Wait for running scripts, then release the world's database connections."""
        from dam_license.scripts.runner import ScriptExecutor  # noqa: PLC0415

        if self.has_resource(ScriptExecutor):
            self.get_resource(ScriptExecutor).shutdown(wait=True)
        if self.has_resource(DatabaseManager):
            await self.get_resource(DatabaseManager).dispose()

    def __repr__(self) -> str:
        """Return a string representation of the World."""
        return f"<World name='{self.name}'>"


def create_world(name: str, settings: WorldSettings, plugins: list[Plugin] | None = None) -> World:
    """
    Create a World and build its plugins.

    The core resources (database manager) are always added first.
    """
    world = World(name, settings)
    world.add_resource(DatabaseManager(settings.database_url), DatabaseManager)
    for plugin in plugins or []:
        world.add_plugin(plugin)
    return world
