"""
Administrative script runners and the thread pool that executes them.

Each runner executes in a pool thread with its own event loop and its own
database engine, so scripts never share connections with the caller.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import ClassVar

from dam_license.core.context import Context
from dam_license.core.exceptions import ScriptExecutionError, ScriptNotFoundError
from dam_license.core.world import World, create_world

logger = logging.getLogger(__name__)


@dataclass
class ScriptResult:
    """The outcome of a finished script run."""

    script_name: str
    message: str = ""
    counts: dict[str, int] = field(default_factory=dict)


class ScriptRunner(ABC):
    """
    Base class for administrative scripts.

    Subclasses set `name` and `description` and implement :meth:`execute`, which
    runs inside a Context with authorization checks switched off.
    """

    name: ClassVar[str]
    description: ClassVar[str] = ""

    def run(self, world: World, args: Sequence[str]) -> ScriptResult:
        """Run the script to completion in a fresh event loop."""
        return asyncio.run(self._run_isolated(world, list(args)))

    async def _run_isolated(self, world: World, args: list[str]) -> ScriptResult:
        # A private world gives the script its own engine, bound to this loop.
        script_world = create_world(world.name, world.settings)
        try:
            async with script_world.context(ignore_authorization=True) as context:
                return await self.execute(context, args)
        finally:
            await script_world.close()

    @abstractmethod
    async def execute(self, context: Context, args: list[str]) -> ScriptResult:
        """Do the work of the script."""
        ...


class ScriptRegistry:
    """Maps script names to runner classes."""

    def __init__(self) -> None:
        self._runners: dict[str, type[ScriptRunner]] = {}

    def register(self, runner_class: type[ScriptRunner]) -> None:
        """Register a runner class under its name, replacing any runner with the same name."""
        if runner_class.name in self._runners:
            logger.warning("Replacing script runner '%s'.", runner_class.name)
        self._runners[runner_class.name] = runner_class

    def get(self, name: str) -> type[ScriptRunner]:
        """
        Return the runner class registered under `name`.

        Raises:
            ScriptNotFoundError: If no runner has that name.

        """
        try:
            return self._runners[name]
        except KeyError:
            raise ScriptNotFoundError(f"No script named '{name}'.") from None

    def names(self) -> list[str]:
        """Return the registered script names, sorted."""
        return sorted(self._runners)


class ScriptExecutor:
    """Runs scripts on a thread pool with a fixed number of workers."""

    def __init__(self, world: World, registry: ScriptRegistry, core_pool_size: int = 5):
        if core_pool_size < 1:
            raise ValueError("core_pool_size must be at least 1.")
        self.world = world
        self.registry = registry
        self.core_pool_size = core_pool_size
        self._pool = ThreadPoolExecutor(max_workers=core_pool_size, thread_name_prefix=f"{world.name}-script")

    def submit(self, name: str, args: Sequence[str] = ()) -> "Future[ScriptResult]":
        """
        Queue a script run.

        Raises:
            ScriptNotFoundError: Immediately, if no runner has that name.

        Returns:
            A future resolving to the ScriptResult, or raising ScriptExecutionError.

        """
        runner_class = self.registry.get(name)
        logger.info("Submitting script '%s' with args %s.", name, list(args))
        return self._pool.submit(self._run, runner_class, list(args))

    def _run(self, runner_class: type[ScriptRunner], args: list[str]) -> ScriptResult:
        try:
            result = runner_class().run(self.world, args)
        except Exception as e:
            logger.exception("Script '%s' failed.", runner_class.name)
            raise ScriptExecutionError(
                f"Script '{runner_class.name}' failed", script_name=runner_class.name, args=args, original_exception=e
            ) from e
        logger.info("Script '%s' finished: %s", runner_class.name, result.message)
        return result

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting scripts, optionally waiting for the running ones."""
        self._pool.shutdown(wait=wait)
