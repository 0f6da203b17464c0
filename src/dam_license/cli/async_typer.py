"""A Typer subclass whose commands may be coroutines."""

import asyncio
import inspect
from collections.abc import Callable
from functools import partial, wraps
from typing import Any

from typer import Typer


class AsyncTyper(Typer):
    """Runs coroutine commands to completion with :func:`asyncio.run`."""

    @staticmethod
    def maybe_run_async(decorator: Callable[..., Any], func: Callable[..., Any]) -> Any:
        """Register `func` with `decorator`, wrapping it in an event loop when it is a coroutine function."""
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            def runner(*args: Any, **kwargs: Any) -> Any:
                return asyncio.run(func(*args, **kwargs))

            decorator(runner)
        else:
            decorator(func)
        return func

    def command(self, *args: Any, **kwargs: Any) -> Callable[..., Any]:
        decorator = super().command(*args, **kwargs)
        return partial(self.maybe_run_async, decorator)
