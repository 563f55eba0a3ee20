"""
Single-shot callbacks invoked on the running event loop
"""
import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Set, Union

logger = logging.getLogger("number_prompt.callbacks")

# Strong references to callback tasks until they finish
_PENDING_TASKS: Set[asyncio.Task] = set()


class Callback:
    """Callable plus bound arguments, invoked asynchronously"""

    def __init__(self, func: Callable[..., Any], *args: Any):
        self.func = func
        self.args = args

    def __repr__(self) -> str:
        return f"Callback({getattr(self.func, '__qualname__', self.func)!r})"

    def invoke_async(self, *args: Any) -> Union[asyncio.Handle, asyncio.Task]:
        """
        Schedule the callback with bound args followed by ``args``.

        Coroutine functions run as a task, plain callables via call_soon.
        Must be called with a running event loop.
        """
        loop = asyncio.get_running_loop()
        full_args = self.args + args
        if inspect.iscoroutinefunction(self.func):
            task = loop.create_task(self.func(*full_args))
            _PENDING_TASKS.add(task)
            task.add_done_callback(self._task_done)
            return task
        return loop.call_soon(self.func, *full_args)

    def _task_done(self, task: asyncio.Task) -> None:
        _PENDING_TASKS.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"{self!r} failed: {exc!r}", exc_info=exc)


def pending_tasks() -> Set[asyncio.Task]:
    return set(_PENDING_TASKS)


def as_callback(func: Optional[Union[Callback, Callable[..., Any]]]) -> Optional[Callback]:
    if func is None or isinstance(func, Callback):
        return func
    return Callback(func)
