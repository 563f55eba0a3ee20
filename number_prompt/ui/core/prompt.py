"""
Number Prompt - modal numeric input state machine

This is the heart of the package. A prompt:
- registers one surface per user with the host registry
- validates submitted entries against its bounds
- tears itself down on submit, cancel, close or timeout
- wakes any coroutine waiting on it
"""
import asyncio
import logging
import time
from typing import Any, Callable, Mapping, Optional

from ...config import PromptConfig
from ..screens import number_input
from .callbacks import Callback
from .events import Action, ActionType, InvalidActionError
from .registry import REGISTRY, UISurface, UISurfaceRegistry
from .state import PromptData, PromptState
from .targets import User

logger = logging.getLogger("number_prompt.prompt")


class NumberPrompt:
    """
    One outstanding numeric input request.

    A positive timeout schedules destroy() on the running event loop, so
    prompts with a timeout must be created from within a coroutine.
    """

    def __init__(
        self,
        user: User,
        message: str,
        title: str,
        default: Any = 0,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
        timeout: float = 0.0,
        *,
        registry: Optional[UISurfaceRegistry] = None,
        config: Optional[PromptConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.user = user
        self.registry = registry if registry is not None else REGISTRY
        self.config = config if config is not None else PromptConfig()
        self.clock = clock
        self.data = PromptData(
            message=message,
            title=title,
            default=default,
            min_value=min_value,
            max_value=max_value,
            timeout=timeout or 0.0,
            start_time=clock(),
        )
        self.state = PromptState.OPEN
        self._done = asyncio.Event()
        self._destroyed = False
        self._timer: Optional[asyncio.TimerHandle] = None

        if self.data.has_timeout:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self.data.timeout, self._on_timeout)

        logger.debug(f"Created prompt {title!r} for {user.key} (timeout={self.data.timeout})")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.data.title!r} {self.state.value}>"

    @property
    def entry(self) -> Any:
        return self.data.entry

    @property
    def closed(self) -> bool:
        return self.data.closed

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def is_open(self) -> bool:
        return self.state is PromptState.OPEN

    # Host hooks

    def ui_interact(self, user: Optional[User] = None) -> UISurface:
        """Attach the prompt to a user's UI"""
        return self.registry.open(user or self.user, self, self.config.view_name)

    def ui_data(self) -> dict:
        return number_input.render(self.data, self.clock(), self.config.latency_offset_seconds)

    def ui_act(self, action: str, params: Optional[Mapping[str, Any]] = None) -> bool:
        try:
            parsed = Action.from_payload({"action": action, "params": params or {}})
        except InvalidActionError as e:
            logger.debug(f"Ignored action on {self!r}: {e}")
            return False
        return self.handle_action(parsed)

    def ui_close(self, user: User) -> None:
        """Called by the host when a user's window goes away"""
        self.data.closed = True
        if self.state is PromptState.OPEN:
            self.state = PromptState.CANCELLED
        self._done.set()

    # State transitions

    def handle_action(self, action: Action) -> bool:
        if not self.is_open:
            return False

        if action.type is ActionType.SUBMIT:
            entry = action.entry
            if entry is None or not self.data.accepts(entry):
                logger.debug(f"Rejected entry {entry!r} for {self!r}")
                return False
            self.state = PromptState.RESOLVED
            try:
                self.set_entry(entry)
            finally:
                self._done.set()
                self.registry.close_all(self)
            logger.info(f"Prompt {self.data.title!r} resolved for {self.user.key}")
            return True

        if action.type is ActionType.CANCEL:
            self.state = PromptState.CANCELLED
            try:
                self.set_entry(None)
            finally:
                self._done.set()
                self.registry.close_all(self)
            logger.info(f"Prompt {self.data.title!r} cancelled by {self.user.key}")
            return True

        return False

    def set_entry(self, entry: Any) -> None:
        self.data.entry = entry

    def _on_timeout(self) -> None:
        self._timer = None
        if self.state is PromptState.OPEN:
            self.state = PromptState.TIMED_OUT
            logger.info(f"Prompt {self.data.title!r} timed out for {self.user.key}")
        self.destroy()

    def destroy(self) -> None:
        """Tear down the prompt. Safe to call more than once."""
        if self._destroyed:
            return
        self._destroyed = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self.registry.close_all(self)
        if self.state is PromptState.OPEN:
            self.state = PromptState.DESTROYED
        self._done.set()
        logger.debug(f"Destroyed {self!r}")

    async def wait(self) -> None:
        """Suspend until the prompt has an entry, is closed or is destroyed"""
        if self._done.is_set():
            return
        await self._done.wait()


class CallbackNumberPrompt(NumberPrompt):
    """
    Prompt that hands its entry to a callback instead of a waiter.

    The callback is scheduled on the running event loop, so these prompts
    must always be created from within a coroutine.
    """

    def __init__(self, user: User, message: str, title: str, *args: Any,
                 callback: Optional[Callback] = None, **kwargs: Any):
        asyncio.get_running_loop()
        super().__init__(user, message, title, *args, **kwargs)
        self.callback = callback
        self.invocations = 0

    def set_entry(self, entry: Any) -> None:
        super().set_entry(entry)
        if entry is not None and self.callback is not None and self.invocations == 0:
            self.invocations += 1
            self.callback.invoke_async(entry)

    def ui_close(self, user: User) -> None:
        super().ui_close(user)
        self.destroy()

    def destroy(self) -> None:
        super().destroy()
        self.callback = None

    async def wait(self) -> None:
        # Resolution is delivered through the callback
        return
