"""
Number Prompt UI Package

Entry points for showing a numeric input prompt to a user, either waiting
for the answer or handing it to a callback.
"""
import logging
import time
from typing import Any, Callable, Optional, Union

from ..config import PromptConfig
from .core import (
    REGISTRY,
    Callback,
    CallbackNumberPrompt,
    NumberPrompt,
    PromptResult,
    PromptState,
    UISurfaceRegistry,
    resolve_user,
)
from .core.callbacks import as_callback

logger = logging.getLogger("number_prompt.ui")


async def request_number(
    target: Any,
    message: str,
    title: str,
    default: Any = 0,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    timeout: Optional[float] = None,
    *,
    caller: Any = None,
    registry: Optional[UISurfaceRegistry] = None,
    config: Optional[PromptConfig] = None,
    clock: Callable[[], float] = time.monotonic,
) -> PromptResult:
    """
    Show a number prompt and wait for it to resolve

    Args:
        target: User or Session to ask; None falls back to ``caller``
        message: Prompt body
        title: Window title
        default: Pre-filled value
        min_value: Minimum entry length (optional)
        max_value: Maximum entry length (optional)
        timeout: Seconds until the prompt destroys itself (0 = never,
            None = config default)
        caller: Ambient user used when target is None
        registry: Host UI registry (defaults to the global one)
        config: PromptConfig
        clock: Monotonic clock used for the timeout bar

    Returns:
        PromptResult with the entry (None unless submitted) and final state.
        The state is NO_TARGET when no user could be resolved.
    """
    user = resolve_user(target, caller)
    if user is None:
        logger.warning(f"Number prompt {title!r} dropped: no user for target {target!r}")
        return PromptResult()

    config = config if config is not None else PromptConfig()
    if timeout is None:
        timeout = config.default_timeout_seconds

    prompt = NumberPrompt(
        user, message, title, default, min_value, max_value, timeout,
        registry=registry if registry is not None else REGISTRY,
        config=config,
        clock=clock,
    )
    try:
        prompt.ui_interact()
        await prompt.wait()
        return PromptResult(entry=prompt.entry, state=prompt.state)
    finally:
        prompt.destroy()


async def input_number(
    target: Any,
    message: str,
    title: str,
    default: Any = 0,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> Any:
    """Show a number prompt; returns the entry or None if nothing was submitted"""
    result = await request_number(
        target, message, title, default, min_value, max_value, timeout, **kwargs
    )
    return result.entry


def input_number_callback(
    target: Any,
    message: str,
    title: str,
    default: Any = 0,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    callback: Optional[Union[Callback, Callable[..., Any]]] = None,
    timeout: Optional[float] = None,
    *,
    caller: Any = None,
    registry: Optional[UISurfaceRegistry] = None,
    config: Optional[PromptConfig] = None,
    clock: Callable[[], float] = time.monotonic,
) -> Optional[CallbackNumberPrompt]:
    """
    Show a number prompt without waiting; ``callback`` receives the entry

    Must be called while an event loop is running.

    Returns:
        The attached prompt, or None if no user could be resolved
    """
    user = resolve_user(target, caller)
    if user is None:
        logger.warning(f"Number prompt {title!r} dropped: no user for target {target!r}")
        return None

    config = config if config is not None else PromptConfig()
    if timeout is None:
        timeout = config.default_timeout_seconds

    prompt = CallbackNumberPrompt(
        user, message, title, default, min_value, max_value, timeout,
        callback=as_callback(callback),
        registry=registry if registry is not None else REGISTRY,
        config=config,
        clock=clock,
    )
    try:
        prompt.ui_interact()
    except Exception:
        prompt.destroy()
        raise
    return prompt


__all__ = [
    'request_number',
    'input_number',
    'input_number_callback',
    'NumberPrompt',
    'CallbackNumberPrompt',
    'PromptResult',
    'PromptState',
]
