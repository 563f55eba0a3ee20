"""
Number Input Screen

Pure render function - builds the payload the host renderer consumes.

NOTE: The timeout bar is offset so it empties slightly before the
prompt actually expires.
"""
from typing import Any, Dict

from ..core.state import PromptData
from ...utils import clamp


def remaining_fraction(data: PromptData, now: float, offset: float = 1.0) -> float:
    """
    Normalized remaining time, 1.0 at creation down to 0.0 at ``timeout - offset``

    Args:
        data: Prompt data with timeout and start_time
        now: Current clock reading (same clock as start_time)
        offset: Display latency absorbed by the bar

    Returns:
        Fraction in [0, 1]
    """
    span = data.timeout - offset
    if span <= 0:
        return 0.0
    elapsed = now - data.start_time
    return clamp((data.timeout - elapsed - offset) / span, 0.0, 1.0)


def render(data: PromptData, now: float, offset: float = 1.0) -> Dict[str, Any]:
    payload = {
        "init_value": data.default,
        "max_value": data.max_value,
        "message": data.message,
        "min_value": data.min_value,
        "title": data.title,
    }
    if data.has_timeout:
        payload["timeout"] = remaining_fraction(data, now, offset)
    return payload
