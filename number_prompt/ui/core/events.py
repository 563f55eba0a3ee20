"""
Action Events - payloads delivered from a UI surface into a prompt
"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


class InvalidActionError(ValueError):
    """Raised when an action payload cannot be parsed"""


class ActionType(Enum):
    """Action types"""
    SUBMIT = "submit"
    CANCEL = "cancel"


@dataclass
class Action:
    """Action data structure"""
    type: ActionType
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def entry(self) -> Any:
        return self.params.get("entry")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Action":
        """
        Parse an action payload of the form
        ``{"action": "submit"|"cancel", "params": {"entry": ...}}``

        Raises:
            InvalidActionError: payload is not a mapping, names an unknown
                action, or carries non-mapping params
        """
        if not isinstance(payload, Mapping):
            raise InvalidActionError(f"Action payload must be a mapping, got {type(payload).__name__}")

        name = payload.get("action")
        try:
            action_type = ActionType(name)
        except ValueError:
            raise InvalidActionError(f"Unknown action: {name!r}") from None

        params = payload.get("params") or {}
        if not isinstance(params, Mapping):
            raise InvalidActionError("Action params must be a mapping")

        return cls(type=action_type, params=dict(params))
