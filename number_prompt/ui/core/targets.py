"""
Prompt targets - users and the sessions they are reached through
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class User:
    """A user-like entity that can own UI surfaces"""
    key: str
    name: str = ""


@dataclass(frozen=True)
class Session:
    """A client session; may or may not currently have a user attached"""
    session_id: str
    user: Optional[User] = None


def resolve_user(target: Any, caller: Any = None) -> Optional[User]:
    """
    Resolve the user a prompt should be shown to.

    Args:
        target: User, Session or None
        caller: Fallback used when target is None

    Returns:
        User or None if nothing valid could be resolved
    """
    if target is None:
        target = caller
    if isinstance(target, Session):
        target = target.user
    if isinstance(target, User):
        return target
    return None
