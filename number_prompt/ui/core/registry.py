"""
UI Surface Registry - the host's view of open prompt windows

Surfaces are keyed by (user, owner, view). The owner is any object exposing
``ui_data()``, ``handle_action(action)`` and ``ui_close(user)``.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .events import Action, InvalidActionError
from .targets import User

logger = logging.getLogger("number_prompt.registry")

SurfaceKey = Tuple[User, int, str]


@dataclass
class UISurface:
    """One host-rendered window for a given user and owner"""
    user: User
    owner: Any
    view: str
    data: Dict[str, Any] = field(default_factory=dict)


class UISurfaceRegistry(ABC):
    """Contract a host UI system implements for prompts"""

    @abstractmethod
    def open(self, user: User, owner: Any, view: str) -> UISurface:
        """Attach (or re-attach) a surface and push the owner's ui_data()"""

    @abstractmethod
    def refresh(self, owner: Any) -> List[UISurface]:
        """Push fresh ui_data() to every surface of the owner"""

    @abstractmethod
    def close_all(self, owner: Any) -> int:
        """Detach every surface of the owner, calling owner.ui_close(user) for each"""


class InMemorySurfaceRegistry(UISurfaceRegistry):
    """Registry that keeps surfaces in a dict; used standalone and in tests"""

    def __init__(self):
        self._surfaces: Dict[SurfaceKey, UISurface] = {}

    @staticmethod
    def _key(user: User, owner: Any, view: str) -> SurfaceKey:
        return (user, id(owner), view)

    def open(self, user: User, owner: Any, view: str) -> UISurface:
        """Open (or re-open) a surface and push initial data"""
        key = self._key(user, owner, view)
        surface = self._surfaces.get(key)
        if surface is None:
            surface = UISurface(user=user, owner=owner, view=view)
            self._surfaces[key] = surface
            logger.debug(f"Opened surface {view} for {user.key}")
        surface.data = owner.ui_data()
        return surface

    def refresh(self, owner: Any) -> List[UISurface]:
        surfaces = self.surfaces_for(owner)
        for surface in surfaces:
            surface.data = owner.ui_data()
        return surfaces

    def close_all(self, owner: Any) -> int:
        """Detach every surface of ``owner`` and notify it once per user"""
        keys = [k for k, s in self._surfaces.items() if s.owner is owner]
        closed = []
        for key in keys:
            surface = self._surfaces.pop(key, None)
            if surface is not None:
                closed.append(surface)
        for surface in closed:
            owner.ui_close(surface.user)
        if closed:
            logger.debug(f"Closed {len(closed)} surface(s) for {owner!r}")
        return len(closed)

    def surfaces_for(self, owner: Any) -> List[UISurface]:
        return [s for s in self._surfaces.values() if s.owner is owner]

    def surfaces_for_user(self, user: User) -> List[UISurface]:
        return [s for s in self._surfaces.values() if s.user == user]

    def get(self, user: User, owner: Any, view: str) -> Optional[UISurface]:
        return self._surfaces.get(self._key(user, owner, view))

    def deliver(self, user: User, owner: Any, payload: Mapping[str, Any]) -> bool:
        """
        Route an action payload from a user's surface into its owner.

        Returns:
            True if the owner accepted the action
        """
        surfaces = [s for s in self.surfaces_for(owner) if s.user == user]
        if not surfaces:
            logger.warning(f"Dropped action from {user.key}: no open surface")
            return False

        try:
            action = Action.from_payload(payload)
        except InvalidActionError as e:
            logger.warning(f"Rejected action from {user.key}: {e}")
            return False

        handled = owner.handle_action(action)
        self.refresh(owner)
        return handled


# Global instance
REGISTRY = InMemorySurfaceRegistry()
