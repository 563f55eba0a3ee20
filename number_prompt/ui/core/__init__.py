"""Core prompt components"""
from .prompt import NumberPrompt, CallbackNumberPrompt
from .state import PromptState, PromptData, PromptResult
from .events import Action, ActionType, InvalidActionError
from .registry import UISurface, UISurfaceRegistry, InMemorySurfaceRegistry, REGISTRY
from .callbacks import Callback
from .targets import User, Session, resolve_user

__all__ = [
    'NumberPrompt',
    'CallbackNumberPrompt',
    'PromptState',
    'PromptData',
    'PromptResult',
    'Action',
    'ActionType',
    'InvalidActionError',
    'UISurface',
    'UISurfaceRegistry',
    'InMemorySurfaceRegistry',
    'REGISTRY',
    'Callback',
    'User',
    'Session',
    'resolve_user',
]
