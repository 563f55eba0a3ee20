"""Modal numeric input prompts for a host game UI"""
from .config import PromptConfig
from .utils import setup_logging, setup_logging_from_config
from .ui import request_number, input_number, input_number_callback
from .ui.core import (
    Action,
    ActionType,
    Callback,
    CallbackNumberPrompt,
    InMemorySurfaceRegistry,
    InvalidActionError,
    NumberPrompt,
    PromptData,
    PromptResult,
    PromptState,
    REGISTRY,
    Session,
    UISurface,
    UISurfaceRegistry,
    User,
    resolve_user,
)

__version__ = "0.1.0"

__all__ = [
    'PromptConfig',
    'setup_logging',
    'setup_logging_from_config',
    'request_number',
    'input_number',
    'input_number_callback',
    'Action',
    'ActionType',
    'Callback',
    'CallbackNumberPrompt',
    'InMemorySurfaceRegistry',
    'InvalidActionError',
    'NumberPrompt',
    'PromptData',
    'PromptResult',
    'PromptState',
    'REGISTRY',
    'Session',
    'UISurface',
    'UISurfaceRegistry',
    'User',
    'resolve_user',
]
