import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import PromptConfig

LOGGER_NAME = "number_prompt"


def setup_logging(
    log_path: Optional[Path] = None,
    level: str = "INFO",
    console: bool = False,
) -> logging.Logger:
    """Configures and returns the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

    if log_path is not None:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Failed to setup log file handler: {e}")

    if console:
        rich_handler = RichHandler(
            console=Console(stderr=True, emoji=False),
            show_path=False,
            rich_tracebacks=True,
        )
        rich_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(rich_handler)

    return logger


def setup_logging_from_config(config: PromptConfig) -> logging.Logger:
    """Configure the package logger from a PromptConfig's logging fields."""
    return setup_logging(config.log_file, config.log_level, config.console_logging)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
