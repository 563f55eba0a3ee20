import json
import logging
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger("number_prompt.config")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class PromptConfig:
    # Timing
    default_timeout_seconds: float = 0.0
    latency_offset_seconds: float = 1.0

    # Host UI
    view_name: str = "NumberInputModal"

    # Logging
    log_path: str = "logs/number_prompt.log"
    log_level: str = "INFO"
    console_logging: bool = False

    def __post_init__(self):
        if self.default_timeout_seconds < 0:
            raise ValueError(f"default_timeout_seconds must be >= 0, got {self.default_timeout_seconds}")
        if self.latency_offset_seconds < 0:
            raise ValueError(f"latency_offset_seconds must be >= 0, got {self.latency_offset_seconds}")
        if not self.view_name:
            raise ValueError("view_name must not be empty")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level: {self.log_level!r}")

    @property
    def log_file(self) -> Path:
        return Path(self.log_path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PromptConfig":
        """Build a config from a mapping, ignoring keys that are not fields."""
        valid_keys = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in valid_keys})

    @classmethod
    def load(cls, path: Path) -> "PromptConfig":
        """Loads configuration from a JSON file. Creates a default one if it doesn't exist.

        Unreadable files and invalid values (e.g. a negative latency offset)
        fall back to defaults.
        """
        if not path.exists():
            default_config = cls()
            default_config.save(path)
            return default_config

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("config root must be a JSON object")
            return cls.from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Invalid prompt config {path}: {e}. Using defaults.")
            return cls()

    def save(self, path: Path) -> None:
        """Saves the current configuration to a JSON file."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self), f, ensure_ascii=False, indent=4)
        except OSError as e:
            logger.error(f"Error saving config to {path}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Dict-like access."""
        return getattr(self, key, default)
