"""Configuration management for the task list."""

from pathlib import Path
from dataclasses import dataclass, field
import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _truthy(value: str) -> bool:
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass
class PathConfig:
    """Path configuration."""
    base: Path = field(default_factory=lambda: Path.home() / ".tasklist")

    @property
    def data(self) -> Path:
        return self.base / "data"

    @property
    def tasks(self) -> Path:
        return self.data / "tasks"

    @property
    def history(self) -> Path:
        return self.base / ".tasklist_history"


@dataclass
class DisplayConfig:
    """How timestamps are shown in the task table."""
    date_format: str = "%d/%m/%Y %H:%M"


@dataclass
class Config:
    """Main configuration class."""
    paths: PathConfig = field(default_factory=PathConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    persist: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        home = os.getenv("TASKLIST_HOME")
        return cls(
            paths=PathConfig(base=Path(home).expanduser()) if home else PathConfig(),
            display=DisplayConfig(
                date_format=os.getenv("TASKLIST_DATE_FORMAT", "%d/%m/%Y %H:%M"),
            ),
            persist=_truthy(os.getenv("TASKLIST_PERSIST", "1")),
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
        )


# Global config instance
config = Config.from_env()
