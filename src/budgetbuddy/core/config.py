#!/usr/bin/env python3
"""
Configuration Management for Budget Buddy

Handles environment-based configuration with sensible defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class StoreBackend(Enum):
    """Document store implementations available to the CLI."""

    JSON = "json"
    MEMORY = "memory"


@dataclass
class StoreConfig:
    """Document store configuration."""

    backend: StoreBackend
    store_file: Path


@dataclass
class IdentityConfig:
    """Identity used by the CLI in place of an interactive sign-in."""

    user_id: str = "local-user"
    household_id: str = "local-household"
    display_name: str = "Me"


@dataclass
class ProgressConfig:
    """Progress display thresholds (percent of allocation used)."""

    warning_threshold: float = 70.0
    over_threshold: float = 90.0
    trend_window_days: int = 7
    recent_days: int = 7


@dataclass
class Config:
    """
    Main configuration class for Budget Buddy.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path

    # Component configurations
    store: StoreConfig
    identity: IdentityConfig
    progress: ProgressConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("BUDGETBUDDY_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_budgetbuddy"
            data_dir = Path(os.getenv("BUDGETBUDDY_DATA_DIR", str(default_test_dir))).expanduser().resolve()
        else:
            data_dir = Path(os.getenv("BUDGETBUDDY_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        default_backend = "memory" if env == Environment.TEST else "json"
        store = StoreConfig(
            backend=StoreBackend(os.getenv("BUDGETBUDDY_STORE", default_backend).lower()),
            store_file=data_dir / "store" / "documents.json",
        )

        identity = IdentityConfig(
            user_id=os.getenv("BUDGETBUDDY_USER_ID", "local-user"),
            household_id=os.getenv("BUDGETBUDDY_HOUSEHOLD_ID", "local-household"),
            display_name=os.getenv("BUDGETBUDDY_USER_NAME", "Me"),
        )

        progress = ProgressConfig(
            warning_threshold=float(os.getenv("BUDGETBUDDY_WARNING_THRESHOLD", "70")),
            over_threshold=float(os.getenv("BUDGETBUDDY_OVER_THRESHOLD", "90")),
            trend_window_days=int(os.getenv("BUDGETBUDDY_TREND_WINDOW", "7")),
            recent_days=int(os.getenv("BUDGETBUDDY_RECENT_DAYS", "7")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            store=store,
            identity=identity,
            progress=progress,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if not self.identity.user_id:
            errors.append("BUDGETBUDDY_USER_ID must not be empty")
        if not self.identity.household_id:
            errors.append("BUDGETBUDDY_HOUSEHOLD_ID must not be empty")

        if not 0 < self.progress.warning_threshold <= 100:
            errors.append("Warning threshold must be in (0, 100]")
        if not 0 < self.progress.over_threshold <= 100:
            errors.append("Over threshold must be in (0, 100]")
        if self.progress.warning_threshold > self.progress.over_threshold:
            errors.append("Warning threshold must not exceed over threshold")
        if self.progress.trend_window_days <= 0:
            errors.append("Trend window must be positive")
        if self.progress.recent_days <= 0:
            errors.append("Recent days must be positive")

        if self.environment == Environment.PRODUCTION and self.store.backend == StoreBackend.MEMORY:
            errors.append("The memory store cannot be used in production")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary with paths and enums as strings."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    if isinstance(nested_value, Path):
                        nested_dict[nested_name] = str(nested_value)
                    elif isinstance(nested_value, Enum):
                        nested_dict[nested_name] = nested_value.value
                    else:
                        nested_dict[nested_name] = nested_value
                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()

