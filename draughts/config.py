"""
Central configuration for rules and search tunables.
Pydantic models give type-safe configuration management.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

ConfigDict = Dict[str, Any]


class RulesSettings(BaseModel):
    """Game rules and variant settings."""

    board_size: int = Field(default=8, ge=4, description="Number of rows (and columns) of the board")
    draw_threshold: int = Field(default=25, ge=1, description="Consecutive king-only moves without capture before a draw")
    validate_moves: bool = Field(default=True, description="Reject moves that are not legal in the position")

    @field_validator('board_size', mode='after')
    @classmethod
    def validate_board_size(cls, v):
        if v % 2 != 0:
            raise ValueError("board_size must be even")
        return v


class SearchSettings(BaseModel):
    """Monte-Carlo tree search settings."""

    time_limit_ms: int = Field(default=1000, ge=1, description="Search budget per move in milliseconds")
    rollouts_per_step: int = Field(default=1, ge=1, le=1000, description="Random playouts run from each expanded node")
    exploration: float = Field(default=2.0, gt=0, description="Constant c in sqrt(c * ln(N) / n)")
    seed: Optional[int] = Field(default=None, description="Seed for the search random generator")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class DraughtsConfig(BaseModel):
    """Main configuration model."""

    rules: RulesSettings = Field(default_factory=RulesSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'DraughtsConfig':
        """Create configuration from environment variables."""
        seed = os.getenv('DRAUGHTS_SEED')
        return cls(
            rules=RulesSettings(
                board_size=int(os.getenv('DRAUGHTS_BOARD_SIZE', '8')),
                draw_threshold=int(os.getenv('DRAUGHTS_DRAW_THRESHOLD', '25')),
                validate_moves=os.getenv('DRAUGHTS_VALIDATE_MOVES', 'true').lower() == 'true',
            ),
            search=SearchSettings(
                time_limit_ms=int(os.getenv('DRAUGHTS_TIME_LIMIT_MS', '1000')),
                rollouts_per_step=int(os.getenv('DRAUGHTS_ROLLOUTS', '1')),
                exploration=float(os.getenv('DRAUGHTS_EXPLORATION', '2.0')),
                seed=int(seed) if seed else None,
            ),
            logging=LoggingSettings(
                log_level=os.getenv('DRAUGHTS_LOG_LEVEL', 'INFO'),
            ),
        )

    def to_dict(self) -> ConfigDict:
        return {
            'rules': self.rules.model_dump(),
            'search': self.search.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath
        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'DraughtsConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls(
            rules=RulesSettings(**data.get('rules', {})),
            search=SearchSettings(**data.get('search', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: ConfigDict) -> None:
        """Update configuration from dictionary, re-validating each section."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = {**section_model.model_dump(), **settings}
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[DraughtsConfig] = None


def get_config() -> DraughtsConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = DraughtsConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> DraughtsConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = DraughtsConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_rules_settings() -> RulesSettings:
    return get_config().rules


def get_search_settings() -> SearchSettings:
    return get_config().search


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


def setup_logging() -> None:
    """Configure root logging once, controlled by env var DRAUGHTS_LOG_LEVEL."""
    if getattr(setup_logging, "_configured", False):
        return
    level: int = getattr(logging, get_logging_settings().log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
