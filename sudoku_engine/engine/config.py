"""Engine configuration."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

from ..generator import Difficulty

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Settings for a SudokuEngine session."""
    default_difficulty: Difficulty = Difficulty.MEDIUM
    seed: Optional[int] = None
    # None keeps every move; otherwise the oldest entries are dropped first
    history_limit: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["default_difficulty"] = self.default_difficulty.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EngineConfig:
        """Build a config from plain values, ignoring unknown keys."""
        config = cls()
        if "default_difficulty" in data:
            config.default_difficulty = Difficulty(data["default_difficulty"])
        if data.get("seed") is not None:
            config.seed = int(data["seed"])
        if data.get("history_limit") is not None:
            limit = int(data["history_limit"])
            if limit < 1:
                raise ValueError(f"history_limit must be positive, got {limit}")
            config.history_limit = limit
        return config

    @classmethod
    def from_json(cls, path: str) -> EngineConfig:
        """
        Load a config file, falling back to defaults.

        A missing or unreadable file is not an error; it is logged and the
        default configuration is returned.
        """
        if not os.path.exists(path):
            logger.warning("Config file %s not found, using defaults", path)
            return cls()
        try:
            with open(path, "r") as f:
                return cls.from_dict(json.load(f))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load config from %s: %s", path, e)
            return cls()
