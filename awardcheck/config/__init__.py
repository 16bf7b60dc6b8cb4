"""Configuration loading, validation, and defaults."""

from awardcheck.config.loader import load_config
from awardcheck.config.schema import AwardCheckConfig

__all__ = ["load_config", "AwardCheckConfig"]
