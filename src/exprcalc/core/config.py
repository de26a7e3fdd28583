"""
Calculator configuration models.

Parses the [repl] section of an exprcalc TOML file and provides typed
settings for the interactive loop.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from exprcalc.core.errors import ConfigError
from exprcalc.core.expression_lang.parser import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)


class CalcConfig(BaseModel):
    """Settings for the interactive loop."""

    prompt: str = Field(default="", description="Text written before each line is read")
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH, ge=1, description="Maximum parenthesis nesting"
    )
    show_tokens: bool = Field(default=False, description="Echo tokens of each line")
    show_tree: bool = Field(default=False, description="Echo the tree of each line")

    model_config = ConfigDict(frozen=True, extra="forbid")

    def with_overrides(self, **overrides: Any) -> CalcConfig:
        """Return a copy with the given non-None values replaced."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return CalcConfig.model_validate({**self.model_dump(), **changes})


def load_config(path: Path) -> CalcConfig:
    """
    Load configuration from the [repl] table of a TOML file.

    A file without a [repl] table yields the defaults.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or holds
            unknown keys or invalid values.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    section = data.get("repl", {})
    if not isinstance(section, dict):
        raise ConfigError(f"[repl] in {path} must be a table")

    try:
        config = CalcConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid [repl] settings in {path}: {e}") from e

    logger.debug("Loaded config from %s: %s", path, config)
    return config
