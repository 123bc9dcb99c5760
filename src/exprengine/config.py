"""
Runtime configuration for the expression engine.

Both the parser and the evaluator recurse once per nesting level, so two
limits keep pathological input from exhausting the interpreter stack:

    max_depth       nested parentheses and unary minus seen by the parser
    max_tree_depth  depth of the tree walked by the evaluator

Environment variables override the defaults:

    EXPRENGINE_MAX_DEPTH=32
    EXPRENGINE_MAX_TREE_DEPTH=128

Usage:
    from exprengine.config import EngineSettings, get_settings

    settings = get_settings()  # from the environment, cached
    strict = EngineSettings(max_depth=16)
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64
DEFAULT_MAX_TREE_DEPTH = 256

# Ceilings keep worst-case recursion (up to 9 parser frames per nesting level,
# 2 evaluator frames per tree level) well under the default recursion limit of 1000
MAX_DEPTH_CEILING = 80
MAX_TREE_DEPTH_CEILING = 300

MAX_DEPTH_ENV_VAR = "EXPRENGINE_MAX_DEPTH"
MAX_TREE_DEPTH_ENV_VAR = "EXPRENGINE_MAX_TREE_DEPTH"


class EngineSettings(BaseModel):
    """Limits applied to a single parse-and-evaluate request."""

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=MAX_DEPTH_CEILING,
        description="Maximum nesting of parentheses and unary minus",
    )
    max_tree_depth: int = Field(
        default=DEFAULT_MAX_TREE_DEPTH,
        ge=1,
        le=MAX_TREE_DEPTH_CEILING,
        description="Maximum depth of an evaluated expression tree",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls) -> EngineSettings:
        """Build settings from EXPRENGINE_MAX_DEPTH and EXPRENGINE_MAX_TREE_DEPTH.

        Unset variables keep their defaults. Values that are not integers or
        fall outside 1..ceiling are logged and replaced by the default.
        """
        return cls(
            max_depth=_read_limit(MAX_DEPTH_ENV_VAR, DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING),
            max_tree_depth=_read_limit(
                MAX_TREE_DEPTH_ENV_VAR, DEFAULT_MAX_TREE_DEPTH, MAX_TREE_DEPTH_CEILING
            ),
        )


def _read_limit(var: str, default: int, ceiling: int) -> int:
    raw = os.environ.get(var, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if not 1 <= value <= ceiling:
        logger.warning(
            "Invalid %s value '%s' (must be 1..%d). Using default of %d.",
            var,
            raw,
            ceiling,
            default,
        )
        return default
    return value


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Process-wide default settings, read from the environment once."""
    return EngineSettings.from_env()
