"""Bindery constants shared by the engine and its configuration."""

from __future__ import annotations

# =============================================================================
# Resolution Limits
# =============================================================================

#: Default maximum nesting of calls, expressions and templates per resolution
DEFAULT_MAX_DEPTH: int = 64

#: Upper bound accepted for a configured max_depth. Each level costs up to five
#: interpreter frames, so the ceiling stays well inside the default recursion
#: limit of 1000 and the guard always trips first.
MAX_DEPTH_CEILING: int = 100

# =============================================================================
# Configuration Locations
# =============================================================================

#: Environment variable prefix for BinderyConfig
ENV_PREFIX: str = "BINDERY_"

#: Project-level configuration file name (looked up in the working directory)
PROJECT_CONFIG_FILENAME: str = "bindery.yaml"
