"""Local configuration for stackspec."""

from __future__ import annotations

import os


DEFAULT_MAX_TREE_DEPTH = 0
DEFAULT_LOG_LEVEL = "WARNING"

# 0 disables the depth limit; cycles are rejected regardless.
STACKSPEC_MAX_TREE_DEPTH = int(os.getenv("STACKSPEC_MAX_TREE_DEPTH", str(DEFAULT_MAX_TREE_DEPTH)))
STACKSPEC_LOG_LEVEL = os.getenv("STACKSPEC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
