"""
Path utilities for TubeMeta.
"""

from pathlib import Path

# Project root is two levels up from this file (utils/paths.py -> utils -> tubemeta -> root)
_PROJECT_ROOT = Path(__file__).parent.parent.parent


def get_project_root() -> Path:
    """Get the project root directory."""
    return _PROJECT_ROOT
