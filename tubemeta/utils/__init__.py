"""Utility modules for TubeMeta"""

from .logging_setup import install_exception_hooks, setup_logging
from .paths import get_project_root

__all__ = [
    "get_project_root",
    "install_exception_hooks",
    "setup_logging",
]
