"""Application configuration (YAML) and helpers.

`ConfigManager` reads the default files from this folder and merges them
with user overrides.
"""

from .manager import ConfigManager

__all__ = [
    "ConfigManager",
]
