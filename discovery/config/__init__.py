"""Configuration module.

Environment-based settings via get_settings().
"""

from discovery.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
