"""
Shared utilities: YAML-backed run configuration.
"""

from .config_manager import ConfigManager, TABLE_NAMES

__all__ = ['ConfigManager', 'TABLE_NAMES']
