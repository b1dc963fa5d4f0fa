"""
Configuration modules for garden generation.
"""

from .config import Settings, settings
from .flower_catalog import FLOWER_CATALOG, ALWAYS_EMOJIS, ROTATING_EMOJIS

__all__ = ['Settings', 'settings', 'FLOWER_CATALOG', 'ALWAYS_EMOJIS', 'ROTATING_EMOJIS']
