"""
Node Builder Utils Module

- logger: Logging setup and configuration
- reflection: Class discovery utilities
- util: Name converting and step timing

Usage:
    from nodebuilder.utils import setup_logger, timed
"""

from .logger import setup_logger, parse_module_levels
from .util import to_snake, shortcut_of, timed
from .reflection import discover_classes, extract_emitter_info

__all__ = [
    'setup_logger',
    'parse_module_levels',
    'to_snake',
    'shortcut_of',
    'timed',
    'discover_classes',
    'extract_emitter_info',
]
