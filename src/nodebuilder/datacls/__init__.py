"""
Node Builder Data Classes

- BuildContext: Shared, immutable state of a build run
"""

from .contexts import BuildContext

__all__ = [
    'BuildContext',
]
