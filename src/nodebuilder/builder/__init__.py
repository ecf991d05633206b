"""
Node Builder Build Pipeline

- Builder: Runs setup, bundling, binaries, emitters and cleanup
- ImageBuilder: Optional local image build from the Docker context
"""

from .build import Builder
from .image import ImageBuilder

__all__ = [
    'Builder',
    'ImageBuilder',
]
