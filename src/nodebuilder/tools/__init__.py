"""
Node Builder External Tools

- ExternalTool: Subprocess wrapper with environment overrides
- WebpackBundler: Bundles the application into one JavaScript file
- NexeCompiler: Compiles the bundle into native executables
"""

from .base import ExternalTool
from .webpack import WebpackBundler
from .nexe import NexeCompiler

__all__ = [
    'ExternalTool',
    'WebpackBundler',
    'NexeCompiler',
]
