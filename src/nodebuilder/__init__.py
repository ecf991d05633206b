"""
Node Builder

Packages a Node.js application for deployment: bundles it with webpack,
compiles native executables with nexe and emits a Node package, a Docker
context, a systemd service and a Windows service wrapper.

Main modules:
- config: Manifest (`package.json`) loading and validation
- builder: The build pipeline and optional image build
- emitters: Deployment artifacts, discovered by the registry
- tools: External tool invocation (webpack, nexe)
- io: File system and path handling with multi-protocol support
- utils: Logging, reflection and naming helpers

Quick start example:
```python
import asyncio
from nodebuilder import Builder, Config, create_app_fs

fs = create_app_fs()
config = Config("package.json", fs)
asyncio.run(Builder(config, fs=fs).run())
```
"""

__version__ = "1.0.0"

from .config import Config, BuildConfig
from .abstractions import Emitter
from .registry import initialize_registries
from .builder import Builder, ImageBuilder
from .io import NBPath, FileSystem, AppFileSystem, create_app_fs
from .exceptions import (
    NodeBuilderError,
    ConfigurationError,
    ConfigValidationError,
    BuildError,
    ToolError,
)

__all__ = [
    # Version
    '__version__',
    # Abstractions
    'Emitter',
    # Registry
    'initialize_registries',
    # Config
    'Config',
    'BuildConfig',
    # Builder
    'Builder',
    'ImageBuilder',
    # IO
    'NBPath',
    'FileSystem',
    'AppFileSystem',
    'create_app_fs',
    # Exceptions
    'NodeBuilderError',
    'ConfigurationError',
    'ConfigValidationError',
    'BuildError',
    'ToolError',
]
