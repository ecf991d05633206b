"""
Node Builder IO Module

- NBPath: Posix path class that remembers its protocol (file, resource, memory)
- FileSystem: Abstract file system interface
- AppFileSystem: Multi-protocol file system dispatcher
- DiskFileSystem: Local disk file system
- MemoryFileSystem: In-memory file system
- ResourceFileSystem: Read-only access to package resources

Usage:
    from nodebuilder.io import NBPath, create_app_fs

    fs = create_app_fs()
    template = fs.read_text(NBPath("resource:/templates/service"))
"""

from .path import NBPath, is_path_absolute, split_protocol
from .fs import (
    FileSystem,
    AppFileSystem,
    FsspecFileSystem,
    DiskFileSystem,
    MemoryFileSystem,
    ResourceFileSystem,
    create_app_fs,
)

__all__ = [
    # Path
    'NBPath',
    'is_path_absolute',
    'split_protocol',
    # FileSystem
    'FileSystem',
    'AppFileSystem',
    'FsspecFileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'ResourceFileSystem',
    'create_app_fs',
]
