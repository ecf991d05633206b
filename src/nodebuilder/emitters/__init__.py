"""
Node Builder Artifact Emitters

- NodePackageEmitter: `<build>/node`, always produced
- DockerEmitter: Docker context for the `docker` target
- LinuxServiceEmitter: systemd unit and installer for `linux-x64`
- WindowsServiceEmitter: WinSW service wrapper for `windows-x64`
"""

from .node import NodePackageEmitter
from .docker import DockerEmitter
from .linux import LinuxServiceEmitter
from .windows import WindowsServiceEmitter

__all__ = [
    'NodePackageEmitter',
    'DockerEmitter',
    'LinuxServiceEmitter',
    'WindowsServiceEmitter',
]
