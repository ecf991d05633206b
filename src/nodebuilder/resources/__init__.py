"""
Packaged resources of Node Builder, read through the `resource:` protocol.

- templates/: Dockerfile, systemd unit, install script and webpack config
- bin/: optional place for the WinSW service wrapper (WinSW.NET4.exe)
"""
