from abc import ABC, abstractmethod
from functools import wraps
from typing import Dict
from typing import override
from importlib import resources
import logging
import os
import shutil

import fsspec

from .path import NBPath
from ..exceptions import (
    ProtocolError,
    UnsupportedFeatureError,
    ReadOnlyError,
    NBPathExistsError,
    NBPathNotFoundError,
    NBNotAFileError,
    NBNotADirectoryError,
)

logger = logging.getLogger(__name__)

_OS_ERRORS = (
    (FileExistsError, NBPathExistsError),
    (FileNotFoundError, NBPathNotFoundError),
    (IsADirectoryError, NBNotAFileError),
    (NotADirectoryError, NBNotADirectoryError),
)


def wrap_io_error(func):
    """Re-raise OS errors from a file system call as Node Builder IO errors."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OSError as e:
            for os_error, nb_error in _OS_ERRORS:
                if isinstance(e, os_error):
                    raise nb_error(e) from e
            raise

    return wrapper


class FileSystem(ABC):
    """The file operations the build pipeline performs."""

    @abstractmethod
    def read_text(self, path: NBPath) -> str: ...

    @abstractmethod
    def read_bytes(self, path: NBPath) -> bytes: ...

    @abstractmethod
    def write_text(self, path: NBPath, content: str):
        """Write a file, creating its parent directories."""

    @abstractmethod
    def write_bytes(self, path: NBPath, content: bytes):
        """Write a file, creating its parent directories."""

    @abstractmethod
    def copy(self, src: NBPath, dst: NBPath): ...

    @abstractmethod
    def copytree(self, src: NBPath, dst: NBPath): ...

    @abstractmethod
    def exists(self, path: NBPath) -> bool: ...

    @abstractmethod
    def is_dir(self, path: NBPath) -> bool: ...

    @abstractmethod
    def mkdir(self, path: NBPath, parents: bool = False, exist_ok: bool = False): ...

    @abstractmethod
    def rmtree(self, path: NBPath):
        """Remove a directory tree; a missing path is not an error."""

    def chmod(self, path: NBPath, mode: int):
        """Only meaningful on disk; other file systems ignore it."""
        logger.debug(f"chmod is not supported for '{path.protocol}' paths, ignoring.")


class AppFileSystem(FileSystem):
    """Routes each call to the file system registered for the path's protocol."""

    def __init__(self):
        self._handlers: Dict[str, FileSystem] = {
            "file": DiskFileSystem(),
            "resource": ResourceFileSystem(),
            "memory": MemoryFileSystem(),
        }

    def handler_for(self, path: NBPath) -> FileSystem:
        try:
            return self._handlers[path.protocol]
        except KeyError:
            raise ProtocolError(f"No file system registered for protocol '{path.protocol}'") from None

    @override
    @wrap_io_error
    def read_text(self, path: NBPath) -> str:
        return self.handler_for(path).read_text(path)

    @override
    @wrap_io_error
    def read_bytes(self, path: NBPath) -> bytes:
        return self.handler_for(path).read_bytes(path)

    @override
    @wrap_io_error
    def write_text(self, path: NBPath, content: str):
        self.handler_for(path).write_text(path, content)

    @override
    @wrap_io_error
    def write_bytes(self, path: NBPath, content: bytes):
        self.handler_for(path).write_bytes(path, content)

    @override
    def exists(self, path: NBPath) -> bool:
        return self.handler_for(path).exists(path)

    @override
    def is_dir(self, path: NBPath) -> bool:
        return self.handler_for(path).is_dir(path)

    @override
    @wrap_io_error
    def mkdir(self, path: NBPath, parents: bool = False, exist_ok: bool = False):
        self.handler_for(path).mkdir(path, parents=parents, exist_ok=exist_ok)

    @override
    @wrap_io_error
    def rmtree(self, path: NBPath):
        self.handler_for(path).rmtree(path)

    @override
    @wrap_io_error
    def chmod(self, path: NBPath, mode: int):
        self.handler_for(path).chmod(path, mode)

    @override
    @wrap_io_error
    def copy(self, src: NBPath, dst: NBPath):
        source, target = self.handler_for(src), self.handler_for(dst)
        if source is target:
            source.copy(src, dst)
        else:
            # the WinSW wrapper goes from resource: to disk this way
            logger.debug(f"Copying '{src}' to '{dst}' across file systems")
            target.write_bytes(dst, source.read_bytes(src))

    @override
    @wrap_io_error
    def copytree(self, src: NBPath, dst: NBPath):
        source, target = self.handler_for(src), self.handler_for(dst)
        if source is not target:
            raise UnsupportedFeatureError(
                f"Cannot copy directory '{src}' from '{src.protocol}' to '{dst.protocol}'"
            )
        source.copytree(src, dst)


class FsspecFileSystem(FileSystem):
    """A FileSystem over one fsspec protocol."""

    def __init__(self, protocol: str):
        self.protocol = protocol
        self.fs = fsspec.filesystem(protocol)

    @staticmethod
    def _str(path: NBPath) -> str:
        return path.__path__()

    def _open_for_write(self, path: NBPath, mode: str, **kwargs):
        self.fs.mkdirs(self._str(path.parent), exist_ok=True)
        return self.fs.open(self._str(path), mode, **kwargs)

    @override
    def read_text(self, path: NBPath) -> str:
        logger.debug(f"[{self.protocol}] Reading {path}")
        with self.fs.open(self._str(path), "r", encoding="utf-8") as f:
            return f.read()

    @override
    def read_bytes(self, path: NBPath) -> bytes:
        logger.debug(f"[{self.protocol}] Reading {path}")
        return self.fs.cat_file(self._str(path))

    @override
    def write_text(self, path: NBPath, content: str):
        logger.debug(f"[{self.protocol}] Writing {path}")
        with self._open_for_write(path, "w", encoding="utf-8") as f:
            f.write(content)

    @override
    def write_bytes(self, path: NBPath, content: bytes):
        logger.debug(f"[{self.protocol}] Writing {path}")
        with self._open_for_write(path, "wb") as f:
            f.write(content)

    @override
    def copy(self, src: NBPath, dst: NBPath):
        self.fs.mkdirs(self._str(dst.parent), exist_ok=True)
        self.fs.copy(self._str(src), self._str(dst))

    @override
    def copytree(self, src: NBPath, dst: NBPath):
        self.fs.copy(self._str(src), self._str(dst), recursive=True)

    @override
    def exists(self, path: NBPath) -> bool:
        return self.fs.exists(self._str(path))

    @override
    def is_dir(self, path: NBPath) -> bool:
        return self.fs.isdir(self._str(path))

    @override
    def mkdir(self, path: NBPath, parents: bool = False, exist_ok: bool = False):
        self.fs.mkdirs(self._str(path), exist_ok=exist_ok)

    @override
    def rmtree(self, path: NBPath):
        if self.exists(path):
            self.fs.rm(self._str(path), recursive=True)


class DiskFileSystem(FsspecFileSystem):

    def __init__(self):
        super().__init__("file")

    @override
    def copytree(self, src: NBPath, dst: NBPath):
        shutil.copytree(self._str(src), self._str(dst), dirs_exist_ok=True)

    @override
    def chmod(self, path: NBPath, mode: int):
        logger.debug(f"[file] chmod {oct(mode)} {path}")
        os.chmod(self._str(path), mode)


class MemoryFileSystem(FsspecFileSystem):

    def __init__(self):
        super().__init__("memory")


class ResourceFileSystem(FileSystem):
    """Read-only view of the files packaged in `nodebuilder.resources`."""

    package = "nodebuilder.resources"

    def _locate(self, path: NBPath) -> resources.abc.Traversable:
        node = resources.files(self.package)
        for part in path.parts[1:]:
            node = node.joinpath(part)
        return node

    @override
    def read_text(self, path: NBPath) -> str:
        return self._locate(path).read_text(encoding="utf-8")

    @override
    def read_bytes(self, path: NBPath) -> bytes:
        return self._locate(path).read_bytes()

    @override
    def exists(self, path: NBPath) -> bool:
        node = self._locate(path)
        return node.is_file() or node.is_dir()

    @override
    def is_dir(self, path: NBPath) -> bool:
        return self._locate(path).is_dir()

    def _refuse(self, path: NBPath, *args, **kwargs):
        raise ReadOnlyError(f"Packaged resources are read-only: {path}")

    write_text = write_bytes = mkdir = rmtree = chmod = _refuse

    @override
    def copy(self, src: NBPath, dst: NBPath):
        self._refuse(dst)

    @override
    def copytree(self, src: NBPath, dst: NBPath):
        self._refuse(dst)


def create_app_fs() -> AppFileSystem:
    return AppFileSystem()
