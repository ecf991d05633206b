# nodebuilder/io/path.py

import logging
from typing import override
from pathlib import PurePosixPath, PureWindowsPath, PurePath
from .. import constants
from ..exceptions import InvalidPathError


logger = logging.getLogger(__name__)


def add_protocol_checkers(cls):
    """
    Class Decorator to add is_<protocol> for cls
    """

    def create_checker(protocol_name):
        def checker(self):
            return getattr(self, "protocol", None) == protocol_name

        checker.__name__ = f"is_{protocol_name}"
        return checker

    for protocol in constants.KNOWN_PROTOCOLS:
        setattr(cls, f"is_{protocol}", create_checker(protocol))
    return cls


def split_protocol(raw) -> tuple[str, str]:
    """
    Split 'resource:/templates/x' into ('resource', '/templates/x').
    Anything without a known protocol prefix is a local file path.
    """
    text = str(raw)
    scheme, sep, rest = text.partition(":")
    if sep and scheme in constants.KNOWN_PROTOCOLS:
        if rest.startswith("//"):
            # file:///abs/path
            rest = rest[2:]
        return scheme, rest or "/"
    # help to convert windows path to posix path
    return "file", PurePath(text).as_posix()


@add_protocol_checkers
class NBPath(PurePosixPath):
    """
    A posix path that remembers which filesystem it belongs to.

    Local paths carry the 'file' protocol; packaged data is addressed
    as 'resource:/templates/service'.
    """

    def __init__(self, *args, protocol: str = None):
        if protocol is None and args:
            first = args[0]
            if isinstance(first, NBPath):
                protocol = first.protocol
            else:
                protocol, first = split_protocol(first)
            args = (first, *args[1:])
        super().__init__(*args)
        self.protocol = protocol or "file"

    @override
    def with_segments(self, *pathsegments):
        return type(self)(*pathsegments, protocol=self.protocol)

    @override
    def __rtruediv__(self, other):
        if self.is_absolute():
            raise InvalidPathError(
                "Can not join absolute path with relative path, like path + /path"
            )
        return super().__rtruediv__(other)

    @override
    def __str__(self) -> str:
        path_part = super().__str__()
        if self.protocol == "file":
            return path_part
        return f"{self.protocol}:{path_part}"

    def __path__(self) -> str:
        """The bare path, without the protocol prefix."""
        return super().__str__()

    @override
    def __fspath__(self) -> str:
        if self.protocol != "file":
            raise InvalidPathError(f"'{self}' is not a local path")
        return self.__path__()

    @override
    def __eq__(self, other):
        if isinstance(other, NBPath) and other.protocol != self.protocol:
            return False
        return super().__eq__(other)

    @override
    def __hash__(self):
        return hash((self.protocol, super().__hash__()))

    @override
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self}')"


def is_path_absolute(path: str) -> bool:
    """
    Check if a path is absolute on either posix or windows.
    """
    if PurePosixPath(path).is_absolute():
        return True
    return PureWindowsPath(path).is_absolute()
