"""
Node Builder Build Context

This module contains the BuildContext data class, which holds all state
shared by the emitters of a build run.
"""

from pydantic import BaseModel, ConfigDict, Field

from ..config import Config
from ..io import NBPath, FileSystem, AppFileSystem


class BuildContext(BaseModel):
    """
    Holds the shared, immutable state and configuration for a build run.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fs: FileSystem = Field(default_factory=AppFileSystem)

    config: Config
    bundle: NBPath

    def target_dir(self, name: str) -> NBPath:
        return self.config.dirs.build / name
