"""
Node Builder Abstract Base Classes

Dependencies:
- datacls/: BuildContext shared by all emitters
- io/: File system and path abstractions
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging

from .constants import Environment
from .copier import CopyHandler
from .datacls import BuildContext
from .io import NBPath
from .exceptions import EmitterError
from .utils import timed

logger = logging.getLogger(__name__)


# ============================================================================
# Emitter
# ============================================================================

class Emitter(ABC):
    """
    Abstract class describing one deployment artifact.

    Concrete emitters live in `nodebuilder.emitters`, are discovered by the
    EmitterRegistry and run in ascending `order`. An emitter bound to an
    `environment` only runs when the manifest requests that target.
    """

    order: int = 100
    environment: Optional[Environment] = None
    label: str = ""

    def __init__(self, context: BuildContext):
        self.ctx = context
        self.config = context.config
        self.fs = context.fs
        self.copier = CopyHandler(self.config, self.fs)
        self.written: List[NBPath] = []

    def enabled(self) -> bool:
        return self.environment is None or self.config.has(self.environment)

    async def run(self) -> List[NBPath]:
        """Emit the artifact if enabled and return every path written."""
        if not self.enabled():
            logger.debug(f"[{self.__class__.__name__}] Target not requested, skipping.")
            return []
        with timed(logger, f"Creating {self.label or self.__class__.__name__}..."):
            await self.emit()
        return list(self.written)

    @abstractmethod
    async def emit(self):
        """Write the artifact's files under the build directory."""
        pass

    # --- helpers shared by emitters ---

    def render(self, template: str, **variables: Any) -> str:
        """Render a packaged `str.format` template."""
        text = self.fs.read_text(NBPath(template))
        try:
            return text.format(**variables)
        except KeyError as e:
            raise EmitterError(f"Template '{template}' references unknown variable {e}")

    def write_text(self, path: NBPath, content: str) -> NBPath:
        self.fs.write_text(path, content)
        self.written.append(path)
        return path

    def write_bytes(self, path: NBPath, content: bytes) -> NBPath:
        self.fs.write_bytes(path, content)
        self.written.append(path)
        return path

    def copy_bundle(self, target_dir: NBPath) -> NBPath:
        """Place the JavaScript bundle into `target_dir`."""
        app_path = target_dir / self.config.bundle_name
        self.fs.copy(self.ctx.bundle, app_path)
        self.written.append(app_path)
        logger.info(f"App copied to '{app_path}'.")
        return app_path

    async def copy_files(self, target_dir: NBPath):
        self.written.extend(await self.copier.copy_into(target_dir))
