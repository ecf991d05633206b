import logging
from typing import Optional

from .base import ExternalTool
from ..io import NBPath
from .. import constants

logger = logging.getLogger(__name__)


class NexeCompiler:
    """Compiles a bundle into a standalone executable with nexe."""

    def __init__(self, tool: Optional[ExternalTool] = None):
        self.tool = tool or ExternalTool("nexe", constants.DEFAULT_NEXE_CMD, constants.NEXE_ENV)

    def compile(self, bundle: NBPath, output: NBPath, target: str, cwd: NBPath):
        """
        Args:
            bundle: the JavaScript bundle to embed
            output: executable path, nexe appends `.exe` for Windows targets
            target: nexe target, `<environment>-<node version>`
            cwd: directory nexe runs (and caches downloads) in
        """
        logger.debug(f"[nexe] Compiling '{bundle}' for '{target}'")
        self.tool.run(
            ["-i", bundle.__path__(), "-o", output.__path__(), "-t", target],
            cwd=cwd,
        )
