import logging
from typing import override

from ..abstractions import Emitter
from .. import constants

logger = logging.getLogger(__name__)


class NodePackageEmitter(Emitter):
    """
    Plain Node.js package: the bundle plus the copy rules under `<build>/node`.
    Produced for every build, whatever targets are requested.
    """
    order = 10
    label = "'Node.js' package"

    @override
    async def emit(self):
        output_dir = self.ctx.target_dir(constants.NODE_SUBDIR)
        self.fs.mkdir(output_dir, parents=True, exist_ok=True)
        self.copy_bundle(output_dir)
        await self.copy_files(output_dir)
