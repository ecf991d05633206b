import logging
import posixpath
from typing import override

from ..abstractions import Emitter
from ..constants import Environment
from .. import constants

logger = logging.getLogger(__name__)


class LinuxServiceEmitter(Emitter):
    """
    systemd unit and installer script for the `linux-x64` binary,
    written to `<build>/linux-x64/install/`.
    """
    order = 30
    environment = Environment.LINUX_X64
    label = "service daemon for 'linux-x64'"

    @property
    def install_dir(self) -> str:
        return posixpath.join(self.config.service.root, self.config.shortcut)

    @override
    async def emit(self):
        shortcut = self.config.shortcut
        service_dir = self.ctx.target_dir(Environment.LINUX_X64.value) / constants.LINUX_INSTALL_SUBDIR
        self.fs.mkdir(service_dir, parents=True, exist_ok=True)

        unit = self.render(
            constants.SYSTEMD_UNIT_TEMPLATE,
            description=self.config.service.description or shortcut,
            shortcut=shortcut,
            install_dir=self.install_dir,
        )
        unit_path = self.write_text(service_dir / f"{shortcut}.service", unit)
        logger.info(f"Service configuration saved to '{unit_path}'")

        script = self.render(
            constants.INSTALL_SCRIPT_TEMPLATE,
            shortcut=shortcut,
            install_dir=self.install_dir,
            unit_dir=constants.SYSTEMD_UNIT_DIR,
        )
        script_path = self.write_text(service_dir / f"{shortcut}.sh", script)
        self.fs.chmod(script_path, 0o755)
        logger.info(f"Install script saved to '{script_path}'")
