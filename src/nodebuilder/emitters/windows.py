"""
Windows service emitter.

Wraps the `windows-x64` binary with WinSW: the wrapper executable is copied
to `<build>/windows-x64/service/service.exe` next to its `service.xml`.
"""

import logging
import os
import xml.etree.ElementTree as ET
from typing import Optional, override

from ..abstractions import Emitter
from ..constants import Environment
from ..io import NBPath
from .. import constants

logger = logging.getLogger(__name__)


class WindowsServiceEmitter(Emitter):
    order = 40
    environment = Environment.WIN_X64
    label = "service daemon for 'windows-x64'"

    def wrapper_path(self) -> Optional[NBPath]:
        """Locate the WinSW executable, `$NODEB_WINSW` first, then the packaged copy."""
        candidates = []
        if os.environ.get(constants.WINSW_ENV):
            candidates.append(NBPath(os.environ[constants.WINSW_ENV]))
        candidates.append(NBPath(constants.WINSW_RESOURCE))

        for candidate in candidates:
            if self.fs.exists(candidate):
                return candidate
            logger.debug(f"[WinSW] No wrapper at '{candidate}'.")
        return None

    @override
    async def emit(self):
        wrapper = self.wrapper_path()
        if wrapper is None:
            logger.warning(
                f"WinSW wrapper not found (set {constants.WINSW_ENV}), "
                "skipping Windows service."
            )
            return

        service_dir = self.ctx.target_dir(Environment.WIN_X64.value) / constants.WINDOWS_SERVICE_SUBDIR
        self.fs.mkdir(service_dir, parents=True, exist_ok=True)

        service_exe = service_dir / constants.WINSW_SERVICE_EXE
        self.fs.copy(wrapper, service_exe)
        self.written.append(service_exe)
        logger.info(f"Copied '{wrapper}' to '{service_exe}'")

        xml_path = self.write_bytes(service_dir / constants.WINSW_SERVICE_XML, self.service_xml())
        logger.info(f"Service configuration saved to '{xml_path}'")

    def service_xml(self) -> bytes:
        shortcut = self.config.shortcut
        root = ET.Element("configuration")
        ET.SubElement(root, "id").text = shortcut
        ET.SubElement(root, "name").text = shortcut
        ET.SubElement(root, "description").text = self.config.service.description or shortcut
        ET.SubElement(root, "executable").text = f"%BASE%/../{shortcut}.exe"
        ET.SubElement(root, "workingdirectory").text = "%BASE%/.."
        for delay in constants.WINSW_ON_FAILURE_DELAYS:
            ET.SubElement(root, "onfailure", action="restart", delay=delay)
        ET.SubElement(root, "resetfailure").text = constants.WINSW_RESET_FAILURE
        ET.SubElement(root, "priority").text = constants.WINSW_PRIORITY
        ET.SubElement(root, "log", mode=constants.WINSW_LOG_MODE)

        ET.indent(root, space="  ")
        return ET.tostring(root, encoding="utf-8", xml_declaration=True) + b"\n"
