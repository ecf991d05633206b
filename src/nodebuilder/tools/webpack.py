"""
Bundling through webpack.

A config file is generated into the temp directory and handed to the
webpack CLI, which resolves webpack from the project's own node_modules.
"""

import os
import json
import logging
from typing import Optional

from .base import ExternalTool
from ..config import Config
from ..io import NBPath, FileSystem
from ..exceptions import ToolError
from .. import constants

logger = logging.getLogger(__name__)


class WebpackBundler:
    """Produces `<temp>/<shortcut>.js` from `<src>/<entry>`."""

    def __init__(self, tool: Optional[ExternalTool] = None):
        self.tool = tool or ExternalTool("webpack", constants.DEFAULT_WEBPACK_CMD, constants.WEBPACK_ENV)

    @staticmethod
    def app_version(config: Config) -> str:
        """Version baked into the bundle as `process.env.VERSION`."""
        for var in constants.VERSION_ENV_VARS:
            if os.environ.get(var):
                return os.environ[var]
        return config.version

    def render_config(self, config: Config, fs: FileSystem) -> str:
        dirs = config.dirs
        template = fs.read_text(NBPath(constants.WEBPACK_CONFIG_TEMPLATE))
        return template.format(
            root=json.dumps(dirs.root.__path__()),
            src=json.dumps(dirs.src.__path__()),
            entry=json.dumps((dirs.src / config.entry).__path__()),
            output_dir=json.dumps(dirs.temp.__path__()),
            filename=json.dumps(config.bundle_name),
            version=json.dumps(self.app_version(config)),
        )

    def bundle(self, config: Config, fs: FileSystem) -> NBPath:
        config_path = config.dirs.temp / constants.WEBPACK_CONFIG_FILENAME
        fs.write_text(config_path, self.render_config(config, fs))
        logger.debug(f"[webpack] Config written to '{config_path}'.")

        self.tool.run(["--config", config_path.__path__()], cwd=config.dirs.root)

        bundle = config.dirs.temp / config.bundle_name
        if not fs.exists(bundle):
            raise ToolError(f"webpack finished but produced no bundle at '{bundle}'.")
        return bundle
