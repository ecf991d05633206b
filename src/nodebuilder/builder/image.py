import logging

from python_on_whales import docker
from python_on_whales.exceptions import DockerException

from ..constants import Environment
from ..datacls import BuildContext
from ..exceptions import BuildError
from ..utils import timed
from .. import constants

logger = logging.getLogger(__name__)


class ImageBuilder:
    """Builds the emitted Docker context into a local `<shortcut>:<version>` image."""

    def __init__(self, context: BuildContext):
        self.ctx = context
        self.config = context.config

    @property
    def tag(self) -> str:
        return f"{self.config.shortcut}:{self.config.version}"

    def build(self):
        if not self.config.has(Environment.DOCKER):
            logger.warning("Image build requested but the `docker` target is not configured, skipping.")
            return

        context_dir = self.ctx.target_dir(constants.DOCKER_SUBDIR)
        with timed(logger, f"Building Docker image '{self.tag}'..."):
            try:
                docker.build(context_dir.__path__(), tags=[self.tag])
            except DockerException as e:
                raise BuildError(f"Failed to build image '{self.tag}': {e}") from e
        logger.info(f"Image '{self.tag}' built from '{context_dir}'.")
