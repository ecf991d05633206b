"""
Docker context emitter.

Writes `<build>/docker/` with the bundle, the copy rules, a Dockerfile
rendered from `resource:/templates/Dockerfile` and a single-service
`docker-compose.yml`.
"""

import json
import logging
from typing import Any, Dict, override

import yaml

from ..abstractions import Emitter
from ..constants import Environment, Restart
from .. import constants

logger = logging.getLogger(__name__)


class DockerEmitter(Emitter):
    order = 20
    environment = Environment.DOCKER
    label = "'Docker' container"

    @override
    async def emit(self):
        output_dir = self.ctx.target_dir(constants.DOCKER_SUBDIR)
        self.fs.mkdir(output_dir, parents=True, exist_ok=True)

        self.copy_bundle(output_dir)
        await self.copy_files(output_dir)

        dockerfile = self.write_text(output_dir / constants.DOCKERFILE_NAME, self.dockerfile())
        logger.info(f"Dockerfile saved to '{dockerfile}'.")

        compose_path = output_dir / constants.DOCKER_COMPOSE_FILENAME
        self.write_text(compose_path, yaml.dump(self.compose(), sort_keys=False))
        logger.info(f"Docker compose file saved to '{compose_path}'.")

    def command(self) -> str:
        cmd = self.config.docker.cmd
        if cmd is None:
            return json.dumps(["node", self.config.bundle_name], separators=(",", ":"))
        if isinstance(cmd, list):
            return json.dumps(cmd, separators=(",", ":"))
        return cmd

    def dockerfile(self) -> str:
        docker = self.config.docker
        run = ""
        if docker.run:
            run = "RUN " + " \\\n    && ".join(docker.run) + "\n"
        expose = "".join(f"EXPOSE {port.container_port}\n" for port in docker.ports)
        return self.render(
            constants.DOCKERFILE_TEMPLATE,
            image=docker.image or constants.DEFAULT_DOCKER_IMAGE,
            run=run,
            workdir=docker.workdir or constants.DEFAULT_DOCKER_WORKDIR,
            expose=expose,
            cmd=self.command(),
        )

    def compose(self) -> Dict[str, Any]:
        docker = self.config.docker
        shortcut = self.config.shortcut
        restart = docker.restart or Restart.ALWAYS

        service: Dict[str, Any] = {
            "build": "./",
            "image": f"{shortcut}:{self.config.version}",
            "container_name": shortcut,
            "restart": restart.value,
        }
        if docker.volumes:
            service["volumes"] = [f"{v.host_path}:{v.service_path}" for v in docker.volumes]
        if docker.ports:
            service["ports"] = [f"{p.host_port}:{p.container_port}" for p in docker.ports]
        if docker.externals:
            service["external_links"] = list(docker.externals)

        return {
            "version": constants.DOCKER_COMPOSE_VERSION,
            "services": {shortcut: service},
        }
