import os
import shlex
import shutil
import logging
import subprocess
from typing import List, Optional, Sequence

from ..io import NBPath
from ..exceptions import ToolError, ToolNotFoundError

logger = logging.getLogger(__name__)


class ExternalTool:
    """
    A command line program Node Builder delegates to.

    The command defaults to `default_cmd` and can be replaced with a
    shell-style string in the environment variable `env_var`.
    """

    def __init__(self, name: str, default_cmd: Sequence[str], env_var: Optional[str] = None):
        self.name = name
        self.default_cmd = list(default_cmd)
        self.env_var = env_var

    def command(self) -> List[str]:
        custom = os.environ.get(self.env_var) if self.env_var else None
        if custom:
            logger.debug(f"[{self.name}] Using command from ${self.env_var}: {custom}")
            return shlex.split(custom)
        return list(self.default_cmd)

    def run(self, args: Sequence[str], cwd: Optional[NBPath] = None) -> subprocess.CompletedProcess:
        cmd = self.command()
        if not cmd or shutil.which(cmd[0]) is None:
            hint = f" (or set ${self.env_var})" if self.env_var else ""
            raise ToolNotFoundError(
                f"Cannot run `{self.name}`: executable '{cmd[0] if cmd else ''}' not found on PATH{hint}."
            )

        full_cmd = cmd + [str(arg) for arg in args]
        workdir = str(cwd) if cwd is not None else None
        logger.debug(f"[{self.name}] Running: {shlex.join(full_cmd)} (cwd={workdir})")
        try:
            result = subprocess.run(
                full_cmd,
                cwd=workdir,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ToolNotFoundError(f"Cannot run `{self.name}`: {e}") from e

        for line in (result.stdout or "").splitlines():
            logger.debug(f"[{self.name}] {line}")

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ToolError(
                f"`{self.name}` exited with status {result.returncode}"
                + (f":\n{stderr}" if stderr else "."),
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result
