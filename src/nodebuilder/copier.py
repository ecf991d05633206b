import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

from .config import Config, CopyRuleModel
from .io import NBPath, FileSystem, is_path_absolute

logger = logging.getLogger(__name__)


class CopyHandler:
    """
    Applies the manifest's `copy` rules to one target directory.

    Sources are resolved against the project root. Rules whose source does
    not exist are skipped; the others are copied concurrently and awaited
    together, so the first failing copy aborts the batch.
    """

    def __init__(self, config: Config, fs: FileSystem):
        self.config = config
        self.fs = fs

    def _source(self, rule: CopyRuleModel) -> NBPath:
        if is_path_absolute(rule.from_path):
            return NBPath(rule.from_path)
        return self.config.dirs.root / rule.from_path

    def plan(self, target_dir: NBPath) -> List[Tuple[NBPath, NBPath]]:
        """Pairs (source, destination) for every rule whose source exists."""
        jobs = []
        for rule in self.config.copy_rules:
            src = self._source(rule)
            if not self.fs.exists(src):
                logger.debug(f"[Copy] Source `{src}` does not exist, skipping.")
                continue
            dst = target_dir / rule.to_path
            jobs.append((src, dst))
        return jobs

    async def copy_into(self, target_dir: NBPath) -> List[NBPath]:
        jobs = self.plan(target_dir)
        if not jobs:
            return []

        loop = asyncio.get_running_loop()
        with ThreadPoolExecutor() as executor:
            await asyncio.gather(
                *(loop.run_in_executor(executor, self._copy, src, dst) for src, dst in jobs)
            )
        return [dst for _, dst in jobs]

    def _copy(self, src: NBPath, dst: NBPath):
        if self.fs.is_dir(src):
            self.fs.copytree(src, dst)
        else:
            self.fs.copy(src, dst)
        logger.info(f"File `{src}` copied to `{dst}`.")
