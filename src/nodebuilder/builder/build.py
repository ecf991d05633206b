import logging
import platform
from typing import List, Optional

from ..config import Config
from ..copier import CopyHandler
from ..datacls import BuildContext
from ..io import NBPath, FileSystem, create_app_fs
from ..registry import emitter_registry, initialize_registries
from ..tools import WebpackBundler, NexeCompiler
from ..utils import timed
from .image import ImageBuilder
from .. import __version__

logger = logging.getLogger(__name__)


class Builder:
    """
    Runs the whole pipeline over one validated configuration:
    workspace setup, bundling, native binaries, artifact emitters,
    the optional Docker image and finally temp cleanup.

    Steps run strictly one after another; the first failure stops the run
    and leaves the build directory as it is for inspection.
    """

    def __init__(
        self,
        config: Config,
        fs: FileSystem = None,
        bundler: Optional[WebpackBundler] = None,
        compiler: Optional[NexeCompiler] = None,
        build_image: bool = False,
        keep_temp: bool = False,
    ):
        self.config = config
        self.fs = fs or create_app_fs()
        self.bundler = bundler or WebpackBundler()
        self.compiler = compiler or NexeCompiler()
        self.build_image = build_image
        self.keep_temp = keep_temp
        logger.debug(f"Builder initialized for '{self.config.name}'. Build dir: '{self.config.dirs.build}'")

    async def run(self) -> BuildContext:
        """Orchestrates the entire build process step by step."""
        logger.info(
            f"Starting Node Builder v{__version__}, Python {platform.python_version()}, "
            f"{platform.system()} ({platform.machine()})."
        )
        logger.info(f"Running in `{self.config.dirs.root}`")

        self._setup()

        bundle = self._bundle()
        context = BuildContext(config=self.config, bundle=bundle, fs=self.fs)

        await self._compile(context)
        await self._emit(context)

        if self.build_image:
            ImageBuilder(context).build()

        self._cleanup()
        logger.info(f"[Builder] Build finished. Files are in '{self.config.dirs.build}'")
        return context

    def _setup(self):
        dirs = self.config.dirs
        if self.fs.exists(dirs.build):
            logger.debug(f"[Builder] Build directory '{dirs.build}' exists. Cleaning it up.")
            self.fs.rmtree(dirs.build)
        # a temp dir outside the build dir would otherwise keep stale bundles
        if not dirs.temp.is_relative_to(dirs.build) and self.fs.exists(dirs.temp):
            self.fs.rmtree(dirs.temp)
        self.fs.mkdir(dirs.build, parents=True, exist_ok=True)
        self.fs.mkdir(dirs.temp, parents=True, exist_ok=True)
        logger.debug(f"[Builder] Workspace initialized at '{dirs.build}'.")

    def _bundle(self) -> NBPath:
        with timed(logger, "Running `webpack`..."):
            bundle = self.bundler.bundle(self.config, self.fs)
        logger.debug(f"[Builder] Bundle ready at '{bundle}'.")
        return bundle

    async def _compile(self, context: BuildContext):
        copier = CopyHandler(self.config, self.fs)
        for environment in self.config.binary_environments:
            target = f"{environment.value}-{self.config.node}"
            output_dir = context.target_dir(environment.value)
            self.fs.mkdir(output_dir, parents=True, exist_ok=True)

            with timed(logger, f"Creating binary for '{target}'..."):
                self.compiler.compile(
                    bundle=context.bundle,
                    output=output_dir / self.config.shortcut,
                    target=target,
                    cwd=self.config.dirs.build,
                )
                await copier.copy_into(output_dir)

    async def _emit(self, context: BuildContext) -> List[NBPath]:
        initialize_registries()
        written: List[NBPath] = []
        for emitter_cls in emitter_registry.ordered():
            logger.debug(f"[Builder] Running emitter '{emitter_cls.__name__}'")
            written.extend(await emitter_cls(context).run())
        logger.debug(f"[Builder] Emitters wrote {len(written)} paths.")
        return written

    def _cleanup(self):
        temp = self.config.dirs.temp
        if self.keep_temp:
            logger.info(f"Keeping temp directory '{temp}'.")
            return
        self.fs.rmtree(temp)
        logger.debug(f"[Builder] Temp directory '{temp}' removed.")
