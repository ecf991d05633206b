import json
import logging
import os
import posixpath
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    StrictStr,
    StringConstraints,
    ValidationError,
    field_validator,
)

from . import constants
from .constants import Environment, Restart
from .io import NBPath, FileSystem, create_app_fs
from .utils import shortcut_of
from .exceptions import (
    ConfigParsingError,
    ConfigFileMissingError,
    ConfigValidationError,
    NBPathNotFoundError,
)


logger = logging.getLogger(__name__)

NonEmptyStr = Annotated[StrictStr, StringConstraints(min_length=1)]
Port = Annotated[int, Field(ge=1, le=65535)]
PathField = Annotated[NBPath, PlainSerializer(str, return_type=str)]


class CopyRuleModel(BaseModel):
    """
        Class Manifest-Validation Model describe one entry of `builder.copy`
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_path: NonEmptyStr = Field(alias="from")
    to_path: NonEmptyStr = Field(alias="to")

    @field_validator("to_path", mode="after")
    @classmethod
    def stay_inside_target(cls, value: str) -> str:
        # destinations are relative to each target directory
        normalized = posixpath.normpath(value.lstrip("/\\"))
        if normalized == ".." or normalized.startswith("../"):
            raise ValueError(f"destination '{value}' leaves the target directory")
        return normalized


class VolumeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    host_path: NonEmptyStr = Field(alias="hostPath")
    service_path: NonEmptyStr = Field(alias="servicePath")


class PortModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    host_port: Port = Field(alias="hostPort")
    container_port: Port = Field(alias="containerPort")


class DockerModel(BaseModel):
    """
        Class Manifest-Validation Model describe `builder.docker`.
        Unset fields fall back to defaults when the Docker context is written.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    image: Optional[NonEmptyStr] = None
    workdir: Optional[NonEmptyStr] = None
    run: List[NonEmptyStr] = Field(default_factory=list)
    cmd: Optional[Union[NonEmptyStr, List[NonEmptyStr]]] = None
    restart: Optional[Restart] = None
    volumes: List[VolumeModel] = Field(default_factory=list)
    ports: List[PortModel] = Field(default_factory=list)
    externals: List[NonEmptyStr] = Field(default_factory=list)


class ServiceModel(BaseModel):
    """
        Class Manifest-Validation Model describe `builder.service`,
        shared by the Linux and Windows service artifacts.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    root: NonEmptyStr = constants.DEFAULT_SERVICE_ROOT
    description: Optional[NonEmptyStr] = None


class DirsModel(BaseModel):
    build: NonEmptyStr
    src: NonEmptyStr
    temp: Optional[NonEmptyStr] = None


class BuilderModel(BaseModel):
    """
        Class Manifest-Validation Model describe `builder`
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    dirs: DirsModel
    node: NonEmptyStr
    entry: NonEmptyStr
    environments: List[Environment] = Field(default_factory=list)
    copy_rules: List[CopyRuleModel] = Field(default_factory=list, alias="copy")
    docker: Optional[DockerModel] = None
    service: ServiceModel = Field(default_factory=ServiceModel)

    @field_validator("environments", mode="after")
    @classmethod
    def dedupe_environments(cls, value: List[Environment]) -> List[Environment]:
        """Collapse repeated targets, keeping first occurrence order"""
        return list(dict.fromkeys(value))


class ManifestModel(BaseModel):
    """
        Class Manifest-Validation Model describe top-level of `package.json`.
        Only the fields Node Builder reads are declared, everything else is ignored.
    """
    model_config = ConfigDict(extra="ignore")

    name: NonEmptyStr
    version: NonEmptyStr
    builder: BuilderModel


class Dirs(BaseModel):
    """Absolute directories, resolved once against the project root."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    root: PathField
    build: PathField
    src: PathField
    temp: PathField


class BuildConfig(BaseModel):
    """
    The normalized, immutable configuration record every build step reads.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    shortcut: str
    version: str
    node: str
    entry: str
    dirs: Dirs
    environments: Tuple[Environment, ...] = ()
    copy_rules: Tuple[CopyRuleModel, ...] = ()
    docker: Optional[DockerModel] = None
    service: ServiceModel = Field(default_factory=ServiceModel)


def _describe_error(error: Dict[str, Any]) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()))
    err_type = error.get("type")
    if not loc:
        return error.get("msg", "invalid value")
    if err_type == "missing":
        return f"`{loc}` property is missing"
    if err_type in ("string_type", "string_too_short"):
        return f"`{loc}` is empty or not a string"
    return f"`{loc}`: {error.get('msg')}"


class Config:
    """
    Loads and validates the manifest (`package.json`) using Pydantic models.
    It is the sole gatekeeper for configuration: nothing is written before
    it has accepted the manifest.
    """
    def __init__(self, manifest_path: str, fs: FileSystem = None):
        self.path = os.path.abspath(manifest_path)
        self.fs = fs or create_app_fs()
        logger.info(f"Loading manifest from '{self.path}'...")
        raw_data = self._load_raw_manifest()

        logger.debug("Validating manifest structure with Pydantic...")
        try:
            manifest = ManifestModel.model_validate(raw_data)
        except ValidationError as e:
            problems = "\n".join(f"  - {_describe_error(err)}" for err in e.errors())
            raise ConfigValidationError(
                f"Invalid build configuration in `{self.path}`:\n{problems}\n{constants.CHECK_DOC}"
            ) from e

        self.model = self._normalize(manifest)
        logger.debug(f"Build configuration normalized: \n{self.model.model_dump_json(indent=2)}")
        logger.info("Manifest validation passed.")

    def _load_raw_manifest(self) -> Dict[str, Any]:
        try:
            content = self.fs.read_text(NBPath(self.path))
        except (FileNotFoundError, NBPathNotFoundError):
            raise ConfigFileMissingError(f"Manifest not found at: {self.path}")
        except UnicodeDecodeError as e:
            raise ConfigParsingError(f"Manifest '{self.path}' is not valid UTF-8: {e}")
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigParsingError(f"Error parsing JSON manifest '{self.path}': {e}")
        if not isinstance(data, dict):
            raise ConfigParsingError("Manifest must be a JSON document containing an object.")
        logger.debug(f"Successfully parsed JSON from '{self.path}'.")
        return data

    def _normalize(self, manifest: ManifestModel) -> BuildConfig:
        builder = manifest.builder
        root = NBPath(os.path.dirname(self.path))

        def resolve(value: str) -> NBPath:
            return NBPath(os.path.normpath(os.path.join(str(root), value)))

        build_dir = resolve(builder.dirs.build)
        src_dir = resolve(builder.dirs.src)
        temp_dir = resolve(builder.dirs.temp) if builder.dirs.temp else build_dir / constants.TEMP_SUBDIR

        # the build directory is wiped on every run
        if root == build_dir or root.is_relative_to(build_dir):
            raise ConfigValidationError(
                f"`builder.dirs.build` must not contain the project root: '{build_dir}'. {constants.CHECK_DOC}"
            )
        if src_dir.is_relative_to(build_dir):
            raise ConfigValidationError(
                f"`builder.dirs.src` must not be inside `builder.dirs.build`: '{src_dir}'. {constants.CHECK_DOC}"
            )

        # the temp directory is removed at setup and again at cleanup
        if root.is_relative_to(temp_dir):
            raise ConfigValidationError(
                f"`builder.dirs.temp` must not contain the project root: '{temp_dir}'. {constants.CHECK_DOC}"
            )
        if src_dir.is_relative_to(temp_dir) or build_dir.is_relative_to(temp_dir):
            raise ConfigValidationError(
                f"`builder.dirs.temp` must not be or contain `builder.dirs.src` or `builder.dirs.build`: "
                f"'{temp_dir}'. {constants.CHECK_DOC}"
            )

        return BuildConfig(
            name=manifest.name,
            shortcut=shortcut_of(manifest.name),
            version=manifest.version,
            node=builder.node,
            entry=builder.entry,
            dirs=Dirs(root=root, build=build_dir, src=src_dir, temp=temp_dir),
            environments=tuple(builder.environments),
            copy_rules=tuple(builder.copy_rules),
            docker=builder.docker,
            service=builder.service,
        )

    @property
    def name(self) -> str:
        return self.model.name

    @property
    def shortcut(self) -> str:
        return self.model.shortcut

    @property
    def version(self) -> str:
        return self.model.version

    @property
    def node(self) -> str:
        return self.model.node

    @property
    def entry(self) -> str:
        return self.model.entry

    @property
    def dirs(self) -> Dirs:
        return self.model.dirs

    @property
    def environments(self) -> Tuple[Environment, ...]:
        return self.model.environments

    @property
    def copy_rules(self) -> Tuple[CopyRuleModel, ...]:
        return self.model.copy_rules

    @property
    def docker(self) -> DockerModel:
        """Docker section, or an all-defaults one when the manifest has none."""
        return self.model.docker or DockerModel()

    @property
    def service(self) -> ServiceModel:
        return self.model.service

    @property
    def bundle_name(self) -> str:
        return f"{self.shortcut}.js"

    @property
    def binary_environments(self) -> List[Environment]:
        return [env for env in self.environments if env in constants.BINARY_ENVIRONMENTS]

    def has(self, environment: Environment) -> bool:
        return environment in self.environments
