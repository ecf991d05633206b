from enum import Enum

# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "build": "nodebuilder.builder.build",
    "bld": "nodebuilder.builder.build",
    "copy": "nodebuilder.copier",
    "cp": "nodebuilder.copier",
    "image": "nodebuilder.builder.image",
    "img": "nodebuilder.builder.image",
    "emit": "nodebuilder.emitters",
    "node": "nodebuilder.emitters.node",
    "docker": "nodebuilder.emitters.docker",
    "linux": "nodebuilder.emitters.linux",
    "windows": "nodebuilder.emitters.windows",
    "win": "nodebuilder.emitters.windows",
    "tools": "nodebuilder.tools",
    "webpack": "nodebuilder.tools.webpack",
    "nexe": "nodebuilder.tools.nexe",
    "io": "nodebuilder.io",
    "fs": "nodebuilder.io.fs",
    "conf": "nodebuilder.config",
    "cfg": "nodebuilder.config",
    "rty": "nodebuilder.registry",
}

# Top-level modules within nodebuilder for auto-prefixing
KNOWN_TOP_MODULES = {
    "builder",
    "emitters",
    "tools",
    "io",
    "resources",
    "datacls",
    "utils",
    "exceptions",
    "config",
    "registry",
    "copier",
    "abstractions",
    "cli",
}

LOG_LEVELS_ENV = "NODEB_LOG_LEVELS"

# --- Manifest ---
MANIFEST_FILENAME = "package.json"
CHECK_DOC = "Please check documentation in README.md."

# --- Filenames and Paths ---
TEMP_SUBDIR = "temp"
NODE_SUBDIR = "node"
DOCKER_SUBDIR = "docker"
LINUX_INSTALL_SUBDIR = "install"
WINDOWS_SERVICE_SUBDIR = "service"
DOCKERFILE_NAME = "Dockerfile"
DOCKER_COMPOSE_FILENAME = "docker-compose.yml"
DOCKER_COMPOSE_VERSION = "3.7"
WEBPACK_CONFIG_FILENAME = "webpack.config.js"
WINSW_SERVICE_EXE = "service.exe"
WINSW_SERVICE_XML = "service.xml"

KNOWN_PROTOCOLS = {"file", "resource", "memory"}

# --- Templates (resource:/templates/<name>) ---
DOCKERFILE_TEMPLATE = "resource:/templates/Dockerfile"
SYSTEMD_UNIT_TEMPLATE = "resource:/templates/service"
INSTALL_SCRIPT_TEMPLATE = "resource:/templates/install.sh"
WEBPACK_CONFIG_TEMPLATE = "resource:/templates/webpack.config.js"

# --- Windows service wrapper ---
WINSW_ENV = "NODEB_WINSW"
WINSW_RESOURCE = "resource:/bin/WinSW.NET4.exe"
WINSW_ON_FAILURE_DELAYS = ["10 sec", "30 sec", "1 min", "2 min", "3 min"]
WINSW_RESET_FAILURE = "10 min"
WINSW_PRIORITY = "High"
WINSW_LOG_MODE = "reset"

# --- External tools ---
WEBPACK_ENV = "NODEB_WEBPACK"
NEXE_ENV = "NODEB_NEXE"
DEFAULT_WEBPACK_CMD = ["npx", "webpack"]
DEFAULT_NEXE_CMD = ["npx", "nexe"]
# env variables probed, in order, for the bundle's process.env.VERSION
VERSION_ENV_VARS = ["npm_package_version", "VERSION"]

# --- Docker defaults ---
DEFAULT_DOCKER_IMAGE = "node:10-alpine"
DEFAULT_DOCKER_WORKDIR = "/usr/src/app"

# --- Linux service defaults ---
DEFAULT_SERVICE_ROOT = "/srv/invipo"
SYSTEMD_UNIT_DIR = "/etc/systemd/system"


class Environment(str, Enum):
    LINUX_X64 = "linux-x64"
    WIN_X64 = "windows-x64"
    DOCKER = "docker"


class Restart(str, Enum):
    NO = "no"
    ALWAYS = "always"
    ON_FAILURE = "on-failure"
    UNLESS_STOPPED = "unless-stopped"


# Environments compiled to a native executable by the compiler
BINARY_ENVIRONMENTS = (Environment.LINUX_X64, Environment.WIN_X64)
