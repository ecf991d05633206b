class NodeBuilderError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to loading and parsing the manifest ---
class ConfigurationError(NodeBuilderError):
    """Base class for errors encountered while finding, reading, or parsing the manifest."""

    pass


class ConfigFileMissingError(ConfigurationError):
    """Raised when the manifest cannot be found."""

    pass


class ConfigParsingError(ConfigurationError):
    """Raised when the manifest is not a valid JSON object."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when the manifest fails structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors that occur during the build phase ---
class BuildError(NodeBuilderError):
    """Base class for errors that occur during the generation of output artifacts."""

    pass


class ToolError(BuildError):
    """Raised when an external tool (bundler, compiler) exits with a failure."""

    def __init__(self, message: str, returncode: int = None, stderr: str = None):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ToolNotFoundError(ToolError):
    """Raised when an external tool executable is not available on PATH."""

    pass


class EmitterError(BuildError):
    """Raised for issues while writing a deployment artifact."""

    pass


class UnsupportedFeatureError(BuildError):
    """Raised when a requested feature is not implemented."""

    pass


# --- 3. Errors related to IO operations ---
class NBIOError(NodeBuilderError):
    """Base class for IO-related errors."""

    pass


class InvalidPathError(NBIOError):
    """Raised when a path is invalid."""

    pass


class ProtocolError(NBIOError, UnsupportedFeatureError):
    """Raised when an unsupported protocol is used."""

    pass


class ReadOnlyError(NBIOError):
    """Raised when a write operation is attempted on a read-only filesystem."""

    pass


class NBPathExistsError(NBIOError):
    """Raised when a file or directory already exists."""

    pass


class NBPathNotFoundError(NBIOError):
    """Raised when a file or directory is not found."""

    pass


class NBNotAFileError(NBIOError):
    """Raised when a file is expected, but a directory is found."""

    pass


class NBNotADirectoryError(NBIOError):
    """Raised when a directory is expected, but a file is found."""

    pass
