"""javaimport error types.

All custom exceptions inherit from JavaImportError to allow
catching any javaimport-specific error.
"""


class JavaImportError(Exception):
    """Base exception for all javaimport errors."""

    pass


class ConfigurationError(JavaImportError):
    """Invalid configuration."""

    pass


class CompilationFailed(JavaImportError):
    """The regex engine rejected a synthesized prefix pattern."""

    def __init__(self, message: str, pattern: str) -> None:
        super().__init__(message)
        self.pattern = pattern


class ClassFileError(JavaImportError):
    """Class file is malformed or truncated."""

    def __init__(self, message: str, file_path: str) -> None:
        super().__init__(message)
        self.file_path = file_path


class WalkError(JavaImportError):
    """A classpath or sourcepath entry could not be walked."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class DescriptorError(JavaImportError):
    """Malformed field or method descriptor."""

    pass
