"""Custom exceptions for orgsift services.

Only configuration and I/O problems are errors. Malformed Org content is
never an error: the parser and the unwrapper always complete.
"""


class OrgsiftError(Exception):
    """Base class for orgsift errors reported to the user."""


class RenderModeConflictError(OrgsiftError):
    """Raised when HTML and Markdown rendering are requested together."""

    def __init__(self, message: str = "Both HTML and Markdown conversion requested"):
        self.message = message
        super().__init__(message)


class UnsupportedFormatError(OrgsiftError):
    """Raised when an output format other than the supported ones is requested.

    Attributes:
        output_format: The rejected format name
        supported: Format names that would have been accepted
    """

    def __init__(self, output_format: str, supported: tuple[str, ...]):
        """Initialize UnsupportedFormatError.

        Args:
            output_format: The rejected format name
            supported: Format names that would have been accepted
        """
        self.output_format = output_format
        self.supported = supported
        super().__init__(
            f"Unsupported output format: {output_format!r} "
            f"(must be one of: {', '.join(supported)})"
        )


class InputFileError(OrgsiftError):
    """Raised when the input document cannot be read.

    Attributes:
        path: Path to the input file
        reason: Underlying error message
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read file {path}: {reason}")
