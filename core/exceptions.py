"""exceptions.py
Defines the error taxonomy shared by the gateway, the exporter and the session.
"""
from typing import Optional


class ResumeStudioError(Exception):
    """Base exception for every error raised by this project."""
    pass


class ConfigurationError(ResumeStudioError):
    """Raised when a required setting (in .env by default) is missing or invalid."""

    def __init__(self, variable_name: str, message: Optional[str] = None):
        if message is None:
            message = f"Missing or invalid configuration: {variable_name}. Please set it in your .env file."
        super().__init__(message)
        self.variable_name = variable_name


class PreconditionError(ResumeStudioError, ValueError):
    """Raised when an action is triggered without its required input.

    No external call is made when this is raised.
    """
    pass


class ExtractionError(ResumeStudioError):
    """
    Raised when a call to the text-generation service fails or its response
    cannot be deserialized into the declared shape.

    Attributes:
        operation (str | None): The gateway operation that failed ("extract", "score", ...).
        message (str): Human-readable description of the error.
        original_exception (Exception | None): The underlying error, if any.
    """

    def __init__(
        self,
        operation: Optional[str] = None,
        message: str = "AI service request failed",
        original_exception: Optional[Exception] = None,
    ):
        self.operation = operation
        self.message = message
        self.original_exception = original_exception
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        base_message = f"{self.message} ({self.operation})" if self.operation else self.message
        if self.original_exception is not None:
            base_message += f": {self.original_exception}"
        return base_message


class ExportError(ResumeStudioError):
    """Raised when rendering a resume document fails. No partial file is kept."""

    def __init__(self, file_format: str, original_exception: Optional[Exception] = None):
        self.file_format = file_format
        self.original_exception = original_exception
        message = f"Failed to generate {file_format.upper()}"
        if original_exception is not None:
            message += f": {original_exception}"
        super().__init__(message)


class SessionBusyError(ResumeStudioError):
    """Raised when an action is triggered while another one is still outstanding."""

    def __init__(self, running_action: Optional[str] = None):
        self.running_action = running_action
        message = "Another action is already in progress"
        if running_action:
            message += f": {running_action}"
        super().__init__(message)
