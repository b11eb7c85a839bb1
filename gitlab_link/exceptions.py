"""
Custom exception classes for the gitlab-link preprocessor.

This module defines custom exception classes for different types of errors.
"""

from typing import Optional


class GitlabLinkError(Exception):
    """
    Base exception class for all gitlab-link errors.
    """

    def __init__(self, message: str, exit_code: int = 1):
        """
        Initialize the exception.

        Args:
            message: Error message.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class ConfigurationError(GitlabLinkError):
    """
    Exception raised for configuration-related errors.
    """

    def __init__(
        self, message: str, config_file: Optional[str] = None, exit_code: int = 2
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            config_file: Path to the configuration file that caused the error.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.config_file = config_file
        if config_file:
            message = f"{message} (config file: {config_file})"
        super().__init__(message, exit_code)


class InvalidConfigurationError(ConfigurationError):
    """
    Exception raised when the GitLab server URL is missing or malformed.
    """


class MissingProjectContextError(GitlabLinkError):
    """
    Exception raised when a reference omits its project and no default is configured.

    The rewriter recovers from this locally by leaving the reference as plain text.
    """

    def __init__(self, reference: str, missing: str, exit_code: int = 1):
        """
        Initialize the exception.

        Args:
            reference: The original reference text.
            missing: Name of the field that could not be resolved.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.reference = reference
        self.missing = missing
        super().__init__(
            f"Cannot resolve {reference!r}: no {missing} given and no default configured",
            exit_code,
        )


class BookFormatError(GitlabLinkError):
    """
    Exception raised when the preprocessor input is not a valid mdBook payload.
    """

    def __init__(self, message: str, exit_code: int = 3):
        """
        Initialize the exception.

        Args:
            message: Error message.
            exit_code: Exit code to use when this exception causes program termination.
        """
        super().__init__(message, exit_code)
