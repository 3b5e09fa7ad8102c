"""
Standardized exit codes for turnscope CLI commands.
"""

from typing import Optional

import typer

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_USER_CANCEL = 130  # Standard for SIGINT (Ctrl+C)


class CliExit(typer.Exit):
    """
    typer.Exit with a consistent code and an optional message.

    Usage:
        raise CliExit.error("Could not read transcript")
        raise CliExit.config_error("Invalid config file")
    """

    def __init__(self, code: int, message: Optional[str] = None):
        self.message = message
        super().__init__(code)
        if message:
            typer.echo(message, err=code != EXIT_SUCCESS)

    @classmethod
    def success(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_SUCCESS, message)

    @classmethod
    def error(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_ERROR, message)

    @classmethod
    def config_error(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_CONFIG_ERROR, message)

    @classmethod
    def user_cancel(cls, message: Optional[str] = None) -> "CliExit":
        return cls(EXIT_USER_CANCEL, message or "Operation cancelled by user")
