"""Application errors carrying the exit code the CLI should return."""

from taskdeck_cli.utils import exit_codes


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


class ValidationError(AppError):
    """Input rejected before it reaches the store."""

    def __init__(self, message: str):
        super().__init__(message, exit_codes.ERROR_INVALID_ARGS)


class NotAuthenticatedError(AppError):
    def __init__(self, message: str = "Not logged in. Use 'taskdeck login' to authenticate."):
        super().__init__(message, exit_codes.ERROR_AUTH_FAILURE)


class NotFoundError(AppError):
    def __init__(self, message: str):
        super().__init__(message, exit_codes.ERROR_NOT_FOUND)


class StoreError(AppError):
    """The backing store rejected a read or write."""


class ExportError(AppError):
    """Nothing could be exported with the chosen options."""
