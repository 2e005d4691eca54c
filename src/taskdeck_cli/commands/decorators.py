"""Decorators for command functions."""

import asyncio
import functools
import time
from collections.abc import Callable

import typer

from taskdeck_cli.config import get_config_manager
from taskdeck_cli.exceptions import AppError, NotAuthenticatedError
from taskdeck_cli.services.storage import get_auth_service
from taskdeck_cli.utils import exit_codes
from taskdeck_cli.utils.logger import get_logger
from taskdeck_cli.utils.ui.formatters import format_error


def _require_auth(profile: str = "default") -> None:
    """Raise NotAuthenticatedError unless someone is logged in for ``profile``."""
    if not get_auth_service(get_config_manager(profile)).is_authenticated():
        raise NotAuthenticatedError()


def _invoke(func: Callable, args: tuple, kwargs: dict):
    if asyncio.iscoroutinefunction(func):
        return asyncio.run(func(*args, **kwargs))
    return func(*args, **kwargs)


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Wrap a Typer command with auth, logging and error-to-exit-code mapping.

    Coroutine commands are driven with ``asyncio.run``. ``AppError`` becomes
    a red error line plus its exit code; anything else unexpected exits 1.
    Usable bare (``@command_wrapper``) or with options
    (``@command_wrapper(auth_required=False)``).
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger("commands")
            name = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", name)
            try:
                if auth_required:
                    _require_auth(kwargs.get("profile", "default"))
                result = _invoke(func, args, kwargs)
            except typer.Exit:
                raise
            except AppError as e:
                logger.error(
                    "command failed: %s (%.3fs) [%s] %s",
                    name,
                    time.monotonic() - start,
                    exit_codes.describe(e.exit_code),
                    e,
                )
                format_error(str(e))
                raise typer.Exit(code=e.exit_code) from e
            except Exception as e:
                logger.exception("command crashed: %s (%.3fs)", name, time.monotonic() - start)
                format_error(f"An unexpected error occurred: {e}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

            logger.info("command completed: %s (%.3fs)", name, time.monotonic() - start)
            return result

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
