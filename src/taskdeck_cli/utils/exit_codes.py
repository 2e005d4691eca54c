"""Exit codes returned by the ``taskdeck`` command.

Scripts can branch on these instead of parsing error text.
"""

SUCCESS = 0

# Store failures, unwritable export files and unexpected errors
ERROR_GENERAL = 1

# Bad option values and records that fail validation
ERROR_INVALID_ARGS = 2

# Nobody is logged in for the profile
ERROR_AUTH_FAILURE = 3

# Unknown task, category, template or config key
ERROR_NOT_FOUND = 5

MEANINGS = {
    SUCCESS: "success",
    ERROR_GENERAL: "general failure",
    ERROR_INVALID_ARGS: "invalid input",
    ERROR_AUTH_FAILURE: "not logged in",
    ERROR_NOT_FOUND: "not found",
}


def describe(code: int) -> str:
    return MEANINGS.get(code, f"unknown ({code})")


def legend() -> str:
    """One-line summary of every exit code, for help text."""
    return ", ".join(f"{code} {meaning}" for code, meaning in MEANINGS.items())
