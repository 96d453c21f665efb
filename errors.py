"""
Exception types raised by the providers and the CLI.
"""


class DailyActivityError(Exception):
    """Base class for every error raised by this package."""


class InvalidDateError(DailyActivityError, ValueError):
    """Raised when a date string is not in YYYY-MM-DD format."""

    def __init__(self, value: str):
        super().__init__(f"Invalid date format {value!r}. Use YYYY-MM-DD")
        self.value = value


class ConfigurationError(DailyActivityError):
    """Raised when a provider has nothing usable configured."""


class ResponseValidationError(DailyActivityError):
    """An external service answered with data of an unexpected shape."""

    def __init__(self, what: str, detail: str):
        super().__init__(f"Unexpected {what} response: {detail}")
        self.what = what
        self.detail = detail


class GhCommandError(DailyActivityError):
    """The gh CLI could not be run or exited with a non-zero status."""

    def __init__(self, args, returncode=None, stderr: str = ""):
        cmd = " ".join(args)
        msg = f"gh command failed: {cmd}"
        if returncode is not None:
            msg += f" (exit {returncode})"
        if stderr:
            msg += f"\n{stderr[:500]}"
        super().__init__(msg)
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
