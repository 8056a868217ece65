"""
Error types raised by the kagi CLI.

Every error carries the process exit code it maps to and whether the usage
text should be printed after the error line.
"""


class KagiCLIError(Exception):
    """Base class for all CLI errors."""

    exit_code = 1
    show_usage = False

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UsageError(KagiCLIError):
    """Malformed invocation: bad flags, empty query or unreadable stdin."""

    show_usage = True


class MissingCredentialError(KagiCLIError):
    """No API key available from the flag or the environment."""

    show_usage = True


class RemoteCallError(KagiCLIError):
    """The FastGPT API call failed (network, auth or server error)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CacheWriteError(KagiCLIError):
    """Creating the cache directory or writing a cache entry failed."""
