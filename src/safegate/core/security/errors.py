"""Exception types for SafeGate."""


class SafeGateError(Exception):
    """Base exception for SafeGate errors."""

    pass


class SecurityCheckError(SafeGateError):
    """Raised when the security scan itself cannot complete.

    The gate never converts this into a partial verdict: callers receive
    the failure and no file is deemed safe.
    """

    def __init__(self, message: str, file_path: str | None = None):
        self.file_path = file_path
        super().__init__(message)


class ConfigError(SafeGateError, ValueError):
    """Raised for unsupported or malformed configuration input."""

    pass
