"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str = "Invalid configuration", code: str = "CFG_INVALID") -> None:
        super().__init__(message, code=code)


class InvalidAddressError(ConfigurationError):
    """Raised when a target address cannot be parsed as host:port."""

    def __init__(self, address: str, reason: str) -> None:
        self.address = address
        super().__init__(f"Invalid address {address!r}: {reason}", code="CFG_INVALID_ADDRESS")


class RpcError(ApplicationError):
    """Base exception for failed remote calls."""

    def __init__(self, message: str, code: str = "RPC_ERROR", method: str | None = None) -> None:
        self.method = method
        super().__init__(message, code=code)


class RpcTransportError(RpcError):
    """Raised when the request never produced a response (connect, timeout, I/O)."""

    def __init__(self, message: str = "Transport error", method: str | None = None) -> None:
        super().__init__(message, code="RPC_TRANSPORT_ERROR", method=method)


class RpcStatusError(RpcError):
    """Raised when the service answers with an application error."""

    def __init__(
        self,
        message: str = "Remote call failed",
        code: str = "RPC_STATUS_ERROR",
        method: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, code=code, method=method)


class RpcDecodeError(RpcError):
    """Raised when a response body does not match the expected schema."""

    def __init__(self, message: str = "Malformed response", method: str | None = None) -> None:
        super().__init__(message, code="RPC_DECODE_ERROR", method=method)


class StartupCheckError(ApplicationError):
    """Raised when a startup step returns an unexpected result."""

    def __init__(self, step: str, expected: object, actual: object) -> None:
        self.step = step
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Startup check {step!r} failed: expected {expected!r}, got {actual!r}",
            code="STARTUP_CHECK_FAILED",
        )


class InputStreamError(ApplicationError):
    """Raised when the interactive input stream can no longer be read."""

    def __init__(self, message: str = "Failed to read from input stream") -> None:
        super().__init__(message, code="CLI_INPUT_ERROR")


class CommandUsageError(ApplicationError):
    """Raised when a shell command gets the wrong number of arguments."""

    def __init__(self, usage: str) -> None:
        self.usage = usage
        super().__init__(f"usage: {usage}", code="CLI_USAGE_ERROR")
