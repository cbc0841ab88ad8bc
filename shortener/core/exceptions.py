"""
Custom Exceptions.

Application-specific exception classes for faults that are not ordinary
request outcomes. Accepted, rejected and unreachable results are returned
as values (see shortener.cli.outcomes), never raised.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when a configuration file is present but invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIGURATION_ERROR")


class InvalidStridError(ApplicationError):
    """Raised when a string ID contains characters the service does not accept."""

    def __init__(self, strid: str) -> None:
        self.strid = strid
        super().__init__(f"String ID `{strid}` invalid", code="VAL_INVALID_STRID")


class ProtocolViolationError(ApplicationError):
    """Raised when the service answers with a body missing an expected field."""

    def __init__(self, message: str = "Malformed response", body: str | None = None) -> None:
        self.body = body
        super().__init__(message, code="SYS_PROTOCOL_VIOLATION")
