"""
Custom exception hierarchy for Precifica.

Exceptions are categorized as:
- ConfigError: remote sync attempted without credentials (raised before any network call)
- RemoteError: non-success response or transport failure from the gold feed or file store
- ConflictError: the file store rejected a write because the version token is stale
- ParseError: a response body could not be decoded
- ValidationError: a request tried to edit a field that is not user-editable

No error is retried automatically; every retry is user-initiated.
"""


class PrecificaException(Exception):
    """Base exception for Precifica."""
    pass


class ConfigError(PrecificaException):
    """
    Remote sync is not configured.

    Needs configuration fix (token, owner, repository), not retry.
    """
    pass


class RemoteError(PrecificaException):
    """
    Error from an external API (gold feed, GitHub).

    status_code is None when the request never produced a response
    (timeout, DNS failure, connection refused).
    """
    def __init__(self, service: str, message: str, status_code: int = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service} API error: {message}")


class ConflictError(RemoteError):
    """
    The remote file changed since it was last read.

    The caller must pull again before pushing.
    """
    def __init__(self, service: str, message: str, status_code: int = 409):
        super().__init__(service, message, status_code)


class ParseError(PrecificaException):
    """Malformed response body - retrying won't help."""
    pass


class ValidationError(PrecificaException):
    """Invalid input data."""
    pass


class ValidationWarning(PrecificaException):
    """
    Non-fatal data problem.

    Never raised to callers; instances are logged and reported back as
    messages next to a successful result.
    """
    pass


class StorageError(PrecificaException):
    """Local data directory could not be read or written."""
    pass
