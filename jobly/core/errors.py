"""
Domain errors raised by the query builders and repositories.

Each error carries the HTTP status the API layer responds with; the mapping
to a response lives in main.py's exception handler.
"""


class JoblyError(Exception):
    """Base class for all expected application errors."""

    status_code = 500

    def __init__(self, message: str = "", status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self):
        return self.message


class BadRequestError(JoblyError):
    """Malformed input: empty update payload, unsupported filter, bad value."""
    status_code = 400

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(JoblyError):
    """Failed credential check or missing permission."""
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(JoblyError):
    """Lookup, update or delete target does not exist."""
    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class DuplicateError(JoblyError):
    """Insert would violate a uniqueness constraint."""
    status_code = 409

    def __init__(self, message: str = "Duplicate"):
        super().__init__(message)
