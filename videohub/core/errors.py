"""
Error taxonomy for the VideoHub service.

Handlers raise these typed errors; the API boundary converts them into the
standard error envelope.
"""

from typing import Any, List, Optional


class ApiError(Exception):
    """Base error carrying an HTTP status and a client-facing message"""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None,
                 status_code: Optional[int] = None):
        self.message = message or self.default_message
        self.errors = list(errors) if errors else []
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class ValidationError(ApiError):
    """Missing or invalid input, including malformed identifiers"""

    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(ApiError):
    """No authenticated actor on a request that needs one"""

    status_code = 401
    default_message = "Unauthorized request"


class AuthorizationError(ApiError):
    """Actor is not allowed to act on the resource"""

    status_code = 403
    default_message = "You are not allowed to perform this action"


class NotFoundError(ApiError):
    """Well-formed identifier with no matching entity"""

    status_code = 404
    default_message = "Resource not found"


class DependencyFailure(ApiError):
    """A remote dependency returned no usable result"""

    status_code = 500
    default_message = "Upstream dependency failed"
