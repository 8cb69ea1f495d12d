from typing import Any, Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    kind: str = 'Error'

    def __init__(
        self, message: str, status_code: int = 500, details: Optional[Any] = None
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class DomainError(CustomBaseError):
    """Business rule violation (bad seat count, closed event, cancellation window...)"""

    kind = 'ValidationError'

    def __init__(
        self, message: str, status_code: int = 400, details: Optional[Any] = None
    ) -> None:
        super().__init__(message, status_code, details)


class ForbiddenError(CustomBaseError):
    kind = 'AuthorizationError'

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, 403, details)


class NotFoundError(CustomBaseError):
    kind = 'NotFoundError'

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, 404, details)


class ConflictError(CustomBaseError):
    kind = 'ConflictError'

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, 409, details)


class AuthenticationError(CustomBaseError):
    kind = 'AuthenticationError'

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, 401, details)


class InternalError(CustomBaseError):
    kind = 'InternalError'

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message, 500, details)
