class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    error_code = 'error'

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Bad input the caller can correct."""

    error_code = 'validation_error'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class CapacityExhaustedError(DomainError):
    """No free slot left for the requested month; retry next month."""

    error_code = 'capacity_exhausted'

    def __init__(self, message: str = 'No free slots left for this month') -> None:
        super().__init__(message, 409)


class VerificationFailedError(DomainError):
    # Wrong code, reused code, expired code and unknown review all map here
    error_code = 'verification_failed'

    def __init__(
        self, message: str = 'Invalid verification code or review already verified'
    ) -> None:
        super().__init__(message, 400)


class InvalidStateError(DomainError):
    error_code = 'invalid_state'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class UnauthorizedError(CustomBaseError):
    error_code = 'unauthorized'

    def __init__(self, message: str = 'Invalid admin credential') -> None:
        super().__init__(message, 401)


class NotFoundError(CustomBaseError):
    error_code = 'not_found'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class NotificationFailedError(CustomBaseError):
    """Soft failure of an outbound notification; never returned as an HTTP error."""

    error_code = 'notification_failed'

    def __init__(self, message: str) -> None:
        super().__init__(message, 502)


class StoreError(CustomBaseError):
    error_code = 'store_error'

    def __init__(self, message: str = 'Unexpected storage failure') -> None:
        super().__init__(message, 500)
