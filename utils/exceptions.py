from typing import Optional, Any


class TimeTrackerError(Exception):
    """
    Base exception for the time tracker.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class NotFoundError(TimeTrackerError):
    """
    Raised when a requested entity does not exist.
    """
    def __init__(self, message: str = "Not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class ConflictError(TimeTrackerError):
    """
    Raised on uniqueness or state violations: duplicate user, session already open.
    """
    def __init__(self, message: str = "Already exists", details: Optional[Any] = None):
        super().__init__(message, code="CONFLICT", status_code=409, details=details)


class ValidationFailedError(TimeTrackerError):
    """
    Raised when input fails field validation. details maps field name to message.
    """
    def __init__(self, message: str = "Validation failed", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_FAILED", status_code=422, details=details)


class BadRequestError(TimeTrackerError):
    def __init__(self, message: str = "Bad request", details: Optional[Any] = None):
        super().__init__(message, code="BAD_REQUEST", status_code=400, details=details)


class PersonNotFoundError(NotFoundError):
    """
    The people service has no person with the given passport.
    """
    def __init__(self, message: str = "Person not found", details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.code = "PERSON_NOT_FOUND"


class PeopleServiceError(TimeTrackerError):
    """
    The people service is unreachable or answered with something unusable.
    """
    def __init__(self, message: str = "People service error", details: Optional[Any] = None):
        super().__init__(message, code="PEOPLE_SERVICE_ERROR", status_code=502, details=details)
