from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(ServiceError):
    """Input is well-formed but breaks a rule only the service can check."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class DuplicateKeyError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_409_CONFLICT)


class NotFoundError(ServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class IntegrityViolationError(ServiceError):
    """Delete blocked because the record is still referenced."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class ClassFullError(ServiceError):
    def __init__(self, message: str = "Class is full") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class AlreadyEnrolledError(ServiceError):
    def __init__(self, message: str = "Student is already enrolled in this class") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class NotEnrolledError(ServiceError):
    def __init__(self, message: str = "Student is not enrolled in this class") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)
