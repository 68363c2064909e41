"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        headers: dict[str, str] | None = None,
    ):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        self.headers = headers
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class UnauthorizedException(AppException):
    """Missing or invalid credentials."""

    def __init__(self, message: str = "Authentication required"):
        """Initialize with 401 status code and a bearer challenge."""
        super().__init__(
            message,
            status_code=401,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(AppException):
    """Forbidden access exception."""

    def __init__(self, message: str = "Forbidden"):
        """Initialize with 403 status code."""
        super().__init__(message, status_code=403)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class ConflictException(AppException):
    """Conflict exception."""

    def __init__(self, message: str = "Conflict", status_code: int = 409):
        """Initialize with 409 status code unless told otherwise."""
        super().__init__(message, status_code=status_code)


class SlotConflictException(ConflictException):
    """A slot is in the wrong state for the requested change."""

    def __init__(self, message: str = "This slot is no longer available"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class AppointmentStateException(ConflictException):
    """An appointment cannot move to the requested status."""

    def __init__(self, message: str = "Appointment cannot be changed"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)
