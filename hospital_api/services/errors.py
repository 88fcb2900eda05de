"""Application error types rendered as ``{"error": ...}`` responses."""

from fastapi import status


class ApiError(Exception):
    """Request failure carrying the HTTP status to report."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SlotConflictError(ApiError):
    def __init__(self) -> None:
        super().__init__(
            "This time slot is already booked. Please choose another time.",
            status.HTTP_409_CONFLICT,
        )


class WeakPasswordError(ApiError):
    def __init__(self) -> None:
        super().__init__(
            "Password must be at least 6 characters long",
            status.HTTP_400_BAD_REQUEST,
        )
