class TrackerError(Exception):
    """Base error carrying the HTTP status and the message shown to callers."""

    status_code = 500
    message = "internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(TrackerError, ValueError):
    status_code = 400
    message = "invalid input"


class NotFoundError(TrackerError):
    status_code = 404
    message = "transaction not found"


class StoreError(TrackerError):
    status_code = 500
    message = "database error"
