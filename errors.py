class TherapistLookupError(Exception):
    """Base error for the lookup endpoint; carries the HTTP status it maps to."""

    status_code = 500
    message = "Internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class MethodNotAllowed(TherapistLookupError):
    status_code = 405
    message = "Method not allowed"


class InvalidInput(TherapistLookupError):
    status_code = 400
    message = "zip (5-digit) is required"


class UpstreamError(TherapistLookupError):
    """The NPI registry was unreachable or answered with a non-2xx status."""

    status_code = 500
    message = "NPI API error"
