"""
Exception hierarchy shared by the scraper, the calendar sync and the entry points.
"""


class BinTimesError(Exception):
    """Base class for all errors raised by this project."""


class ConfigurationError(BinTimesError):
    """Missing or invalid configuration (unknown site, incomplete credentials)."""


class NavigationError(BinTimesError):
    """The council page did not load."""


class NoResultsError(BinTimesError):
    """The address search produced no results after all attempts."""

    def __init__(self, attempts: int, message: str | None = None):
        self.attempts = attempts
        super().__init__(
            message
            or (
                f"No search results found after {attempts} attempts. "
                "The website may be slow or experiencing issues."
            )
        )


class AuthError(BinTimesError):
    """Exchanging the signed assertion for an access token failed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class CalendarApiError(BinTimesError):
    """A Google Calendar list/insert/delete call failed."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Calendar {operation} failed: {cause}")


class ParseError(BinTimesError):
    """A collection date string was not in the expected format."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unrecognised collection date: {value!r}")
