"""Error taxonomy for the page data pipeline.

Every error is recovered at the page level and turned into an inline message;
none of these should escape a request handler.
"""


class PortfolioError(Exception):
    """Base class for data pipeline failures."""


class FetchError(PortfolioError):
    """The data file could not be retrieved (network failure or non-2xx)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ParseError(PortfolioError):
    """The response body was not valid JSON."""


class FormatError(PortfolioError):
    """The decoded JSON was not an array of records."""


class EmptyError(PortfolioError):
    """The array held no valid records."""


class NotFoundError(PortfolioError):
    """A detail page could not resolve its record."""


class SlugNotSpecifiedError(NotFoundError):
    """The ``slug`` query parameter was absent or empty."""


class RecordNotFoundError(NotFoundError):
    """No record carries the requested slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"No record with slug {slug!r}")
        self.slug = slug
