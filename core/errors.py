from typing import List, Optional


class ArchiverError(Exception):
    """Base exception for channel archiver errors."""

    pass


class AuthenticationError(ArchiverError):
    """Raised when the server rejects the login."""

    pass


class TeamNotFoundError(ArchiverError):
    """Raised when the target team does not exist or is not accessible."""

    def __init__(self, team_name: str, status_code: Optional[int] = None):
        self.team_name = team_name
        self.status_code = status_code
        super().__init__(f"Team '{team_name}' not found or not accessible (status {status_code})")


class RequestError(ArchiverError):
    """Raised when an API request fails."""

    def __init__(self, method: str, path: str, status_code: Optional[int] = None, detail: str = ""):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.detail = detail
        message = f"{method} {path} failed"
        if status_code is not None:
            message += f" with status {status_code}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class PageFetchError(RequestError):
    """Raised when a page of a paginated listing cannot be fetched.

    Carries the page index and everything accumulated before it, so callers can
    report how far the traversal got. The partial result must not be treated as
    the complete listing.
    """

    def __init__(self, page: int, fetched: List, cause: RequestError):
        self.page = page
        self.fetched = fetched
        super().__init__(cause.method, cause.path, cause.status_code, cause.detail)
        self.args = (f"page {page} could not be fetched ({len(fetched)} items before it): {cause}",)
