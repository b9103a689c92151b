from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class AuthenticationError(AppError):
    pass


class NotFoundError(AppError):
    pass


class ForbiddenError(AppError):
    pass


class ValidationError(AppError):
    pass


class UpstreamUnavailableError(AppError):
    """Upstream answered 5xx or could not be reached."""

    GENERIC_DETAIL = "Something went wrong. Please try again."

    def __init__(self, detail: str = GENERIC_DETAIL) -> None:
        super().__init__(detail)
