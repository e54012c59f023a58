from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NetworkFailure(AppError):
    """Server unreachable, timed out or answered with an unexpected status."""


class AuthenticationFailure(NetworkFailure):
    pass


class NotFoundError(AppError):
    pass


class ValidationFailure(AppError):
    """Server rejected the payload shape."""


class ConstraintFailure(AppError):
    """Server-side storage constraint, seen on voice + attachment sends."""


class ForbiddenActionError(AppError):
    pass


class AttachmentTooLargeError(AppError):
    def __init__(self, name: str, size: int, limit: int) -> None:
        self.name = name
        self.size = size
        self.limit = limit
        super().__init__(f"{name} is {size} bytes, limit is {limit}")
