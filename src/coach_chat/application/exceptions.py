from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    pass


class ValidationError(AppError):
    pass


class StoreError(AppError):
    """The record store rejected or failed an operation."""


class UpstreamError(AppError):
    """An external service (text generation) failed."""
