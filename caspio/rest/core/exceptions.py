"""Custom exception hierarchy."""

from __future__ import annotations

from collections.abc import Sequence


class CaspioError(Exception):
    """Base exception for all library errors."""

    pass


class ValidationError(CaspioError):
    """Caller-supplied query or payload failed validation.

    Raised before any network call is made. Never retried: the message names
    the offending parameter and what would have been accepted.
    """

    pass


class TransportError(CaspioError):
    """Request failed at the HTTP layer.

    Carries the upstream status code and the backend's ``Message`` field when
    the response provided one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        upstream_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.upstream_message = upstream_message


class AmbiguousSourceError(CaspioError):
    """Copy source locator matched zero or more than one record."""

    def __init__(self, message: str, match_count: int) -> None:
        super().__init__(message)
        self.match_count = match_count


class InvalidFieldError(CaspioError):
    """Field name is not writable on the target table."""

    def __init__(self, message: str, field_names: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.field_names = list(field_names or [])
