from __future__ import annotations

from typing import Literal

ModelErrorKind = Literal["auth", "rate_limit", "malformed_request", "transient", "unknown"]


class TailorError(Exception):
    """Base class for every error raised by the tailoring core."""


class ValidationError(TailorError):
    """A required input or a required response field is missing."""


class ExtractionError(TailorError):
    """No structured payload could be located in a model reply."""


class ModelError(TailorError):
    def __init__(self, message: str, *, kind: ModelErrorKind = "unknown", status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class ServiceError(TailorError):
    """Raised by every public capability; always carries the original cause."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


def model_error_kind(status_code: int | None) -> ModelErrorKind:
    """Map an HTTP status reported by a completion SDK onto a ModelError kind."""
    if status_code is None:
        return "unknown"
    if status_code in {401, 403}:
        return "auth"
    if status_code == 429:
        return "rate_limit"
    if status_code in {408, 409} or status_code >= 500:
        return "transient"
    if 400 <= status_code < 500:
        return "malformed_request"
    return "unknown"
