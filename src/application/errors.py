from __future__ import annotations

from datetime import date
from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class AuthError(AppError):
    code = "auth_error"
    status_code = 401


class PermissionDenied(AppError):
    code = "forbidden"
    status_code = 403


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class InvalidState(AppError):
    code = "invalid_state"
    status_code = 409


class TooEarly(AppError):
    code = "too_early"
    status_code = 409

    def __init__(self, message: str, *, eligible_date: date) -> None:
        super().__init__(message, details={"eligible_date": eligible_date.isoformat()})
        self.eligible_date = eligible_date


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500
