from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.scheduling.detector import ConflictReport


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """Raised when a proposal is structurally invalid, before any conflict check runs."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=422, details=details)


class ConflictError(AppError):
    """Raised when a proposed timetable entry collides with the existing schedule.

    The full report is kept on the exception so callers can show every
    blocking session, not just the first one.
    """
    def __init__(self, report: ConflictReport):
        self.report = report
        super().__init__(
            report.summary(),
            status_code=409,
            details={"conflicts": [finding.as_dict() for finding in report]},
        )


class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)


class DuplicateResourceError(AppError):
    """Raised when a resource with the same unique value already exists."""
    def __init__(self, resource_type: str, field: str, value: str):
        super().__init__(
            f"{resource_type} with {field} {value} already exists",
            status_code=409,
            details={"field": field, "value": value},
        )
