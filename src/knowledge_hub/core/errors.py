"""
Error Taxonomy

Two kinds of failure reach the entity stores:

    ValidationError -- a required field is missing or malformed. Raised
        locally, before anything is sent to the remote service.
    ServiceError -- the remote persistence service rejected or could not
        complete the operation. Caught at the store boundary.
"""

from __future__ import annotations


class HubError(Exception):
    """Base class for all knowledge hub errors."""


class ValidationError(HubError, ValueError):
    """A draft or partial update failed a local precondition."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ServiceError(HubError):
    """The remote persistence service failed an operation."""

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404
