"""Error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations

from typing import Iterable, List, Optional


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class ValidationFailure(AppError):
    """Semantic invariant violated; carries one message per offending field."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.errors: List[str] = list(errors or [])

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return f"{self.message}: {'; '.join(self.errors)}"


class StorageError(AppError):
    code = "STORAGE_ERROR"
