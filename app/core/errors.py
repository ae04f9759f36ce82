"""Domain error taxonomy and its HTTP rendering."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from . import messages


logger = logging.getLogger("app.errors")


class PromptNoteError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    retryable = False

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail()
        super().__init__(self.detail)

    @classmethod
    def default_detail(cls) -> str:
        return "Internal server error"


class NotFoundError(PromptNoteError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    @classmethod
    def default_detail(cls) -> str:
        return "Resource not found"


class ForbiddenError(PromptNoteError):
    code = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN

    @classmethod
    def default_detail(cls) -> str:
        return messages.ACCESS_ADMIN_REQUIRED


class UnauthenticatedError(PromptNoteError):
    code = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED

    @classmethod
    def default_detail(cls) -> str:
        return messages.AUTH_NOT_AUTHENTICATED


class DomainValidationError(PromptNoteError):
    code = "validation_error"
    status_code = 422

    @classmethod
    def default_detail(cls) -> str:
        return "Invalid request"


class StorageUnavailableError(PromptNoteError):
    code = "storage_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    retryable = True

    @classmethod
    def default_detail(cls) -> str:
        return messages.DB_CONNECTION_ERROR


async def _handle_domain_error(request: Request, exc: PromptNoteError) -> JSONResponse:
    body = {"detail": exc.detail, "code": exc.code}
    if exc.retryable:
        body["retryable"] = True
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PromptNoteError, _handle_domain_error)  # type: ignore[arg-type]
