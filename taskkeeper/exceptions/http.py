"""
Domain error taxonomy raised by the Service Layer.
Each error carries the HTTP status the API Surface renders it with, so the
services never import the web framework.
"""

from http import HTTPStatus


class AppError(Exception):
    """Base class for errors surfaced to the caller as-is (never retried)."""

    status_code: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed input: empty or too-long title, unknown priority, null for a required field."""

    status_code = HTTPStatus.UNPROCESSABLE_ENTITY


class NotFoundError(AppError):
    """
    The task does not exist OR belongs to another user.
    The two cases share one message so a caller cannot probe for other users' ids.
    """

    status_code = HTTPStatus.NOT_FOUND


class ConflictError(AppError):
    """Username or email already registered."""

    status_code = HTTPStatus.CONFLICT


class InvalidCredentialsError(AppError):
    """Login or token verification failed. The message never says which part was wrong."""

    status_code = HTTPStatus.UNAUTHORIZED
