from .http import AppError, ConflictError, InvalidCredentialsError, NotFoundError, ValidationError

__all__ = ["AppError", "ConflictError", "InvalidCredentialsError", "NotFoundError", "ValidationError"]
