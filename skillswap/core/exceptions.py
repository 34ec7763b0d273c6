"""
Application error taxonomy.
Services raise these; the API layer turns them into ``{"error": ...}`` responses.
"""

from fastapi import status


class SkillSwapError(Exception):
    """Base class. ``status_code`` is the HTTP status the error maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong!"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(SkillSwapError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(SkillSwapError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class ForbiddenError(SkillSwapError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFoundError(SkillSwapError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(SkillSwapError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(SkillSwapError):
    pass
