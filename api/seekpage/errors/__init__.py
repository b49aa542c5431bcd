"""Error handling module for the SeekPage API."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    NotFoundError,
    InternalServerError,
    ServiceUnavailableError,
    InvalidCursor,
    InvalidLimit,
    InvalidSortKey,
    create_problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "NotFoundError",
    "InternalServerError",
    "ServiceUnavailableError",
    "InvalidCursor",
    "InvalidLimit",
    "InvalidSortKey",
    "create_problem_response",
    "register_exception_handlers"
]
