from .base import AppError, DomainError, ValidationError
from .http import render_app_error, render_http_exception, render_internal_error

__all__ = [
    "AppError",
    "DomainError",
    "ValidationError",
    "render_app_error",
    "render_http_exception",
    "render_internal_error",
]
