"""
Application error types.

Each error carries the HTTP status and the client-facing message. `main.py`
renders them into the `{"success": false, "message": ...}` envelope.
"""

from __future__ import annotations


class AppError(RuntimeError):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


# Raw driver detail stays in the server log; `message` is the stable text.
class StorageError(AppError):
    status_code = 500
