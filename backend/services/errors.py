# backend/services/errors.py
"""
Error taxonomy shared by the service layer.

Services raise these; `main.create_app()` turns them into
`{"message": ...}` responses with the matching status code.
"""


class DirectoryError(Exception):
    status_code = 500

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class Unauthorized(DirectoryError):
    status_code = 401


class Forbidden(DirectoryError):
    status_code = 403


class NotFound(DirectoryError):
    status_code = 404


class InvalidArgument(DirectoryError):
    status_code = 400


class Conflict(DirectoryError):
    # registration reports duplicates as a plain 400
    status_code = 400


class ServiceUnavailable(DirectoryError):
    status_code = 503
