"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; ``immoauto.main`` renders
them into the standard ``{success: false, ...}`` error body.
"""


class DomainError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    status_code = 400


class UnauthorizedError(DomainError):
    status_code = 401


class ForbiddenError(DomainError):
    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    status_code = 409


class LockedError(DomainError):
    status_code = 423
