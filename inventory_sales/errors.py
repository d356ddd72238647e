class AppError(Exception):
    """Base error carrying the HTTP status it should be reported with."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidInput(AppError):
    status_code = 400


class Unauthorized(AppError):
    status_code = 401

    def __init__(self, message="Unauthorized"):
        super().__init__(message)


class InvalidToken(Unauthorized):
    def __init__(self, message="Invalid token"):
        super().__init__(message)


class NotFound(AppError):
    status_code = 404


class Conflict(AppError):
    status_code = 409
