# server/core/errors.py


class PortfolioError(Exception):
    """
    Base class for errors surfaced to API clients as a JSON {message} body.
    """
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(PortfolioError):
    status_code = 400
    message = "Missing fields"


class AuthError(PortfolioError):
    status_code = 401
    message = "Unauthorized"


class MissingCredential(AuthError):
    message = "Missing Authorization"


class InvalidCredential(AuthError):
    message = "Invalid token"


class InvalidCredentials(AuthError):
    message = "Invalid username or password"


class NotFoundError(PortfolioError):
    status_code = 404
    message = "Post not found"


class StoreError(PortfolioError):
    status_code = 500
    message = "DB error"
