# Base class for errors raised by the service layer. Routes translate these
# into JSON error responses using the attached status code.
class ServiceError(Exception):
    """Base class for service-related errors."""
    status_code = 500

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        body = {'error': self.message}
        if self.payload:
            body.update(self.payload)
        return body


class ValidationError(ServiceError):
    """Raised when required fields are missing or malformed."""
    status_code = 400


class ConflictError(ServiceError):
    """Raised when a unique value (email, slug) is already taken."""
    status_code = 400


class AuthenticationRequired(ServiceError):
    """Raised when no valid session is present or sign-in fails."""
    status_code = 401


class AccessDenied(ServiceError):
    """Raised when an authenticated principal lacks the admin role."""
    status_code = 403


class NotFoundError(ServiceError):
    """Raised when an id or slug does not resolve to a record."""
    status_code = 404
