"""Error taxonomy shared by services and endpoints.

Every error carries the HTTP status it maps to; the handlers registered in
``khayal.main`` render them as ``{"message": ...}`` JSON bodies.
"""

from fastapi import status


class KhayalError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(KhayalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthenticated(KhayalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class Forbidden(KhayalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class NotFound(KhayalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidCredentials(KhayalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class InvalidOrExpiredToken(KhayalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid or expired reset token"


class UploadTooLarge(KhayalError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    default_message = "File too large"


class UnsupportedMediaType(KhayalError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    default_message = "Only JPEG, PNG and WebP images are allowed"


class DependencyFailure(KhayalError):
    default_message = "Internal server error"


class EmailDeliveryError(DependencyFailure):
    default_message = "Failed to send email"
