"""
Shared error types. Route handlers map these onto JSON responses.
"""


class DevfolioError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(DevfolioError):
    """Malformed request body"""
    status_code = 400


class AuthError(DevfolioError):
    status_code = 401


class UploadError(DevfolioError):
    """Upload failures use ``message`` instead of ``error`` in the response body"""

    def to_dict(self):
        return {'message': self.message}
