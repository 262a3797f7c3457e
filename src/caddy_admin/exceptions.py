class CaddyAdminException(Exception):
    """Base exception for caddy_admin."""


class AdminApiError(CaddyAdminException):
    """Raised when the admin API answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        message = f"{status_code} {reason}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)


class DecodeError(CaddyAdminException):
    """Raised when a response body cannot be decoded into the requested shape."""


class SettingsError(CaddyAdminException):
    """Raised when client configuration is invalid or missing."""
