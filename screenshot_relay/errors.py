from __future__ import annotations


class RelayError(Exception):
    # message is sent to the client; diagnostics are logged where raised.
    status_code: int = 500
    message: str = "Internal error"

    def __init__(self, message: str | None = None, *, headers: dict[str, str] | None = None):
        if message is not None:
            self.message = message
        self.headers = headers
        super().__init__(self.message)


class InvalidTarget(RelayError):
    status_code = 400
    message = "Invalid or disallowed target"


class AuthFailure(RelayError):
    status_code = 401
    message = "Authentication required"

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"WWW-Authenticate": 'Basic realm="Restricted"'})


class RenderFailure(RelayError):
    status_code = 500
    message = "Failed to capture screenshot"


class RenderBusy(RelayError):
    status_code = 503
    message = "Too many concurrent screenshots. Please retry."

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"Retry-After": "2"})
