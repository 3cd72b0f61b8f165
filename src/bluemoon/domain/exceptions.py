from __future__ import annotations


class BlueMoonError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SessionRequiredError(BlueMoonError):
    """No auth token in the session; the caller must log in first."""


class PermissionDeniedError(BlueMoonError):
    """The logged-in user's role may not open this screen."""


class FormValidationError(BlueMoonError):
    """Client-side form validation failed; nothing was sent to the backend."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


class APIError(BlueMoonError):
    """Raised when the backend returns a 4xx/5xx response or cannot be reached.

    ``status_code`` is ``None`` for transport failures. ``server_message`` is
    False when ``detail`` is raw response text rather than a message the
    backend meant for users.
    """

    def __init__(self, status_code: int | None, detail: str, server_message: bool = True) -> None:
        self.status_code = status_code
        self.detail = detail
        self.server_message = server_message
        super().__init__(f"[{status_code}] {detail}")


def error_message(exc: APIError, fallback: str) -> str:
    """The backend's own message when it sent one, else the screen's *fallback*."""
    return exc.detail if exc.server_message and exc.detail else fallback
