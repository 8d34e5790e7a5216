"""Error taxonomy for the Suno client."""

import json


class SunoError(Exception):
    """Base class for errors raised by the Suno client."""


class VersionResolutionError(SunoError):
    """Raised when Clerk package metadata cannot be read."""


class SessionAcquisitionError(SunoError):
    """Raised when Clerk does not return an active session id."""


class NotBootstrappedError(SunoError):
    """Raised when an operation runs before the session was bootstrapped."""


class TokenRenewalError(SunoError):
    """Raised when a token renewal response carries no JWT."""


class GenerationSubmissionError(SunoError):
    """Raised when Suno rejects a generation request."""

    def __init__(self, status_code: int, body: object) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Generation request failed ({status_code}): {self.detail}")

    @property
    def is_payment_required(self) -> bool:
        """Return true when the account is out of credits."""
        return self.status_code == 402

    @property
    def detail(self) -> str:
        """Return the provider's detail message, or the raw body."""
        if isinstance(self.body, dict) and "detail" in self.body:
            detail = self.body["detail"]
            return detail if isinstance(detail, str) else json.dumps(detail)
        if isinstance(self.body, str):
            return self.body
        return json.dumps(self.body)


class UnexpectedResponseError(SunoError):
    """Raised when a successful Suno response has an unexpected shape."""
