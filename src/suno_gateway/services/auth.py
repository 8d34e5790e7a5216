"""Clerk session bootstrap and token renewal."""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from suno_gateway.adapters.clerk_client import ClerkClient
from suno_gateway.domain.errors import (
    NotBootstrappedError,
    SessionAcquisitionError,
    TokenRenewalError,
    VersionResolutionError,
)
from suno_gateway.domain.session import Session

# Last clerk-js release before Suno enabled fraud detection on newer clients.
PINNED_CLERK_VERSION = "5.34.0"

_logger = logging.getLogger(__name__)


@dataclass
class AuthManager:
    """Owns the Clerk session and the current bearer token.

    Only this class replaces the session value. Callers read snapshots via
    ``session``, ``token`` and ``require_token``.
    """

    clerk_client: ClerkClient
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    uniform: Callable[[float, float], float] = random.uniform
    renew_pause_seconds: tuple[float, float] = (1.0, 2.0)
    _client_version: str | None = field(default=None, init=False)
    _session: Session | None = field(default=None, init=False)

    @property
    def client_version(self) -> str | None:
        return self._client_version

    @property
    def session(self) -> Session | None:
        """Return the current session snapshot, if bootstrapped."""
        return self._session

    @property
    def token(self) -> str | None:
        return self._session.token if self._session else None

    def require_token(self) -> str:
        """Return the current token or fail when the session is not ready."""
        token = self.token
        if not token:
            raise NotBootstrappedError("No bearer token. Call bootstrap() first.")
        return token

    async def bootstrap(self) -> None:
        """Resolve the client version, acquire a session and mint a token."""
        await self.resolve_client_version()
        await self.acquire_session()
        await self.renew_token(delay=False)

    async def resolve_client_version(self) -> str:
        """Check clerk-js metadata is reachable and pin a known-good version."""
        try:
            metadata = await self.clerk_client.fetch_package_metadata()
        except ValueError as exc:
            raise VersionResolutionError(
                "Failed to parse clerk version info, please try again later"
            ) from exc
        tags = metadata.get("tags") if isinstance(metadata, dict) else None
        latest = tags.get("latest") if isinstance(tags, dict) else None
        if not isinstance(latest, str) or not latest:
            raise VersionResolutionError(
                "Failed to get clerk version info, please try again later"
            )
        _logger.info(
            "Clerk latest version is %s, using pinned %s",
            latest,
            PINNED_CLERK_VERSION,
        )
        self._client_version = PINNED_CLERK_VERSION
        return self._client_version

    async def acquire_session(self) -> str:
        """Read the last active session id from the Clerk client."""
        client_version = self._client_version or await self.resolve_client_version()
        payload = await self.clerk_client.fetch_client(client_version, token=self.token)
        response = payload.get("response") if isinstance(payload, dict) else None
        session_id = (
            response.get("last_active_session_id")
            if isinstance(response, dict)
            else None
        )
        if not session_id:
            raise SessionAcquisitionError(
                "Failed to get session id, credentials may be stale. "
                "Update SUNO_COOKIE."
            )
        self._session = Session(session_id=session_id, client_version=client_version)
        _logger.info("Acquired Clerk session")
        return session_id

    async def renew_token(self, delay: bool = False) -> str:
        """Exchange the session id for a fresh token and store it.

        With ``delay`` the call pauses for a short random interval after the
        renewal so repeated renewals follow browser-like timing.
        """
        session = self._session
        if session is None:
            raise NotBootstrappedError("Session ID is not set. Cannot renew token.")
        payload = await self.clerk_client.create_session_token(
            session.session_id, session.client_version, token=session.token
        )
        _logger.info("KeepAlive...")
        if delay:
            await self.sleep(self.uniform(*self.renew_pause_seconds))
        new_token = payload.get("jwt") if isinstance(payload, dict) else None
        if not isinstance(new_token, str) or not new_token:
            raise TokenRenewalError("Token renewal response did not include a jwt")
        self._session = Session(
            session_id=session.session_id,
            client_version=session.client_version,
            token=new_token,
        )
        return new_token
