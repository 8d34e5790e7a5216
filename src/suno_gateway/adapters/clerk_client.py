"""Clerk identity provider and package metadata adapter."""

from dataclasses import dataclass
from typing import Protocol

from suno_gateway.adapters.session_transport import SessionTransport

CLERK_PACKAGE_PATH = "/v1/package/npm/@clerk/clerk-js"


class ClerkClient(Protocol):
    """Interface for the Clerk calls needed to keep a session alive."""

    async def fetch_package_metadata(self) -> object:
        """Return the clerk-js package metadata."""

    async def fetch_client(
        self, client_version: str, token: str | None = None
    ) -> dict[str, object]:
        """Return the Clerk client object for the current cookie."""

    async def create_session_token(
        self, session_id: str, client_version: str, token: str | None = None
    ) -> dict[str, object]:
        """Mint a fresh session token and return the raw response."""


@dataclass
class HttpxClerkClient(ClerkClient):
    """Clerk client that sends requests through a shared session transport."""

    transport: SessionTransport
    clerk_base_url: str
    jsdelivr_base_url: str

    async def fetch_package_metadata(self) -> object:
        """Fetch clerk-js metadata from jsDelivr."""
        response = await self.transport.get(
            f"{self.jsdelivr_base_url}{CLERK_PACKAGE_PATH}"
        )
        response.raise_for_status()
        return response.json()

    async def fetch_client(
        self, client_version: str, token: str | None = None
    ) -> dict[str, object]:
        """Fetch the Clerk client, which lists the active session."""
        response = await self.transport.get(
            f"{self.clerk_base_url}/v1/client",
            token=token,
            params={"_clerk_js_version": client_version},
        )
        response.raise_for_status()
        return response.json()

    async def create_session_token(
        self, session_id: str, client_version: str, token: str | None = None
    ) -> dict[str, object]:
        """Exchange the session id for a new JWT."""
        response = await self.transport.post(
            f"{self.clerk_base_url}/v1/client/sessions/{session_id}/tokens",
            token=token,
            params={"_clerk_js_version": client_version},
        )
        response.raise_for_status()
        return response.json()
