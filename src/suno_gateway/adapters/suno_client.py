"""Suno studio API adapter."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import httpx

from suno_gateway.adapters.session_transport import SessionTransport

GENERATE_TIMEOUT_SECONDS = 10


class SunoClient(Protocol):
    """Interface for Suno generation endpoints."""

    async def generate(self, payload: dict[str, object], token: str) -> httpx.Response:
        """Submit a generation payload and return the raw response."""

    async def feed(self, clip_ids: Sequence[str], token: str) -> list[dict[str, object]]:
        """Return raw clip records for the given ids."""


@dataclass
class HttpxSunoClient(SunoClient):
    """Suno client that sends requests through a shared session transport."""

    transport: SessionTransport
    base_url: str

    async def generate(self, payload: dict[str, object], token: str) -> httpx.Response:
        """Post a generation payload.

        The status is left to the caller so rejected submissions keep the
        provider's body.
        """
        return await self.transport.post(
            f"{self.base_url}/api/generate/v2/",
            token=token,
            json=payload,
            timeout=GENERATE_TIMEOUT_SECONDS,
        )

    async def feed(self, clip_ids: Sequence[str], token: str) -> list[dict[str, object]]:
        """Fetch clip records by id."""
        response = await self.transport.get(
            f"{self.base_url}/api/feed/",
            token=token,
            params={"ids": ",".join(clip_ids)},
        )
        response.raise_for_status()
        return response.json()
