"""Single entry point for callers of the Suno client."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from suno_gateway.adapters.clerk_client import HttpxClerkClient
from suno_gateway.adapters.session_transport import SessionTransport
from suno_gateway.adapters.suno_client import HttpxSunoClient
from suno_gateway.config import Settings
from suno_gateway.domain.clips import DEFAULT_MODEL, Clip, GenerationRequest
from suno_gateway.services.auth import AuthManager
from suno_gateway.services.generation import GenerationClient
from suno_gateway.services.polling import PollingController

_logger = logging.getLogger(__name__)


@dataclass
class SunoFacade:
    """Bootstraps the session once, then serves generation calls.

    One instance holds one session. Calls must not overlap; embedders that
    need concurrency serialize access or build one facade per session.
    """

    auth: AuthManager
    generation: GenerationClient
    transport: SessionTransport | None = None
    default_model: str = DEFAULT_MODEL
    _ready: bool = field(default=False, init=False)

    @classmethod
    def create(cls, settings: Settings) -> "SunoFacade":
        """Build a facade and its collaborators from settings."""
        if not settings.has_cookie:
            _logger.warning("Environment does not contain SUNO_COOKIE.")
        transport = SessionTransport.create(settings.suno_cookie)
        auth = AuthManager(
            clerk_client=HttpxClerkClient(
                transport=transport,
                clerk_base_url=settings.clerk_base_url,
                jsdelivr_base_url=settings.jsdelivr_base_url,
            )
        )
        generation = GenerationClient(
            auth=auth,
            suno_client=HttpxSunoClient(
                transport=transport, base_url=settings.suno_base_url
            ),
            poller=PollingController(renew_token=auth.renew_token),
        )
        return cls(
            auth=auth,
            generation=generation,
            transport=transport,
            default_model=settings.default_model,
        )

    @property
    def ready(self) -> bool:
        return self._ready

    async def init(self) -> "SunoFacade":
        """Bootstrap the session unless that already succeeded."""
        if not self._ready:
            await self.auth.bootstrap()
            self._ready = True
        return self

    async def generate(
        self,
        prompt: str,
        make_instrumental: bool = False,
        model: str | None = None,
        wait_audio: bool = False,
    ) -> list[Clip]:
        """Generate songs from a free-form description."""
        request = GenerationRequest(
            prompt=prompt,
            make_instrumental=make_instrumental,
            model=model or self.default_model,
            wait_audio=wait_audio,
        )
        await self.init()
        return await self.generation.generate(request)

    async def custom_generate(  # noqa: PLR0913
        self,
        prompt: str,
        tags: str,
        title: str,
        make_instrumental: bool = False,
        model: str | None = None,
        wait_audio: bool = False,
        negative_tags: str | None = None,
    ) -> list[Clip]:
        """Generate songs from explicit lyrics, style tags and title."""
        request = GenerationRequest(
            prompt=prompt,
            is_custom=True,
            tags=tags,
            title=title,
            negative_tags=negative_tags,
            make_instrumental=make_instrumental,
            model=model or self.default_model,
            wait_audio=wait_audio,
        )
        await self.init()
        return await self.generation.generate(request)

    async def get(self, clip_ids: Sequence[str]) -> list[Clip]:
        """Return the current state of previously submitted clips."""
        await self.init()
        return await self.generation.fetch_by_ids(clip_ids)

    async def close(self) -> None:
        """Close the shared HTTP session."""
        if self.transport is not None:
            await self.transport.close()
