"""Dependency container wiring for the application."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from suno_gateway.config import Settings
from suno_gateway.services.facade import SunoFacade


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    suno: SunoFacade
    close_resources: Callable[[], Awaitable[None]]
    suno_lock: asyncio.Lock = field(default_factory=asyncio.Lock)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    suno = SunoFacade.create(resolved_settings)

    async def close_resources() -> None:
        await suno.close()

    return AppContainer(
        settings=resolved_settings,
        suno=suno,
        close_resources=close_resources,
    )
