"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import httpx
import pytest

from suno_gateway.adapters.clerk_client import ClerkClient
from suno_gateway.adapters.suno_client import SunoClient
from suno_gateway.config import Settings
from suno_gateway.containers import AppContainer
from suno_gateway.services.auth import AuthManager
from suno_gateway.services.facade import SunoFacade
from suno_gateway.services.generation import GenerationClient
from suno_gateway.services.polling import PollingController


def clip_record(
    clip_id: str, status: str = "submitted", **metadata: object
) -> dict[str, object]:
    """Build a raw Suno clip record."""
    return {
        "id": clip_id,
        "title": f"Song {clip_id}",
        "image_url": f"https://cdn.test/{clip_id}.png",
        "audio_url": f"https://cdn.test/{clip_id}.mp3",
        "video_url": "",
        "created_at": "2024-05-01T10:00:00.000Z",
        "model_name": "chirp-v3",
        "status": status,
        "metadata": {
            "prompt": "[Verse]\nla la la",
            "gpt_description_prompt": "a happy song",
            "type": "gen",
            "tags": "pop",
            "negative_tags": None,
            "duration": 120.5,
            **metadata,
        },
    }


@dataclass
class FakeClock:
    """Simulated monotonic clock; sleeping advances time instantly."""

    now: float = 1000.0
    sleeps: list[float] = field(default_factory=list)

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def lowest(low: float, high: float) -> float:
    """Deterministic stand-in for random.uniform."""
    return low


@dataclass
class FakeClerkClient(ClerkClient):
    """Fake Clerk client issuing numbered tokens."""

    metadata: object = field(default_factory=lambda: {"tags": {"latest": "5.99.0"}})
    client_payload: dict[str, object] = field(
        default_factory=lambda: {"response": {"last_active_session_id": "sess_1"}}
    )
    issued: int = 0
    token_calls: list[tuple[str, str, str | None]] = field(default_factory=list)
    client_versions: list[str] = field(default_factory=list)

    async def fetch_package_metadata(self) -> object:
        return self.metadata

    async def fetch_client(
        self, client_version: str, token: str | None = None
    ) -> dict[str, object]:
        self.client_versions.append(client_version)
        return self.client_payload

    async def create_session_token(
        self, session_id: str, client_version: str, token: str | None = None
    ) -> dict[str, object]:
        self.token_calls.append((session_id, client_version, token))
        self.issued += 1
        return {"jwt": f"jwt-{self.issued}"}


@dataclass
class FakeSunoClient(SunoClient):
    """Fake Suno client replaying scripted feed responses."""

    submit_status: int = 200
    submit_body: object = field(
        default_factory=lambda: {"clips": [clip_record("a"), clip_record("b")]}
    )
    feed_responses: list[list[dict[str, object]]] = field(default_factory=list)
    payloads: list[dict[str, object]] = field(default_factory=list)
    feed_calls: list[list[str]] = field(default_factory=list)
    tokens: list[str] = field(default_factory=list)
    clock: FakeClock | None = None
    feed_times: list[float] = field(default_factory=list)

    async def generate(self, payload: dict[str, object], token: str) -> httpx.Response:
        self.payloads.append(payload)
        self.tokens.append(token)
        return httpx.Response(self.submit_status, json=self.submit_body)

    async def feed(
        self, clip_ids: Sequence[str], token: str
    ) -> list[dict[str, object]]:
        self.feed_calls.append(list(clip_ids))
        self.tokens.append(token)
        if self.clock is not None:
            self.feed_times.append(self.clock.now)
        if len(self.feed_responses) > 1:
            return self.feed_responses.pop(0)
        return self.feed_responses[0]


@pytest.fixture
def settings() -> Settings:
    return Settings(suno_cookie="__client=cookie-value", environment="test")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def clerk_client() -> FakeClerkClient:
    return FakeClerkClient()


@pytest.fixture
def suno_client(clock: FakeClock) -> FakeSunoClient:
    return FakeSunoClient(clock=clock)


@pytest.fixture
def auth(clerk_client: FakeClerkClient, clock: FakeClock) -> AuthManager:
    return AuthManager(clerk_client=clerk_client, sleep=clock.sleep, uniform=lowest)


@pytest.fixture
def poller(auth: AuthManager, clock: FakeClock) -> PollingController:
    return PollingController(
        renew_token=auth.renew_token,
        clock=clock,
        sleep=clock.sleep,
        uniform=lowest,
    )


@pytest.fixture
def generation(
    auth: AuthManager, suno_client: FakeSunoClient, poller: PollingController
) -> GenerationClient:
    return GenerationClient(auth=auth, suno_client=suno_client, poller=poller)


@pytest.fixture
def facade(auth: AuthManager, generation: GenerationClient) -> SunoFacade:
    return SunoFacade(auth=auth, generation=generation)


@pytest.fixture
def container(settings: Settings, facade: SunoFacade) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        suno=facade,
        close_resources=close_resources,
    )
