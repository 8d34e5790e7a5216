"""Domain models for generation requests and clips."""

from dataclasses import dataclass, field
from enum import StrEnum

DEFAULT_MODEL = "chirp-v3-5"

READY_STATUSES = frozenset({"streaming", "complete"})
ERROR_STATUS = "error"


@dataclass(frozen=True)
class GenerationRequest:
    """Immutable generation request.

    In custom mode ``prompt`` carries the lyrics and ``tags``/``title`` are
    required. Otherwise ``prompt`` is a free-form song description.
    """

    prompt: str
    is_custom: bool = False
    tags: str | None = None
    title: str | None = None
    negative_tags: str | None = None
    make_instrumental: bool = False
    model: str = DEFAULT_MODEL
    wait_audio: bool = False

    def __post_init__(self) -> None:
        if self.is_custom and (not self.tags or not self.title):
            raise ValueError("Custom mode requires tags and title")


@dataclass(frozen=True)
class Clip:
    """One generated audio clip as observed from the provider."""

    id: str
    title: str | None = None
    image_url: str | None = None
    lyric: str | None = None
    audio_url: str | None = None
    video_url: str | None = None
    created_at: str | None = None
    model_name: str | None = None
    status: str = "submitted"
    gpt_description_prompt: str | None = None
    prompt: str | None = None
    type: str | None = None
    tags: str | None = None
    negative_tags: str | None = None
    duration: float | None = None

    @property
    def is_ready(self) -> bool:
        """Return true when the clip can be played."""
        return self.status in READY_STATUSES

    @property
    def is_error(self) -> bool:
        return self.status == ERROR_STATUS


@dataclass(frozen=True)
class Submission:
    """Clips created by a single generation call."""

    clips: list[Clip] = field(default_factory=list)

    @property
    def clip_ids(self) -> list[str]:
        """Return clip identifiers in submission order."""
        return [clip.id for clip in self.clips]


class PollState(StrEnum):
    """Polling state of a submitted batch."""

    WAITING = "waiting"
    RESOLVED = "resolved"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class PollOutcome:
    """Last observed clips for a batch and how polling ended."""

    clips: list[Clip]
    state: PollState
    polls: int = 0

    @property
    def timed_out(self) -> bool:
        return self.state is PollState.TIMED_OUT
