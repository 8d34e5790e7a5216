"""Generation requests and clip status lookups."""

import json
import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass

import httpx

from suno_gateway.adapters.suno_client import SunoClient
from suno_gateway.domain.clips import Clip, GenerationRequest, PollOutcome, Submission
from suno_gateway.domain.errors import (
    GenerationSubmissionError,
    UnexpectedResponseError,
)
from suno_gateway.services.auth import AuthManager
from suno_gateway.services.polling import PollingController

_logger = logging.getLogger(__name__)


@dataclass
class GenerationClient:
    """Submits generation requests and reads clip status."""

    auth: AuthManager
    suno_client: SunoClient
    poller: PollingController

    async def submit(self, request: GenerationRequest) -> Submission:
        """Submit a request and return the clips Suno created."""
        await self.auth.renew_token(delay=False)
        payload = build_payload(request)
        _logger.info(
            "generate payload: %s",
            json.dumps({"request": asdict(request), "payload": payload}),
        )
        response = await self.suno_client.generate(payload, self.auth.require_token())
        body = _response_body(response)
        _logger.info("generate response (%s): %s", response.status_code, body)
        if response.status_code != 200:
            raise GenerationSubmissionError(response.status_code, body)
        clips = body.get("clips") if isinstance(body, dict) else None
        if not isinstance(clips, list) or not clips:
            raise UnexpectedResponseError(
                f"Generate response did not include clips: {body!r}"
            )
        return Submission(clips=[project_clip(record) for record in clips])

    async def fetch_by_ids(self, clip_ids: Sequence[str]) -> list[Clip]:
        """Return the current state of the given clips."""
        records = await self.suno_client.feed(clip_ids, self.auth.require_token())
        if not isinstance(records, list):
            raise UnexpectedResponseError(f"Feed response is not a list: {records!r}")
        return [project_clip(record) for record in records]

    async def generate(self, request: GenerationRequest) -> list[Clip]:
        """Submit a request, optionally waiting until the audio is available."""
        submission = await self.submit(request)
        if request.wait_audio:
            outcome = await self.wait_for_clips(submission.clip_ids)
            return outcome.clips
        await self.auth.renew_token(delay=False)
        return submission.clips

    async def wait_for_clips(self, clip_ids: Sequence[str]) -> PollOutcome:
        """Poll the given clips until they resolve or the deadline passes."""
        return await self.poller.wait(clip_ids, fetch=self.fetch_by_ids)


def build_payload(request: GenerationRequest) -> dict[str, object]:
    """Build the Suno generate payload for a request."""
    payload: dict[str, object] = {
        "make_instrumental": request.make_instrumental,
        "mv": request.model,
        "prompt": "",
        "generation_type": "TEXT",
    }
    if request.is_custom:
        payload["tags"] = request.tags
        payload["title"] = request.title
        payload["negative_tags"] = request.negative_tags
        payload["prompt"] = request.prompt
    else:
        payload["gpt_description_prompt"] = request.prompt
    return payload


def project_clip(record: dict[str, object]) -> Clip:
    """Map a raw Suno clip record onto a Clip."""
    clip_id = record.get("id") if isinstance(record, dict) else None
    if not clip_id:
        raise UnexpectedResponseError(f"Clip record has no id: {record!r}")
    metadata = record.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}
    return Clip(
        id=str(clip_id),
        title=record.get("title"),
        image_url=record.get("image_url"),
        lyric=metadata.get("prompt"),
        audio_url=record.get("audio_url"),
        video_url=record.get("video_url"),
        created_at=record.get("created_at"),
        model_name=record.get("model_name"),
        status=record.get("status") or "submitted",
        gpt_description_prompt=metadata.get("gpt_description_prompt"),
        prompt=metadata.get("prompt"),
        type=metadata.get("type"),
        tags=metadata.get("tags"),
        negative_tags=metadata.get("negative_tags"),
        duration=metadata.get("duration"),
    )


def _response_body(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return response.text
