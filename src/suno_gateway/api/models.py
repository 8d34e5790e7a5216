"""Pydantic models for generate endpoint payloads."""

from pydantic import BaseModel, Field


class GenerateBody(BaseModel):
    """Request body for description-based generation."""

    prompt: str
    make_instrumental: bool = False
    model: str | None = None
    wait_audio: bool = False


class CustomGenerateBody(GenerateBody):
    """Request body for custom mode: lyrics in ``prompt`` plus tags and title."""

    tags: str = Field(min_length=1)
    title: str = Field(min_length=1)
    negative_tags: str | None = None


class ErrorBody(BaseModel):
    """Error payload returned to API callers."""

    error: str
