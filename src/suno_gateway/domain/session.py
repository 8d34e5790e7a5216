"""Domain model for the Clerk browser session."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    """Snapshot of the authenticated Clerk session."""

    session_id: str
    client_version: str
    token: str | None = None
