"""
Chat session data models
"""

import uuid
from pydantic import BaseModel, Field
from typing import Literal
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """One persisted chat turn. Append-only."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    session_id: str
    role: Literal["user", "assistant"]
    content: str
    created_at: datetime = Field(default_factory=_utcnow)

    def as_turn(self) -> dict:
        """Role/content pair as sent to a response strategy"""
        return {"role": self.role, "content": self.content}
