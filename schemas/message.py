"""Squad chat message schema."""

from datetime import datetime

from pydantic import BaseModel, Field


class Message(BaseModel):
    """Chat message as shown in the feed."""
    id: str = Field(..., description="Message identifier")
    user: str = Field("Unknown", description="Sender name")
    text: str = Field("", description="Message body")
    time: datetime = Field(..., description="When the message was sent (local time)")
