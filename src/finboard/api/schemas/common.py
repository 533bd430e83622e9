"""Shared response envelopes."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Envelope for responses that carry only a message."""

    success: bool = True
    message: str
