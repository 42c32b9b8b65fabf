"""
WhatsApp Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Only defines the contract between the Twilio webhook and the responder.
"""

from typing import Optional

from pydantic import BaseModel, Field


class InboundMessage(BaseModel):
    """
    Canonical inbound message that the responder consumes.

    Only `body` reaches the responder. Sender and SID are kept for logs.
    """

    body: str = Field(
        "",
        description="Message text from the Body field. Empty if missing."
    )
    sender: Optional[str] = Field(
        None,
        description="From field, e.g. 'whatsapp:+15551234567'"
    )
    message_sid: Optional[str] = Field(
        None,
        description="Twilio MessageSid"
    )

    class Config:
        """Pydantic config."""
        frozen = True  # Immutable - transport shouldn't mutate
