"""
WhatsApp Input Normalization

PURE CONVERSION - NO LOGIC

Converts decoded Twilio webhook form fields into InboundMessage.
- Body text read from "Body", falling back to "body"
- Everything else ignored except From / MessageSid (logging only)
- No trimming here; the parser owns whitespace handling
"""

from typing import Mapping

from .schemas import InboundMessage


def normalize_form(form: Mapping[str, str]) -> InboundMessage:
    """
    Convert webhook form fields into InboundMessage.

    Args:
        form: Decoded form fields (string values only)

    Returns:
        InboundMessage ready for the responder
    """
    body = form.get("Body")
    if body is None:
        body = form.get("body", "")

    return InboundMessage(
        body=body,
        sender=form.get("From") or None,
        message_sid=form.get("MessageSid") or None,
    )
