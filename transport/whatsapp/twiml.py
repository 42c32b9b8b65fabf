"""
TwiML Reply Composer

Wraps plain reply text into Twilio's <Response><Message> envelope.
Escaping is left to the twilio library.
"""

from fastapi.responses import Response
from twilio.twiml.messaging_response import MessagingResponse

TWIML_CONTENT_TYPE = "text/xml"


def build_twiml(text: str) -> str:
    """Single-message TwiML document for `text`."""
    twiml = MessagingResponse()
    twiml.message(text)
    return str(twiml)


def twiml_response(text: str) -> Response:
    """HTTP 200 text/xml response carrying `text` as one message."""
    return Response(
        content=build_twiml(text),
        status_code=200,
        headers={"Content-Type": TWIML_CONTENT_TYPE},
    )
