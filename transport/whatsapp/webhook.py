"""
WhatsApp Webhook Receiver

FastAPI router that receives Twilio WhatsApp messages and answers in TwiML.
Parsing and lookups live in the responder; this module is transport only.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Config
from infra.bootstrap import get_data_source
from responder import respond
from responder.replies import INTERNAL_ERROR_MESSAGE

from .normalize import normalize_form
from .security import SignatureVerificationError, verify_signature
from .twiml import twiml_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["WhatsApp Transport"])

WEBHOOK_PATH = "/webhook/whatsapp"


# ============================================================================
# WEBHOOK RECEIVER (Message processing)
# ============================================================================

@router.post("/whatsapp")
async def whatsapp_webhook_receiver(request: Request) -> Response:
    """
    Receive a WhatsApp message via Twilio webhook.

    Flow:
    1. Read the URL-encoded form
    2. Verify signature (only if TWILIO_VALIDATE_SIGNATURE is on)
    3. Normalize to InboundMessage
    4. Parse, dispatch, look up
    5. Reply with TwiML

    Returns:
        200 text/xml TwiML, including on internal failure

    Raises:
        HTTPException(401): Missing signature (validation on)
        HTTPException(403): Invalid signature (validation on)
        HTTPException(500): Validation on but no auth token
    """

    # Step 1: Form fields (signature covers the decoded params)
    form_data = await request.form()
    form = {k: v for k, v in form_data.items() if isinstance(v, str)}

    # Step 2: Verify signature (security boundary)
    if Config.TWILIO_VALIDATE_SIGNATURE:
        try:
            verify_signature(
                request,
                form,
                Config.TWILIO_AUTH_TOKEN,
                url=Config.TWILIO_WEBHOOK_URL or None,
            )
            logger.debug("Signature verified for WhatsApp webhook")
        except HTTPException as e:
            logger.warning(f"Signature verification failed: {e.detail}")
            raise
        except SignatureVerificationError as e:
            logger.error(f"Signature error: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Signature verification unavailable"
            )

    # Step 3: Normalize
    message = normalize_form(form)
    logger.info(
        f"Received message: {message.body[:50]!r}",
        extra={
            "sender": message.sender,
            "message_sid": message.message_sid,
        }
    )

    # Step 4: Respond
    # Handlers already turn lookup failures into apologies; this guards
    # everything else so the platform always gets a 200
    try:
        reply = await respond(message.body, get_data_source())
    except Exception as e:
        logger.error(f"Unexpected error composing reply: {e}", exc_info=True)
        reply = INTERNAL_ERROR_MESSAGE

    # Step 5: TwiML reply
    return twiml_response(reply)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """
    App-level HTTPException handler.

    Any method but POST on the webhook path gets a plain-text 405 with
    Allow: POST, whatever the verb. Everything else keeps FastAPI's
    default JSON error.
    """
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and request.url.path == WEBHOOK_PATH:
        logger.debug(f"Rejected {request.method} on WhatsApp webhook")
        return PlainTextResponse(
            "Method Not Allowed",
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            headers={"Allow": "POST"},
        )
    return await http_exception_handler(request, exc)


@router.get("/whatsapp/health")
async def whatsapp_health():
    """Health check for WhatsApp webhook."""
    try:
        data_source = get_data_source()
        return {
            "status": "ok",
            "sheets_backend": data_source.name,
            "signature_validation": Config.TWILIO_VALIDATE_SIGNATURE,
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
