"""
WhatsApp Signature Verification

SECURITY BOUNDARY - Verify Twilio X-Twilio-Signature.
No responder imports. No retries. No logic.
Only enforced when TWILIO_VALIDATE_SIGNATURE=true.
"""

from typing import Dict, Optional

from fastapi import HTTPException, Request, status
from twilio.request_validator import RequestValidator


class SignatureVerificationError(Exception):
    """Signature verification failed."""
    pass


def verify_signature(
    request: Request,
    form: Dict[str, str],
    auth_token: Optional[str],
    url: Optional[str] = None,
) -> None:
    """
    Verify Twilio's HMAC-SHA1 signature on a webhook request.

    Twilio signs the full request URL plus the sorted POST params with the
    account auth token, and sends the result in X-Twilio-Signature.

    Raises:
        HTTPException(401): Missing signature
        HTTPException(403): Invalid signature
        SignatureVerificationError: No auth token configured

    Args:
        request: FastAPI Request object
        form: Decoded form fields
        auth_token: Twilio auth token
        url: Public URL Twilio called, if it differs from request.url
            (e.g. behind a proxy)
    """
    signature = request.headers.get("X-Twilio-Signature")
    if not signature:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Twilio-Signature header"
        )

    if not auth_token:
        raise SignatureVerificationError("TWILIO_AUTH_TOKEN not configured")

    validator = RequestValidator(auth_token)
    if not validator.validate(url or str(request.url), form, signature):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid signature"
        )
