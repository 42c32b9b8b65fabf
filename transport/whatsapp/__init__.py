"""WhatsApp Transport Layer - Module Exports"""

from .normalize import normalize_form
from .schemas import InboundMessage
from .security import SignatureVerificationError, verify_signature
from .twiml import build_twiml, twiml_response
from .webhook import WEBHOOK_PATH, method_not_allowed_handler, router

__all__ = [
    # Schemas
    "InboundMessage",
    # Normalization
    "normalize_form",
    # Security
    "verify_signature",
    "SignatureVerificationError",
    # Reply
    "build_twiml",
    "twiml_response",
    # Router
    "router",
    "method_not_allowed_handler",
    "WEBHOOK_PATH",
]
