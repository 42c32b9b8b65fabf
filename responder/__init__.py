"""
Responder Module Exports

Intent parsing, lookup handlers, reply text and dispatch.
"""

from responder.dispatcher import dispatch, respond
from responder.handlers import (
    HandlerResult,
    handle_inventory,
    handle_low_stock,
    handle_order,
    lookup_inventory,
    lookup_low_stock,
    lookup_order,
)
from responder.parser import Intent, ParsedMessage, parse_message
from responder.replies import (
    FALLBACK_MESSAGE,
    HELP_MESSAGE,
    build_fallback_message,
    build_help_message,
)

__all__ = [
    # Parsing
    "Intent",
    "ParsedMessage",
    "parse_message",
    # Handlers
    "HandlerResult",
    "handle_order",
    "handle_inventory",
    "handle_low_stock",
    "lookup_order",
    "lookup_inventory",
    "lookup_low_stock",
    # Replies
    "HELP_MESSAGE",
    "FALLBACK_MESSAGE",
    "build_help_message",
    "build_fallback_message",
    # Dispatch
    "dispatch",
    "respond",
]
