"""
Intent Parser

PURE CLASSIFICATION - NO I/O, NO STATE

Turns raw message text into a ParsedMessage. Rules are checked in a fixed
order and the first match wins. Every input classifies; nothing raises.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Intent(str, Enum):
    """What the sender is asking for."""

    ORDER = "order"
    INVENTORY = "inventory"
    LOW_STOCK = "low-stock"
    HELP = "help"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParsedMessage:
    """
    Classified message.

    Invariants:
    - argument is never the empty string (None instead)
    - low-stock and help carry no argument
    """

    intent: Intent
    argument: Optional[str] = None


ORDER_PREFIX = "order "
INVENTORY_PREFIX = "inventory "
LOW_STOCK_PHRASES = ("low stock", "list low stock")
HELP_WORDS = ("help", "menu", "start")

_ORDER_ID_RE = re.compile(r"[0-9]+")


def _strip_prefix(trimmed: str, lowered: str, prefix: str) -> Optional[str]:
    """
    Return the text after `prefix`, trimmed, or None if the prefix is absent.

    The keyword alone also counts: trimming has already eaten any spaces
    that followed it, so "order   " arrives here as "order".
    """
    if lowered.startswith(prefix):
        return trimmed[len(prefix):].strip()
    if lowered == prefix.rstrip():
        return ""
    return None


def parse_message(raw_text: Optional[str]) -> ParsedMessage:
    """
    Classify one inbound message.

    Args:
        raw_text: Message body as received, may be None or empty

    Returns:
        ParsedMessage with intent and optional argument
    """
    if not raw_text:
        return ParsedMessage(Intent.UNKNOWN)

    trimmed = raw_text.strip()
    lowered = trimmed.lower()

    for prefix, intent in ((ORDER_PREFIX, Intent.ORDER), (INVENTORY_PREFIX, Intent.INVENTORY)):
        argument = _strip_prefix(trimmed, lowered, prefix)
        if argument is not None:
            return ParsedMessage(intent, argument) if argument else ParsedMessage(Intent.HELP)

    if lowered in LOW_STOCK_PHRASES:
        return ParsedMessage(Intent.LOW_STOCK)

    if lowered in HELP_WORDS:
        return ParsedMessage(Intent.HELP)

    if _ORDER_ID_RE.fullmatch(trimmed):
        return ParsedMessage(Intent.ORDER, trimmed)

    # Kept for diagnostics only; never shown back to the sender
    return ParsedMessage(Intent.UNKNOWN, trimmed or None)
