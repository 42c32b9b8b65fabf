"""
Dispatch: ParsedMessage -> reply text.

Total over Intent. The parser runs exactly once per message, in respond();
dispatch() never re-parses an argument.
"""

import logging
from typing import Optional

from services.sheets import SheetsDataSource

from .handlers import handle_inventory, handle_low_stock, handle_order
from .parser import Intent, ParsedMessage, parse_message
from .replies import build_fallback_message, build_help_message

logger = logging.getLogger(__name__)


async def dispatch(parsed: ParsedMessage, data_source: SheetsDataSource) -> str:
    if parsed.intent is Intent.ORDER:
        if parsed.argument:
            return await handle_order(parsed.argument, data_source)
        return build_help_message()

    if parsed.intent is Intent.INVENTORY:
        if parsed.argument:
            return await handle_inventory(parsed.argument, data_source)
        return build_help_message()

    if parsed.intent is Intent.LOW_STOCK:
        return await handle_low_stock(data_source)

    if parsed.intent is Intent.HELP:
        return build_help_message()

    return build_fallback_message()


async def respond(raw_text: Optional[str], data_source: SheetsDataSource) -> str:
    """Parse one inbound message body and produce the reply text."""
    parsed = parse_message(raw_text)
    logger.info(f"Classified message as {parsed.intent.value}")
    return await dispatch(parsed, data_source)
