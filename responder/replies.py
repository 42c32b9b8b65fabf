"""
Reply text: help, fallback and apologies.

Static constants only. No interpolation, so every caller gets
byte-identical text.
"""

HELP_MESSAGE = "\n".join([
    "I can help with:",
    "• order <order id> → Status, ETA and customer info.",
    "• inventory <sku or name> → Stock levels and location.",
    "• list low stock → Items below the configured threshold.",
    "Update the Orders and Inventory sheets in Google Sheets to control responses.",
])

UNRECOGNISED_PREFIX = "Sorry, I did not recognise that."

FALLBACK_MESSAGE = "\n\n".join([UNRECOGNISED_PREFIX, HELP_MESSAGE])

ORDERS_UNAVAILABLE = "Sorry, I could not reach the orders sheet."
INVENTORY_UNAVAILABLE = "Sorry, I could not reach the inventory sheet."

# Webhook-level last resort when dispatch itself blows up
INTERNAL_ERROR_MESSAGE = "Sorry, something went wrong. Please try again."

NO_LOW_STOCK_MESSAGE = "No items are below the low stock threshold."
LOW_STOCK_HEADER = "Low Stock Alerts:"


def build_help_message() -> str:
    return HELP_MESSAGE


def build_fallback_message() -> str:
    return FALLBACK_MESSAGE
