"""
Configuration for the marketplace sale service.

All settings are loaded from environment variables once, at import time.
"""

import os
from typing import List

# --- Numeric configuration ---
# Width of the unsigned balance type used for prices and payments.
BALANCE_BITS = int(os.environ.get("MARKETPLACE_BALANCE_BITS", "128"))
BALANCE_MAX = 2**BALANCE_BITS - 1

# Listed and purchased quantities are always unsigned 128-bit.
QUANTITY_MAX = 2**128 - 1

# Minimum balance an account must retain after a keep-alive transfer.
EXISTENTIAL_DEPOSIT = int(os.environ.get("MARKETPLACE_EXISTENTIAL_DEPOSIT", "1"))

# --- Application configuration ---
APP_NAME = "Marketplace Sale Service"
APP_VERSION = "1.0.0"
LOG_LEVEL = os.environ.get("MARKETPLACE_LOG_LEVEL", "INFO").upper()
SEED_ON_STARTUP = os.environ.get("MARKETPLACE_SEED_ON_STARTUP", "1") == "1"

# Notifications kept in memory; the oldest are dropped past this many.
EVENT_LOG_SIZE = int(os.environ.get("MARKETPLACE_EVENT_LOG_SIZE", "10000"))


def validate_config() -> List[str]:
    """
    Validate configuration.
    Returns list of error messages (empty if valid).
    """
    errors = []

    if BALANCE_BITS < 8:
        errors.append(f"MARKETPLACE_BALANCE_BITS must be at least 8, got {BALANCE_BITS}")

    if EXISTENTIAL_DEPOSIT < 0:
        errors.append("MARKETPLACE_EXISTENTIAL_DEPOSIT must not be negative")
    elif EXISTENTIAL_DEPOSIT > BALANCE_MAX:
        errors.append("MARKETPLACE_EXISTENTIAL_DEPOSIT exceeds the balance type")

    if EVENT_LOG_SIZE < 1:
        errors.append(f"MARKETPLACE_EVENT_LOG_SIZE must be at least 1, got {EVENT_LOG_SIZE}")

    if LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"MARKETPLACE_LOG_LEVEL '{LOG_LEVEL}' is not a logging level")

    return errors
