"""
Tidings — Centralized configuration
All environment variables and constants in a single place.
"""

import os

# ── Dispatch ─────────────────────────────────────────────────────────────────

# "raise": a failing listener aborts the emit and propagates (default)
# "log": the failure is logged and delivery continues with the next listener
LISTENER_ERROR_POLICIES = ("raise", "log")
LISTENER_ERRORS = os.getenv("TIDINGS_LISTENER_ERRORS", "raise").strip().lower()

# ── Version ───────────────────────────────────────────────────────────────────

VERSION = "1.0.0"
