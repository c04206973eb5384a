"""Centralized configuration for the pasteq backend.

Re-exports everything from pasteq.infrastructure.settings so existing imports
continue to work, then adds typed constants for database, ingestion limits,
highlighting, rate-limiting, and webhook settings.  Environment variable
overrides use safe defaults so the app starts without extra env configuration.
"""

from __future__ import annotations

import os

from pasteq.infrastructure.settings import *  # noqa: F401, F403 re-export existing

# --- App ---
APP_VERSION: str = "1.0.0"

# --- Database ---
DB_POOL_SIZE: int = int(os.getenv("PASTEQ_DB_POOL_SIZE", "5"))
DB_POOL_TIMEOUT: float = float(os.getenv("PASTEQ_DB_POOL_TIMEOUT", "5.0"))
DB_CONNECT_TIMEOUT: float = float(os.getenv("PASTEQ_DB_CONNECT_TIMEOUT", "30.0"))
DB_TEMP_CONN_MAX: int = int(os.getenv("PASTEQ_DB_TEMP_CONN_MAX", "10"))
DB_RETRY_MAX: int = int(os.getenv("PASTEQ_DB_RETRY_MAX", "5"))
DB_RETRY_BASE_DELAY: float = float(os.getenv("PASTEQ_DB_RETRY_BASE_DELAY", "0.1"))
DB_RETRY_MAX_DELAY: float = float(os.getenv("PASTEQ_DB_RETRY_MAX_DELAY", "2.0"))
DB_RETRY_JITTER: float = float(os.getenv("PASTEQ_DB_RETRY_JITTER", "0.1"))

# --- Ingestion ---
MAX_PASTE_RAW_LENGTH: int = int(os.getenv("PASTEQ_MAX_PASTE_RAW_LENGTH", str(5 * 1024 * 1024)))
MAX_TITLE_LENGTH: int = 200
RENDERED_LENGTH_FACTOR: int = 5
MAX_FORM_VALUE_LENGTH: int = 30 * 1024 * 1024

# --- Highlighting ---
HIGHLIGHT_TIMEOUT_SECONDS: float = float(os.getenv("PASTEQ_HIGHLIGHT_TIMEOUT", "10.0"))
HIGHLIGHT_MAX_WORKERS: int = int(os.getenv("PASTEQ_HIGHLIGHT_WORKERS", "4"))

# --- Rate Limiting (paste submissions per origin) ---
RATE_LIMIT_PASTES_PM: int = int(os.getenv("PASTEQ_RATE_LIMIT_PER_MINUTE", "10"))
RATE_LIMIT_PASTES_PH: int = int(os.getenv("PASTEQ_RATE_LIMIT_PER_HOUR", "100"))
RATE_LIMIT_MAX_ORIGINS: int = 10000

# --- Webhook ---
WEBHOOK_TIMEOUT_SECONDS: float = float(os.getenv("PASTEQ_WEBHOOK_TIMEOUT", "5.0"))
