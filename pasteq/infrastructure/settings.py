"""
Application-wide settings and environment configuration
"""

from __future__ import annotations

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
PASTEQ_ROOT = Path(__file__).parent.parent

# Environment
ENV = os.getenv("PASTEQ_ENV", "development")

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Public base URL used in compact (micro v2) responses
URL_BASE = os.getenv("PASTEQ_URL_BASE", "http://localhost:8000").rstrip("/")

# Only honour X-Forwarded-For when running behind a known proxy
TRUST_X_FORWARDED_FOR = os.getenv("PASTEQ_TRUST_X_FORWARDED_FOR", "false").lower() == "true"

# Spam policy file (blocklists and thresholds)
SPAM_RULES_PATH = Path(
    os.getenv("PASTEQ_SPAM_RULES_PATH", str(PROJECT_ROOT / "config" / "spam_rules.yaml"))
)

# New-paste notification webhook (optional)
WEBHOOK_URL = os.getenv("PASTEQ_WEBHOOK_URL")


def is_production() -> bool:
    """Check if running in production"""
    return ENV == "production"
