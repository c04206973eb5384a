"""
Spam policy: blocklists and numeric thresholds for the spam rules.

Defaults here match the production tuning. Any value can be overridden in
config/spam_rules.yaml (or the file named by PASTEQ_SPAM_RULES_PATH).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from pasteq.config import SPAM_RULES_PATH
from pasteq.observability.logging import get_logger

logger = get_logger(__name__)

_BLOCKLIST_KEYS = ("partial_titles", "titles", "keywords", "short_keywords")


@dataclass(frozen=True)
class SpamPolicy:
    """Configurable inputs of the spam rules. Blocklists are stored lower-cased."""

    # Blocklists
    partial_titles: tuple[str, ...] = ()
    titles: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    short_keywords: tuple[str, ...] = ()

    # Length / line thresholds
    min_body_length: int = 100
    short_body_length: int = 1024
    min_nontrivial_lines: int = 3
    nontrivial_line_length: int = 5

    # Massive pastes skip the link and short-keyword rules
    massive_body_length: int = 100 * 1024
    massive_min_newlines: int = 20

    # Link-spam shape
    min_normal_lines_with_links: int = 4
    link_marker: str = "http"

    # Short-keyword rule only applies below this many normal lines
    # TODO: recalibrate against the rejected-paste log; 20 was picked by hand
    short_keyword_line_threshold: int = 20

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> SpamPolicy:
        """Build a policy from a parsed YAML mapping; unknown top-level sections are logged and ignored."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}

        blocklists = data.pop("blocklists", None) or {}
        for key in _BLOCKLIST_KEYS:
            values = blocklists.get(key, data.pop(key, None)) or []
            kwargs[key] = tuple(str(v).lower() for v in values if str(v).strip())

        thresholds = data.pop("thresholds", None) or {}
        for key, value in thresholds.items():
            if key in known and key not in _BLOCKLIST_KEYS:
                kwargs[key] = type(getattr(cls, key))(value)
            else:
                logger.warning("Ignoring unknown spam threshold %r", key)

        for key in data:
            if key not in known:
                logger.warning("Ignoring unknown spam policy section %r", key)

        return cls(**kwargs)


def load_spam_policy(path: Path | None = None) -> SpamPolicy:
    """
    Load the spam policy from YAML.

    A missing file is not an error: the built-in defaults with empty
    blocklists apply.
    """
    if path is None:
        path = SPAM_RULES_PATH

    if not path.exists():
        logger.warning("Spam rules not found at %s, using defaults", path)
        return SpamPolicy()

    with open(path, encoding="utf-8") as f:
        policy = SpamPolicy.from_mapping(yaml.safe_load(f))

    logger.info(
        "Spam policy loaded: %d partial titles, %d titles, %d keywords, %d short keywords",
        len(policy.partial_titles),
        len(policy.titles),
        len(policy.keywords),
        len(policy.short_keywords),
    )
    return policy
