"""Unit tests for loading the spam policy from YAML"""

from __future__ import annotations

from pathlib import Path

from pasteq.pastes.policy import SpamPolicy, load_spam_policy

SHIPPED_RULES = Path(__file__).parents[2] / "config" / "spam_rules.yaml"


def test_missing_file_uses_defaults(tmp_path):
    policy = load_spam_policy(tmp_path / "nope.yaml")

    assert policy == SpamPolicy()
    assert policy.partial_titles == ()


def test_blocklists_lower_cased_and_thresholds_overridden(tmp_path):
    rules = tmp_path / "rules.yaml"
    rules.write_text(
        "blocklists:\n"
        "  partial_titles: ['Buy CHEAP']\n"
        "  short_keywords: ['Viagra', '']\n"
        "thresholds:\n"
        "  min_body_length: 50\n"
        "  short_keyword_line_threshold: 12\n"
    )

    policy = load_spam_policy(rules)

    assert policy.partial_titles == ("buy cheap",)
    assert policy.short_keywords == ("viagra",)
    assert policy.min_body_length == 50
    assert policy.short_keyword_line_threshold == 12
    assert policy.short_body_length == 1024


def test_unknown_threshold_ignored():
    policy = SpamPolicy.from_mapping({"thresholds": {"not_a_threshold": 3}})

    assert policy == SpamPolicy()


def test_empty_document_gives_defaults():
    assert SpamPolicy.from_mapping(None) == SpamPolicy()


def test_shipped_rules_file_loads():
    policy = load_spam_policy(SHIPPED_RULES)

    assert "untitled" in policy.titles
    assert policy.massive_body_length == 100 * 1024


def test_unknown_top_level_section_ignored():
    policy = SpamPolicy.from_mapping({"notes": {"owner": "ops"}, "titles": ["Untitled"]})

    assert policy == SpamPolicy(titles=("untitled",))
    assert not hasattr(policy, "extra")
