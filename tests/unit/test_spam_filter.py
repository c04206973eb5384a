"""Unit tests for the spam heuristics

Tests cover:
- Length and line-count floors
- Title and keyword blocklists (case-insensitive)
- Link-ratio boundary
- Massive-paste early accept
- Short-keyword rule gating
"""

from __future__ import annotations

import pytest

from pasteq.pastes.policy import SpamPolicy
from pasteq.pastes.spam_filter import SpamClassifier


def lines(count: int, text: str = "plain line of paste content") -> list[str]:
    return [f"{text} {i}" for i in range(count)]


def link_lines(count: int) -> list[str]:
    return [f"see http://example.com/page/{i} for details" for i in range(count)]


def body_of(*groups: list[str]) -> str:
    return "\n".join(line for group in groups for line in group)


@pytest.fixture
def classifier(spam_policy):
    return SpamClassifier(policy=spam_policy)


def test_ordinary_paste_accepted(classifier, ordinary_body):
    result = classifier.classify("Server crash", ordinary_body())

    assert result.accepted
    assert result.reason == ""


def test_body_under_100_characters_rejected(classifier):
    result = classifier.classify("Title", "x" * 99)

    assert not result.accepted
    assert result.rule == "too_short"


def test_short_body_needs_three_nontrivial_lines(classifier):
    result = classifier.classify("Title", "a" * 60 + "\n" + "b" * 60)

    assert not result.accepted
    assert result.rule == "too_few_lines"


def test_lines_of_five_characters_are_trivial(classifier):
    result = classifier.classify("Title", "abcde\n" * 30)

    assert not result.accepted
    assert result.rule == "too_few_lines"


def test_three_nontrivial_lines_accepted(classifier):
    body = body_of(lines(3, "a somewhat longer line of ordinary paste text"))

    assert classifier.classify("Title", body).accepted


def test_anchor_tag_in_title_rejected(classifier, ordinary_body):
    result = classifier.classify('<A HREF="http://spam">deal</a>', ordinary_body())

    assert not result.accepted
    assert result.rule == "spam_bot_title"


def test_partial_title_block_is_case_insensitive(classifier, ordinary_body):
    result = classifier.classify("BUY CHEAP watches", ordinary_body())

    assert not result.accepted
    assert result.rule == "blocked_partial_title"


def test_exact_title_block_only_matches_whole_title(classifier, ordinary_body):
    assert classifier.classify("Untitled", ordinary_body()).rule == "blocked_title"
    assert classifier.classify("Untitled server log", ordinary_body()).accepted


def test_keyword_in_body_rejected(classifier, ordinary_body):
    body = ordinary_body() + "\nuse CASINO-BONUS-CODE at checkout"

    result = classifier.classify("Title", body)

    assert not result.accepted
    assert result.rule == "blocked_keyword"
    assert "content" in result.reason


def test_keyword_in_title_rejected(classifier, ordinary_body):
    result = classifier.classify("casino-bonus-code inside", ordinary_body())

    assert result.rule == "blocked_keyword"
    assert "title" in result.reason


def test_four_links_five_normal_lines_accepted(classifier):
    assert classifier.classify("Title", body_of(link_lines(4), lines(5))).accepted


def test_five_links_five_normal_lines_rejected(classifier):
    result = classifier.classify("Title", body_of(link_lines(5), lines(5)))

    assert not result.accepted
    assert result.rule == "link_spambot"


def test_five_links_four_normal_lines_rejected(classifier):
    result = classifier.classify("Title", body_of(link_lines(5), lines(4)))

    assert result.rule == "link_spambot"


def test_one_link_needs_four_normal_lines(classifier):
    assert classifier.classify("Title", body_of(link_lines(1), lines(3))).rule == "link_spambot"
    assert classifier.classify("Title", body_of(link_lines(1), lines(4))).accepted


def test_uppercase_link_marker_counts(classifier):
    shouting = ["VISIT HTTP://EXAMPLE.COM NOW " + str(i) for i in range(5)]

    assert classifier.classify("Title", body_of(shouting, lines(5))).rule == "link_spambot"


def test_massive_paste_with_twenty_newlines_skips_link_rules(classifier):
    # 21 lines of ~7.3 KiB: about 150 KiB, every line a link
    line = "http://spam.example/" + "a" * 7300
    body = "\n".join([line] * 21)
    assert len(body) > 150 * 1024 - 1024
    assert body.count("\n") == 20

    assert classifier.classify("Title", body).accepted


def test_massive_paste_skips_short_keyword_rule(classifier):
    line = "viagra " + "a" * 7300
    body = "\n".join([line] * 21)

    assert classifier.classify("Title", body).accepted


def test_massive_paste_with_too_few_newlines_rejected(classifier):
    body = "\n".join(["a" * 7500] * 20)

    result = classifier.classify("Title", body)

    assert not result.accepted
    assert result.rule == "massive_paste"


def test_short_keyword_rejected_for_thin_paste(classifier):
    body = body_of(lines(10), ["cheap viagra shipped overnight"])

    result = classifier.classify("Title", body)

    assert not result.accepted
    assert result.rule == "blocked_short_keyword"


def test_short_keyword_allowed_in_long_paste(classifier):
    body = body_of(lines(25), ["a log line mentioning viagra"])

    assert classifier.classify("Title", body).accepted


def test_short_keyword_rule_inactive_without_short_keywords():
    classifier = SpamClassifier(policy=SpamPolicy(keywords=("unused",)))
    body = body_of(lines(10), ["cheap viagra shipped overnight"])

    assert classifier.classify("Title", body).accepted


def test_rules_run_in_order(classifier):
    # Too short and a blocked title: the length floor wins
    result = classifier.classify("Untitled", "short")

    assert result.rule == "too_short"
