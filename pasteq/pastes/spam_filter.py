"""
Spam heuristics for new pastes.

Stage 2 of ingestion. An ordered list of rule objects runs over the
normalized, lower-cased title and body. Each rule returns None to pass the
sample on, or a ClassificationResult to end evaluation: a rejection with a
diagnostic reason, or (massive-paste rule only) an early accept.

Reasons are for server logs. They are never sent back to the submitter.

Rule order matters:
  1. too short
  2. too few non-trivial lines (short bodies only)
  3. anchor tag in title
  4. partial blocked title
  5. exact blocked title
  6. blocked keyword in title or body
  7. massive paste: newline floor, then early accept
  8. link-spam line ratio
  9. short blocked keyword (few normal lines only)
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from pasteq.observability.logging import get_logger
from pasteq.pastes.policy import SpamPolicy, load_spam_policy
from pasteq.pastes.types import ClassificationResult

logger = get_logger(__name__)


@dataclass
class SpamSample:
    """Lower-cased view of a submission with lazily computed line stats."""

    title: str
    body: str
    policy: SpamPolicy

    @classmethod
    def of(cls, title: str, body: str, policy: SpamPolicy) -> SpamSample:
        return cls(title=title.lower(), body=body.lower(), policy=policy)

    @cached_property
    def nontrivial_lines(self) -> list[str]:
        limit = self.policy.nontrivial_line_length
        return [line for line in self.body.split("\n") if len(line.strip()) > limit]

    @cached_property
    def link_lines(self) -> int:
        marker = self.policy.link_marker
        return sum(1 for line in self.nontrivial_lines if marker in line)

    @cached_property
    def normal_lines(self) -> int:
        return len(self.nontrivial_lines) - self.link_lines


class SpamRule:
    """One step of the pipeline. Subclasses set `name` and implement evaluate()."""

    name = "rule"

    def evaluate(self, sample: SpamSample) -> ClassificationResult | None:
        raise NotImplementedError

    def reject(self, reason: str) -> ClassificationResult:
        return ClassificationResult.reject(self.name, reason)


class MinimumLengthRule(SpamRule):
    name = "too_short"

    def evaluate(self, sample: SpamSample) -> ClassificationResult | None:
        if len(sample.body) < sample.policy.min_body_length:
            return self.reject(f"too-short content {len(sample.body)}")
        return None


class ShortBodyLinesRule(SpamRule):
    name = "too_few_lines"

    def evaluate(self, sample: SpamSample) -> ClassificationResult | None:
        policy = sample.policy
        if len(sample.body) >= policy.short_body_length:
            return None
        count = len(sample.nontrivial_lines)
        if count < policy.min_nontrivial_lines:
            return self.reject(f"too-few lines {count} (length {len(sample.body)})")
        return None


class AnchorTitleRule(SpamRule):
    name = "spam_bot_title"

    def evaluate(self, sample: SpamSample) -> ClassificationResult | None:
        if "<a href=" in sample.title:
            return self.reject("spam-bot title pattern")
        return None


class PartialTitleBlockRule(SpamRule):
    name = "blocked_partial_title"

    def evaluate(self, sample: SpamSample) -> ClassificationResult | None:
        for block in sample.policy.partial_titles:
            if block in sample.title:
                return self.reject("spam-block-partial-titles in title")
        return None


class ExactTitleBlockRule(SpamRule):
    name = "blocked_title"

    def evaluate(self, sample: SpamSample) -> ClassificationResult | None:
        if sample.title in sample.policy.titles:
            return self.reject("spam-block-titles in title")
        return None


class KeywordBlockRule(SpamRule):
    """Blocked keyphrases anywhere; the short variant only for thin pastes."""

    name = "blocked_keyword"
    short = False

    def keywords(self, policy: SpamPolicy) -> tuple[str, ...]:
        return policy.short_keywords if self.short else policy.keywords

    def applies(self, sample: SpamSample) -> bool:
        return True

    def evaluate(self, sample: SpamSample) -> ClassificationResult | None:
        keywords = self.keywords(sample.policy)
        if not keywords or not self.applies(sample):
            return None
        label = "spam-block-short-keyphrase" if self.short else "spam-block-keyphrase"
        for block in keywords:
            if block in sample.title:
                return self.reject(f"{label} in title")
            if block in sample.body:
                return self.reject(f"{label} in paste content")
        return None


class MassivePasteRule(SpamRule):
    """Huge dumps need some line structure; if they have it they skip the rest."""

    name = "massive_paste"

    def evaluate(self, sample: SpamSample) -> ClassificationResult | None:
        policy = sample.policy
        if len(sample.body) <= policy.massive_body_length:
            return None
        newlines = sample.body.count("\n")
        if newlines < policy.massive_min_newlines:
            return self.reject(
                f"massive paste with too few lines {newlines} (length {len(sample.body)})"
            )
        return ClassificationResult.accept()


class LinkRatioRule(SpamRule):
    name = "link_spambot"

    def evaluate(self, sample: SpamSample) -> ClassificationResult | None:
        link_lines = sample.link_lines
        normal_lines = sample.normal_lines
        too_few_normal = link_lines > 0 and normal_lines < sample.policy.min_normal_lines_with_links
        if link_lines >= normal_lines or too_few_normal:
            return self.reject(
                f"link spambot? {link_lines} linkLines and {normal_lines} normal lines"
            )
        return None


class ShortKeywordBlockRule(KeywordBlockRule):
    name = "blocked_short_keyword"
    short = True

    def applies(self, sample: SpamSample) -> bool:
        return sample.normal_lines < sample.policy.short_keyword_line_threshold


DEFAULT_RULES: tuple[SpamRule, ...] = (
    MinimumLengthRule(),
    ShortBodyLinesRule(),
    AnchorTitleRule(),
    PartialTitleBlockRule(),
    ExactTitleBlockRule(),
    KeywordBlockRule(),
    MassivePasteRule(),
    LinkRatioRule(),
    ShortKeywordBlockRule(),
)


class SpamClassifier:
    """
    Accept/reject a normalized submission.

    Rules are pure; one classifier instance is shared across request threads.
    """

    def __init__(
        self,
        policy: SpamPolicy | None = None,
        rules: tuple[SpamRule, ...] = DEFAULT_RULES,
    ):
        self.policy = policy if policy is not None else load_spam_policy()
        self.rules = rules

    def classify(self, title: str, body: str) -> ClassificationResult:
        sample = SpamSample.of(title, body, self.policy)
        for rule in self.rules:
            result = rule.evaluate(sample)
            if result is not None:
                logger.debug("Spam rule %s decided: accepted=%s", rule.name, result.accepted)
                return result
        return ClassificationResult.accept()
