"""Paste ingestion service: the coordinator between HTTP routes and storage.

Runs one submission per call:

    normalize -> classify -> rate check -> [diff] -> render
      -> allocate ID(s) -> persist (diff report first) -> notify

Every decision point can end in a rejection. Rejections come back as an
IngestOutcome whose `reason` is only ever logged. Nothing is allocated or
written until all rejecting checks have passed, so a request abandoned
mid-pipeline leaves no partial commit behind.

Also owns the privileged maintenance operations on stored pastes (redact,
re-render); their "not already redacted" guard is enforced here, not by
callers.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from enum import Enum

from pasteq.config import (
    HIGHLIGHT_MAX_WORKERS,
    HIGHLIGHT_TIMEOUT_SECONDS,
    MAX_PASTE_RAW_LENGTH,
    RENDERED_LENGTH_FACTOR,
    TRUST_X_FORWARDED_FOR,
)
from pasteq.infrastructure.rate_limit import PasteRateLimiter
from pasteq.infrastructure.webhook import WebhookNotifier
from pasteq.observability.logging import get_logger
from pasteq.observability.telemetry import counter, log_event, time_block
from pasteq.pastes.diff import generate_diff
from pasteq.pastes.errors import PasteNotFoundError, StorageUnavailableError
from pasteq.pastes.highlighter import ContentTypeRegistry, Highlighter, RegistryHighlighter
from pasteq.pastes.models import REDACTED_BODY, REDACTED_TITLE, Paste, utc_now
from pasteq.pastes.normalizer import normalize
from pasteq.pastes.provenance import compact_suffix, derive_provenance
from pasteq.pastes.repository import PasteRepository
from pasteq.pastes.spam_filter import SpamClassifier
from pasteq.pastes.types import (
    ConnectionInfo,
    IngestOutcome,
    IngestStage,
    PasteSubmission,
    Provenance,
)
from pasteq.utils.redaction import redact, redact_title

logger = get_logger(__name__)

DIFF_CONTENT_TYPE = "diff"
GENERATED_ORIGIN_PREFIX = "(GENERATED), "


class MaintenanceResult(str, Enum):
    """Result of a redact / re-render request."""

    REDACTED = "redacted"
    RERENDERED = "rerendered"
    UNCHANGED = "unchanged"  # re-render produced identical output, or redaction already done
    REFUSED = "refused"  # paste already redacted
    FAILED = "failed"


class PasteIngestionService:
    """
    Accepts or rejects paste submissions and commits accepted ones.

    Collaborators are injected so tests (and other deployments) can swap the
    rate limiter, highlighter or notifier.
    """

    def __init__(
        self,
        repository: PasteRepository | None = None,
        classifier: SpamClassifier | None = None,
        rate_limiter: PasteRateLimiter | None = None,
        registry: ContentTypeRegistry | None = None,
        highlighter: Highlighter | None = None,
        notifier: WebhookNotifier | None = None,
        trust_forwarded_for: bool = TRUST_X_FORWARDED_FOR,
        max_raw_length: int = MAX_PASTE_RAW_LENGTH,
        highlight_timeout: float = HIGHLIGHT_TIMEOUT_SECONDS,
    ):
        self.repository = repository or PasteRepository()
        self.classifier = classifier or SpamClassifier()
        self.rate_limiter = rate_limiter or PasteRateLimiter()
        self.registry = registry or ContentTypeRegistry()
        self.highlighter = highlighter or RegistryHighlighter(self.registry)
        self.notifier = notifier or WebhookNotifier()
        self.trust_forwarded_for = trust_forwarded_for
        self.max_raw_length = max_raw_length
        self.highlight_timeout = highlight_timeout
        self._executor = ThreadPoolExecutor(
            max_workers=HIGHLIGHT_MAX_WORKERS, thread_name_prefix="pasteq-highlight"
        )

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def ingest(
        self,
        submission: PasteSubmission,
        connection: ConnectionInfo,
        editing: Paste | None = None,
    ) -> IngestOutcome:
        """
        Run one submission through the pipeline.

        Args:
            submission: form values (already checked for presence/duplicates)
            connection: socket and proxy-header metadata
            editing: the paste being revised, if the caller already loaded it;
                otherwise `submission.editing_id` is looked up

        Returns:
            IngestOutcome (accepted with the new paste ID, or rejected)

        Raises:
            StorageUnavailableError: ID allocation or a write failed
        """
        provenance = derive_provenance(connection, self.trust_forwarded_for)
        sender = provenance.sender + compact_suffix(submission.compact, submission.compact_v2)
        logger.info("Attempted paste from %s", redact(provenance.origin))

        def rejected(stage: IngestStage, reason: str) -> IngestOutcome:
            return self._reject(stage, reason, provenance, submission)

        if editing is None and submission.editing_id is not None:
            editing = self.repository.get_by_id(submission.editing_id)
            if editing is None:
                return rejected(IngestStage.RECEIVED, "edit of unlisted ID")

        content_type = self.registry.get(submission.content_type)
        if content_type is None:
            return rejected(IngestStage.CONTENT_TYPE, f"unknown type {submission.content_type}")

        cleaned = normalize(
            submission.title, submission.body, content_type.display_name, self.max_raw_length
        )

        classification = self.classifier.classify(cleaned.title, cleaned.body)
        if not classification.accepted:
            return rejected(IngestStage.CLASSIFIED, classification.reason)

        if not self.rate_limiter.admit(provenance.origin):
            return rejected(IngestStage.RATE_CHECKED, "spam (rate limited)")

        diff_text: str | None = None
        if editing is not None:
            diff = generate_diff(editing.raw_body, cleaned.body)
            if not diff.has_differences:
                return rejected(IngestStage.DIFFED, "edits nothing")
            # Diff reports share the raw length cap
            diff_text = diff.text[: self.max_raw_length]

        rendered = self._render(content_type.name, cleaned.body)
        if rendered is None:
            return rejected(IngestStage.RENDERED, "format failed")
        if len(rendered) > self.max_raw_length * RENDERED_LENGTH_FACTOR:
            return rejected(IngestStage.RENDERED, "massive formatted-content length")

        rendered_diff: str | None = None
        if diff_text is not None:
            rendered_diff = self._render(DIFF_CONTENT_TYPE, diff_text)
            if rendered_diff is None:
                return rejected(IngestStage.RENDERED, "diff format failed")
            if len(rendered_diff) > self.max_raw_length * RENDERED_LENGTH_FACTOR:
                return rejected(IngestStage.RENDERED, "massive formatted diff length")

        # Past this point the submission is accepted; only storage can fail.
        now = utc_now()
        paste = Paste(
            id=self.repository.allocate_next(),
            title=cleaned.title,
            content_type=content_type.name,
            origin=sender,
            created_at=now,
            raw_body=cleaned.body,
            rendered_body=rendered,
            supersedes=editing.id if editing is not None else 0,
        )

        to_commit: list[Paste] = []
        if diff_text is not None and rendered_diff is not None and editing is not None:
            diff_paste = Paste(
                id=self.repository.allocate_next(),
                title=f"Diff Report Between Paste #{paste.id} and #{editing.id}",
                content_type=DIFF_CONTENT_TYPE,
                origin=GENERATED_ORIGIN_PREFIX + sender,
                created_at=now,
                raw_body=diff_text,
                rendered_body=rendered_diff,
                supersedes=paste.id,
            )
            paste.diff_report_id = diff_paste.id
            to_commit.append(diff_paste)
        to_commit.append(paste)

        # Diff report first, so a reader never sees a dangling diff_report_id.
        for record in to_commit:
            self.repository.upsert(record)

        notified = [record.id for record in to_commit if self._notify(record)]

        counter("paste.accepted")
        log_event(
            "paste.accepted",
            paste_id=paste.id,
            diff_report_id=paste.diff_report_id or None,
            content_type=paste.content_type,
            origin=redact(provenance.origin),
        )
        logger.info("Accepted new paste: %d (%s)", paste.id, redact_title(paste.title))

        return IngestOutcome(
            accepted=True,
            stage=IngestStage.ACCEPTED,
            paste_id=paste.id,
            diff_report_id=paste.diff_report_id or None,
            compact=submission.compact,
            compact_v2=submission.compact_v2,
            notified=notified,
        )

    def _reject(
        self,
        stage: IngestStage,
        reason: str,
        provenance: Provenance,
        submission: PasteSubmission,
    ) -> IngestOutcome:
        counter("paste.rejected")
        counter(f"paste.rejected.{stage.value}")
        log_event(
            "paste.rejected",
            stage=stage.value,
            reason=reason,
            origin=redact(provenance.origin),
        )
        logger.warning("Refused paste: %s", reason)
        return IngestOutcome(
            accepted=False,
            stage=stage,
            reason=reason,
            compact=submission.compact,
            compact_v2=submission.compact_v2,
        )

    def _render(self, content_type: str, raw: str) -> str | None:
        """Highlight with a deadline; timeouts and errors count as failure (None)."""
        with time_block("paste.render"):
            future = self._executor.submit(self.highlighter.render, content_type, raw)
            try:
                return future.result(timeout=self.highlight_timeout)
            except FuturesTimeoutError:
                future.cancel()
                counter("paste.render_timeout")
                logger.warning(
                    "Highlighter timed out after %.1fs for %s", self.highlight_timeout, content_type
                )
                return None
            except Exception as e:
                logger.error("Highlighter raised for %s: %s", content_type, e)
                return None

    def _notify(self, paste: Paste) -> bool:
        try:
            self.notifier.on_accepted(paste)
            return True
        except Exception as e:
            counter("paste.notify_failed")
            logger.warning("Notification hook failed for paste %d: %s", paste.id, e)
            return False

    # ------------------------------------------------------------------
    # Maintenance (privileged)
    # ------------------------------------------------------------------

    def get_paste(self, paste_id: int) -> Paste:
        paste = self.repository.get_by_id(paste_id)
        if paste is None:
            raise PasteNotFoundError(paste_id)
        return paste

    def redact(self, paste_id: int, actor: str) -> MaintenanceResult:
        """
        Replace a paste's content with the removed-spam placeholder.

        A second call on the same paste changes nothing: the first snapshot
        in `redacted_original` is kept and the paste is not rewritten.

        Side Effects:
            - Upserts the redacted paste
        """
        try:
            paste = self.get_paste(paste_id)
            if paste.is_redacted:
                logger.info("Paste %d already redacted, ignoring request from %s", paste_id, actor)
                return MaintenanceResult.UNCHANGED

            rendered = self._render("text", REDACTED_BODY)
            if rendered is None:
                logger.error("Failed to render placeholder while redacting paste %d", paste_id)
                return MaintenanceResult.FAILED

            redacted = paste.model_copy(
                update={
                    "content_type": "text",
                    "title": REDACTED_TITLE,
                    "raw_body": REDACTED_BODY,
                    "rendered_body": rendered,
                    "redacted_original": paste.redacted_original
                    or f"{paste.title}\n\n{paste.raw_body}",
                }
            )
            self.repository.upsert(redacted)
        except (PasteNotFoundError, StorageUnavailableError) as e:
            logger.error("Failed to redact paste %d: %s", paste_id, e)
            return MaintenanceResult.FAILED

        counter("paste.redacted")
        log_event("paste.redacted", paste_id=paste_id, actor=actor)
        logger.info("paste %d removed by logged in staff - %s", paste_id, actor)
        return MaintenanceResult.REDACTED

    def rerender(self, paste_id: int, actor: str) -> MaintenanceResult:
        """
        Re-apply the highlighter to a stored paste's raw body.

        Writes only when the output differs (ignoring trailing whitespace).
        Redacted pastes are refused.
        """
        try:
            paste = self.get_paste(paste_id)
            if paste.is_redacted:
                logger.info("Refused rerender of redacted paste %d for %s", paste_id, actor)
                return MaintenanceResult.REFUSED

            logger.info("Rerender paste %d on behalf of staff %s", paste_id, actor)
            if not self.registry.is_known(paste.content_type):
                logger.error("Paste %d has unknown type %s", paste_id, paste.content_type)
                return MaintenanceResult.FAILED

            rendered = self._render(paste.content_type, paste.raw_body)
            if rendered is None:
                logger.error("Failed to rerender paste %d", paste_id)
                return MaintenanceResult.FAILED

            if paste.rendered_body.rstrip() == rendered.rstrip():
                return MaintenanceResult.UNCHANGED

            logger.info(
                "Updating paste %d (was %d now %d)...",
                paste_id,
                len(paste.rendered_body),
                len(rendered),
            )
            self.repository.upsert(paste.model_copy(update={"rendered_body": rendered}))
        except (PasteNotFoundError, StorageUnavailableError) as e:
            logger.error("Failed to rerender paste %d: %s", paste_id, e)
            return MaintenanceResult.FAILED

        counter("paste.rerendered")
        log_event("paste.rerendered", paste_id=paste_id, actor=actor)
        return MaintenanceResult.RERENDERED
