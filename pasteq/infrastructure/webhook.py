"""
New-paste notification webhook.

Posts a short JSON summary of each accepted paste to PASTEQ_WEBHOOK_URL
(Discord/Slack style incoming webhook). Delivery is best effort: failures
are logged and counted, never raised, so they cannot change whether a
paste was accepted.
"""

from __future__ import annotations

import requests

from pasteq.config import URL_BASE, WEBHOOK_TIMEOUT_SECONDS, WEBHOOK_URL
from pasteq.observability.logging import get_logger
from pasteq.observability.telemetry import counter
from pasteq.pastes.models import Paste

logger = get_logger(__name__)


class WebhookNotifier:
    def __init__(
        self,
        url: str | None = WEBHOOK_URL,
        url_base: str = URL_BASE,
        timeout: float = WEBHOOK_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.url = url
        self.url_base = url_base
        self.timeout = timeout
        self.session = session or requests.Session()

    def payload(self, paste: Paste) -> dict[str, str]:
        kind = "Diff report" if paste.content_type == "diff" else "New paste"
        return {
            "content": (
                f"{kind} #{paste.id} ({paste.content_type}): {paste.title}\n"
                f"{self.url_base}/View/{paste.id}"
            )
        }

    def on_accepted(self, paste: Paste) -> None:
        """
        Notify about an accepted paste.

        Side Effects:
            Makes an HTTP POST when a webhook URL is configured
        """
        if not self.url:
            return

        try:
            response = self.session.post(self.url, json=self.payload(paste), timeout=self.timeout)
            if response.status_code >= 300:
                counter("webhook.failed")
                logger.warning(
                    "Webhook rejected paste %d notification: HTTP %d",
                    paste.id,
                    response.status_code,
                )
        except requests.exceptions.Timeout:
            counter("webhook.failed")
            logger.warning("Webhook timeout for paste %d", paste.id)
        except requests.exceptions.RequestException as e:
            counter("webhook.failed")
            logger.error("Webhook error for paste %d: %s", paste.id, e)
