"""Forwards processed clips to the workflow webhook."""

import logging

import httpx

from clipscribe.models.clip import ProcessedResult
from clipscribe.models.errors import DispatchError

logger = logging.getLogger(__name__)


class ResultDispatcher:
    """POSTs ProcessedResult payloads to a configured webhook URL."""

    def __init__(self, webhook_url: str, client: httpx.Client, timeout_seconds: float = 30.0):
        self.webhook_url = webhook_url
        self.client = client
        self.timeout_seconds = timeout_seconds

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def dispatch(self, result: ProcessedResult) -> bool:
        """Send the result. Returns False when no webhook is configured."""
        if not self.enabled:
            logger.warning(f"No webhook configured, not forwarding {result.clip_id}")
            return False

        logger.info(f"Sending {result.clip_id} to webhook")
        try:
            response = self.client.post(
                self.webhook_url, json=result.to_wire(), timeout=self.timeout_seconds
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DispatchError(
                f"Webhook responded with HTTP {e.response.status_code}",
                details={"clip_id": result.clip_id, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise DispatchError(
                f"Webhook request failed: {e}", details={"clip_id": result.clip_id}
            ) from e

        logger.info(f"Forwarded {result.clip_id} to webhook")
        return True
