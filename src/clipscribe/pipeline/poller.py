"""Fixed-interval polling for asynchronously generated transcripts."""

import logging
import threading
from collections.abc import Callable

from cloudinary.exceptions import Error as CloudinaryError

from clipscribe.media.cloudinary import MediaPipelineClient
from clipscribe.models.errors import PipelineCancelledError, TranscriptTimeoutError

logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe flag a caller sets to stop in-flight work."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to `seconds`, returning early (True) if cancelled."""
        return self._event.wait(seconds)

    def raise_if_cancelled(self, what: str = "") -> None:
        if self.cancelled:
            message = f"Processing was cancelled ({what})" if what else "Processing was cancelled"
            raise PipelineCancelledError(message)


class TranscriptPoller:
    """Waits for a provider resource to exist.

    Every failed lookup, whether NotFound or any other provider error, counts as
    "not ready yet". There is no backoff and no wait after the last attempt.
    """

    def __init__(
        self,
        media: MediaPipelineClient,
        max_attempts: int = 15,
        interval_seconds: float = 5.0,
        sleep: Callable[[float], None] | None = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.media = media
        self.max_attempts = max_attempts
        self.interval_seconds = interval_seconds
        self._sleep = sleep

    def wait_until_ready(
        self, transcript_public_id: str, token: CancellationToken | None = None
    ) -> int:
        """Return the number of lookups it took for the resource to appear."""
        token = token or CancellationToken()
        logger.info(f"Waiting for transcript: {transcript_public_id}")

        for attempt in range(1, self.max_attempts + 1):
            token.raise_if_cancelled(f"polling {transcript_public_id}")
            if self._check(transcript_public_id):
                logger.info(f"Transcript ready: {transcript_public_id} (attempt {attempt})")
                return attempt
            if attempt < self.max_attempts:
                logger.info(
                    f"Attempt {attempt}/{self.max_attempts} - "
                    f"waiting {self.interval_seconds:g}s..."
                )
                self._pause(token)

        raise TranscriptTimeoutError(transcript_public_id, self.max_attempts)

    def _check(self, transcript_public_id: str) -> bool:
        try:
            return self.media.resource_exists(transcript_public_id, resource_type="raw")
        except CloudinaryError as e:
            logger.debug(f"Transcript lookup failed, treating as not ready: {e}")
            return False

    def _pause(self, token: CancellationToken) -> None:
        if self._sleep is not None:
            self._sleep(self.interval_seconds)
        else:
            token.wait(self.interval_seconds)
