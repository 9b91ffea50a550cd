"""Clip pipeline: fetch -> upload -> poll -> compose URL -> cleanup."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

import httpx

from clipscribe.config import Settings, get_settings
from clipscribe.media.cloudinary import CloudinaryConfig, MediaPipelineClient
from clipscribe.media.fetcher import RemoteFetcher
from clipscribe.models.clip import (
    ClipRequest,
    ProcessedResult,
    TranscriptTextStatus,
    raw_clip_id,
)
from clipscribe.models.errors import ClipscribeError, ProcessingError, ValidationError
from clipscribe.models.pipeline import (
    BatchItemError,
    BatchItemResult,
    BatchOutcome,
    ClipRun,
    ClipStage,
)
from clipscribe.pipeline.dispatcher import ResultDispatcher
from clipscribe.pipeline.poller import CancellationToken, TranscriptPoller
from clipscribe.storage.temp_store import TempFileManager

logger = logging.getLogger(__name__)


class ClipPipeline:
    """Runs clips through the transcription pipeline, one at a time."""

    def __init__(
        self,
        temp_store: TempFileManager,
        fetcher: RemoteFetcher,
        media: MediaPipelineClient,
        poller: TranscriptPoller,
        dispatcher: ResultDispatcher,
        http_client: httpx.Client | None = None,
    ):
        self.temp_store = temp_store
        self.fetcher = fetcher
        self.media = media
        self.poller = poller
        self.dispatcher = dispatcher
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ClipPipeline":
        """Wire the default collaborators around one shared HTTP client."""
        settings = settings or get_settings()
        client = httpx.Client(timeout=settings.http_timeout_seconds)
        temp_store = TempFileManager(settings.temp_dir)
        media = MediaPipelineClient(CloudinaryConfig.from_settings(settings), client)
        return cls(
            temp_store=temp_store,
            fetcher=RemoteFetcher(client, temp_store),
            media=media,
            poller=TranscriptPoller(
                media,
                max_attempts=settings.transcript_max_attempts,
                interval_seconds=settings.transcript_poll_interval_seconds,
            ),
            dispatcher=ResultDispatcher(
                settings.webhook_url, client, timeout_seconds=settings.webhook_timeout_seconds
            ),
            http_client=client,
        )

    def close(self) -> None:
        if self._http_client is not None:
            self._http_client.close()

    def process_clip(
        self,
        request: ClipRequest,
        token: CancellationToken | None = None,
        run: ClipRun | None = None,
    ) -> ProcessedResult:
        """Run one clip to DONE or FAILED.

        Strict ordering: validate -> fetch -> upload -> poll -> compose -> text.
        The downloaded file is removed on every path once fetch has succeeded.
        """
        token = token or CancellationToken()
        run = run or ClipRun()
        run.started_at = datetime.now(UTC)
        self._advance(run, ClipStage.RECEIVED)

        try:
            source_url, clip_id = self._validate(request)
            run.clip_id = clip_id

            token.raise_if_cancelled(clip_id)
            self._advance(run, ClipStage.FETCHING)
            downloaded = self.fetcher.fetch(source_url, clip_id)
            run.local_path = str(downloaded.path)

            try:
                token.raise_if_cancelled(clip_id)
                self._advance(run, ClipStage.UPLOADING)
                outcome = self.media.submit(downloaded.path, clip_id)

                self._advance(run, ClipStage.POLLING)
                self.poller.wait_until_ready(outcome.transcript_public_id, token)

                self._advance(run, ClipStage.COMPOSING_URL)
                subtitled_url = self.media.compose_subtitled_url(
                    outcome.public_id, outcome.transcript_public_id
                )

                self._advance(run, ClipStage.FETCHING_TEXT)
                transcript_text, text_status = self._fetch_text(outcome.transcript_public_id)
            finally:
                self._advance(run, ClipStage.CLEANUP)
                self.temp_store.cleanup_file(downloaded.path)

        except ClipscribeError as e:
            self._fail(run, e.message)
            raise
        except Exception as e:
            self._fail(run, str(e))
            raise ProcessingError(f"Pipeline failed: {e}") from e

        result = ProcessedResult(
            clip_id=clip_id,
            video_public_id=outcome.public_id,
            transcript_public_id=outcome.transcript_public_id,
            video_url=outcome.secure_url,
            video_with_subtitles_url=subtitled_url,
            duration=outcome.duration,
            format=outcome.format,
            transcript_text=transcript_text,
            transcript_status=text_status,
            original_clip_data=request.passthrough(),
        )
        self._advance(run, ClipStage.DONE)
        run.completed_at = run.updated_at
        return result

    def process_and_dispatch(
        self,
        request: ClipRequest,
        token: CancellationToken | None = None,
        run: ClipRun | None = None,
    ) -> ProcessedResult:
        """Process a clip, then forward it. Dispatch only follows DONE."""
        result = self.process_clip(request, token, run)
        self.dispatcher.dispatch(result)
        return result

    def process_batch(
        self, entries: Iterable[Any], token: CancellationToken | None = None
    ) -> BatchOutcome:
        """Process clips sequentially; one clip's failure never stops the batch.

        Entries may be ClipRequests or raw JSON values. A raw entry that does
        not validate becomes an error record for that entry alone.
        """
        token = token or CancellationToken()
        entries = list(entries)
        outcome = BatchOutcome()
        logger.info(f"Batch processing: {len(entries)} clips")

        for entry in entries:
            clip_id = raw_clip_id(entry)
            if token.cancelled:
                outcome.errors.append(
                    BatchItemError(clip_id=clip_id, error="Batch cancelled before processing")
                )
                continue
            try:
                result = self.process_and_dispatch(ClipRequest.from_payload(entry), token)
            except ClipscribeError as e:
                logger.error(f"Failed to process clip {clip_id}: {e.message}")
                outcome.errors.append(BatchItemError(clip_id=clip_id, error=e.message))
                continue
            outcome.results.append(
                BatchItemResult(
                    clip_id=result.clip_id,
                    video_with_subtitles_url=result.video_with_subtitles_url,
                )
            )

        logger.info(f"Batch finished: {outcome.processed} processed, {outcome.failed} failed")
        return outcome

    def _validate(self, request: ClipRequest) -> tuple[str, str]:
        if not request.source_url:
            raise ValidationError("Missing video URL (secure_url or url) in request")
        if not request.clip_id:
            raise ValidationError("Missing public_id or new_public_id in request")
        return request.source_url, request.clip_id

    def _fetch_text(self, transcript_public_id: str) -> tuple[str, TranscriptTextStatus]:
        try:
            text = self.media.fetch_transcript_text(transcript_public_id)
        except httpx.HTTPError as e:
            logger.warning(f"Could not fetch transcript text for {transcript_public_id}: {e}")
            return "", TranscriptTextStatus.UNAVAILABLE
        return text, TranscriptTextStatus.FETCHED

    def _advance(self, run: ClipRun, stage: ClipStage) -> None:
        run.stage = stage
        run.history.append(stage)
        run.updated_at = datetime.now(UTC)
        logger.info(f"[{run.clip_id or '-'}] {stage.value}")

    def _fail(self, run: ClipRun, message: str) -> None:
        run.error = message
        self._advance(run, ClipStage.FAILED)
        run.completed_at = run.updated_at
