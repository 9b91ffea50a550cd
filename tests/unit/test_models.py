"""Tests for all Pydantic data models."""

import pytest

from clipscribe.models.clip import (
    ClipRequest,
    ProcessedResult,
    TranscriptTextStatus,
    UploadOutcome,
    raw_clip_id,
)
from clipscribe.models.errors import (
    ClipscribeError,
    DispatchError,
    ErrorResponse,
    FetchError,
    ProcessingError,
    TranscriptTimeoutError,
    UploadError,
    ValidationError,
    describe_validation_errors,
)
from clipscribe.models.pipeline import BatchItemError, BatchItemResult, BatchOutcome, ClipRun
from clipscribe.models.responses import ClipFailureResponse, ClipProcessedData, ClipSuccessResponse

# --- ClipRequest ---


class TestClipRequest:
    def test_secure_url_preferred(self):
        req = ClipRequest(secure_url="https://a/x.mp4", url="https://b/x.mp4")
        assert req.source_url == "https://a/x.mp4"

    def test_url_fallback(self):
        assert ClipRequest(url="https://b/x.mp4").source_url == "https://b/x.mp4"

    def test_clip_id_prefers_new_public_id(self):
        assert ClipRequest(public_id="old", new_public_id="new").clip_id == "new"
        assert ClipRequest(public_id="old").clip_id == "old"
        assert ClipRequest().clip_id is None

    def test_extra_fields_kept(self):
        req = ClipRequest.model_validate({"secure_url": "https://a/x.mp4", "campaign": "autumn"})
        assert req.passthrough() == {"secure_url": "https://a/x.mp4", "campaign": "autumn"}

    def test_passthrough_omits_unsent_fields(self):
        assert "start_time" not in ClipRequest(public_id="p").passthrough()

    def test_immutable(self):
        req = ClipRequest(public_id="p")
        with pytest.raises(Exception):
            req.public_id = "q"

    def test_numeric_ids_coerced_to_str(self):
        req = ClipRequest.model_validate({"secure_url": "https://a/x.mp4", "new_public_id": 42})
        assert req.new_public_id == "42"
        assert req.clip_id == "42"


class TestClipRequestFromPayload:
    def test_valid_dict(self):
        req = ClipRequest.from_payload({"url": "https://b/x.mp4", "public_id": "p"})
        assert req.clip_id == "p"

    def test_existing_request_returned_as_is(self):
        req = ClipRequest(public_id="p")
        assert ClipRequest.from_payload(req) is req

    def test_wrong_field_type(self):
        with pytest.raises(ValidationError, match="start_time") as exc_info:
            ClipRequest.from_payload({"new_public_id": "clip2", "start_time": "soon"})
        assert exc_info.value.details["clip_id"] == "clip2"

    @pytest.mark.parametrize("payload", [None, "clip", 7, ["clip"]])
    def test_non_object_rejected(self, payload):
        with pytest.raises(ValidationError, match="must be a JSON object"):
            ClipRequest.from_payload(payload)


class TestRawClipId:
    @pytest.mark.parametrize(
        "payload,expected",
        [
            ({"new_public_id": "n", "public_id": "p"}, "n"),
            ({"public_id": "p"}, "p"),
            ({"new_public_id": 2}, "2"),
            ({"new_public_id": {"nested": 1}, "public_id": "p"}, "p"),
            ({"new_public_id": ""}, None),
            ({}, None),
            (["not", "a", "dict"], None),
            (ClipRequest(public_id="p"), "p"),
        ],
    )
    def test_raw_clip_id(self, payload, expected):
        assert raw_clip_id(payload) == expected


# --- UploadOutcome / ProcessedResult ---


class TestUploadOutcome:
    def test_immutable(self):
        outcome = UploadOutcome(
            public_id="processed_clips/c",
            secure_url="https://x",
            transcript_public_id="processed_clips/c.transcript",
        )
        with pytest.raises(Exception):
            outcome.public_id = "other"


class TestProcessedResult:
    def _result(self, **overrides):
        fields = dict(
            clip_id="c",
            video_public_id="processed_clips/c",
            transcript_public_id="processed_clips/c.transcript",
            video_url="https://x/c.mp4",
            video_with_subtitles_url="https://x/subs/c",
        )
        fields.update(overrides)
        return ProcessedResult(**fields)

    def test_wire_format_is_camel_case(self):
        wire = self._result().to_wire()
        assert wire["videoWithSubtitlesUrl"] == "https://x/subs/c"
        assert wire["transcriptText"] == ""
        assert wire["transcriptStatus"] == "fetched"
        assert "video_with_subtitles_url" not in wire

    def test_degraded(self):
        assert not self._result().degraded
        assert self._result(transcript_status=TranscriptTextStatus.UNAVAILABLE).degraded

    def test_empty_subtitled_url_rejected(self):
        with pytest.raises(Exception):
            self._result(video_with_subtitles_url="")


# --- Pipeline ---


class TestClipRun:
    def test_defaults(self):
        run = ClipRun()
        assert run.stage == "received"
        assert run.history == []
        assert run.error is None


class TestBatchOutcome:
    def test_counts_follow_items(self):
        outcome = BatchOutcome(
            results=[BatchItemResult(clip_id="a", video_with_subtitles_url="https://x/a")],
            errors=[BatchItemError(clip_id="b", error="boom")],
        )
        assert outcome.processed == 1
        assert outcome.failed == 1

    def test_wire_format(self):
        outcome = BatchOutcome(
            results=[BatchItemResult(clip_id="a", video_with_subtitles_url="https://x/a")]
        )
        wire = outcome.to_wire()
        assert wire == {
            "success": True,
            "processed": 1,
            "failed": 0,
            "results": [
                {"clipId": "a", "status": "success", "videoWithSubtitlesUrl": "https://x/a"}
            ],
            "errors": [],
        }


# --- Responses ---


class TestResponses:
    def test_success_response(self):
        resp = ClipSuccessResponse(
            data=ClipProcessedData(
                clip_id="c", video_with_subtitles_url="https://x", transcript_public_id="t"
            )
        )
        wire = resp.to_wire()
        assert wire["success"] is True
        assert wire["message"] == "Clip processed successfully"
        assert wire["data"]["clipId"] == "c"

    def test_failure_response(self):
        wire = ClipFailureResponse(error="boom", clip_data={"public_id": "p"}).to_wire()
        assert wire["success"] is False
        assert wire["clipData"] == {"public_id": "p"}


# --- Errors ---


class TestErrors:
    def test_clipscribe_error(self):
        err = ClipscribeError("something failed", component="test")
        assert str(err) == "something failed"
        assert err.component == "test"

    def test_validation_error(self):
        err = ValidationError("missing url", details={"field": "secure_url"})
        assert err.component == "validation"

    @pytest.mark.parametrize(
        "err, component",
        [
            (FetchError("download failed"), "fetcher"),
            (UploadError("rejected"), "media"),
            (DispatchError("webhook down"), "dispatcher"),
            (ProcessingError("boom"), "pipeline"),
        ],
    )
    def test_components(self, err, component):
        assert err.component == component

    def test_transcript_timeout_error(self):
        err = TranscriptTimeoutError("processed_clips/c.transcript", 15)
        assert err.transcript_public_id == "processed_clips/c.transcript"
        assert err.attempts == 15
        assert "processed_clips/c.transcript" in err.message

    def test_error_response_from_exception(self):
        err = ValidationError("bad body", details={"field": "clips"})
        resp = ErrorResponse.from_exception(err, guidance="Fix it", retry=False)
        assert resp.error_type == "ValidationError"
        assert resp.component == "validation"
        assert resp.actionable_guidance == "Fix it"

    def test_error_response_serialization(self):
        resp = ErrorResponse(
            error_type="ValidationError",
            message="bad body",
            component="validation",
        )
        json_str = resp.model_dump_json()
        restored = ErrorResponse.model_validate_json(json_str)
        assert restored == resp

    def test_describe_validation_errors(self):
        errors = [
            {"loc": ("body", "start_time"), "msg": "Input should be a valid number"},
            {"loc": ("body",), "msg": "Input should be a valid dictionary"},
            {"loc": ("clips", 1), "msg": "Field required"},
        ]
        assert describe_validation_errors(errors) == (
            "start_time: Input should be a valid number; "
            "Input should be a valid dictionary; "
            "clips.1: Field required"
        )
