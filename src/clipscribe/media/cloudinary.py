"""Cloudinary client: uploads, resource lookups and delivery URLs."""

import logging
from pathlib import Path

import cloudinary.api
import cloudinary.uploader
import httpx
from cloudinary.exceptions import Error as CloudinaryError
from cloudinary.exceptions import NotFound
from cloudinary.utils import cloudinary_url
from pydantic import BaseModel, Field

from clipscribe.config import Settings
from clipscribe.models.clip import UploadOutcome
from clipscribe.models.errors import UploadError

logger = logging.getLogger(__name__)

SUBTITLE_STYLE = {
    "flags": "layer_apply",
    "color": "#FFFFFF",
    "background": "rgb:000000",
    "gravity": "south",
    "y": 50,
}


class CloudinaryConfig(BaseModel):
    """Credentials and naming conventions for one Cloudinary account."""

    cloud_name: str = Field(..., min_length=1)
    api_key: str
    api_secret: str
    folder: str = "processed_clips"
    raw_convert: str = "google_speech:srt:vtt"

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryConfig":
        return cls(
            cloud_name=settings.cloudinary_cloud_name or "unconfigured",
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.upload_folder,
            raw_convert=settings.raw_convert,
        )

    def credentials(self) -> dict[str, str]:
        """Account options passed on every SDK call."""
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }


class MediaPipelineClient:
    """The parts of Cloudinary the clip pipeline uses.

    Uploads and Admin API lookups go through the Cloudinary SDK (`uploader`
    and `admin_api` default to `cloudinary.uploader` and `cloudinary.api`).
    The transcript file itself is downloaded with httpx.
    """

    def __init__(
        self,
        config: CloudinaryConfig,
        client: httpx.Client,
        uploader=cloudinary.uploader,
        admin_api=cloudinary.api,
    ):
        self.config = config
        self.client = client
        self._uploader = uploader
        self._admin_api = admin_api

    def transcript_public_id(self, clip_id: str) -> str:
        """Id the provider will give the generated transcript.

        Cloudinary does not return this at upload time; it is derived from
        its naming convention for raw_convert output.
        """
        return f"{self.config.folder}/{clip_id}.transcript"

    def submit(self, file_path: Path, clip_id: str) -> UploadOutcome:
        """Upload a video and request subtitle generation alongside it."""
        logger.info(f"Uploading {clip_id} to {self.config.folder} with transcription")
        try:
            with open(file_path, "rb") as f:
                result = self._uploader.upload(
                    f,
                    resource_type="video",
                    folder=self.config.folder,
                    public_id=clip_id,
                    raw_convert=self.config.raw_convert,
                    **self.config.credentials(),
                )
        except CloudinaryError as e:
            raise UploadError(f"Upload rejected: {e}", details={"clip_id": clip_id}) from e
        except OSError as e:
            raise UploadError(
                f"Could not read {file_path}: {e}", details={"clip_id": clip_id}
            ) from e

        try:
            outcome = UploadOutcome(
                public_id=result["public_id"],
                secure_url=result["secure_url"],
                duration=result.get("duration"),
                format=result.get("format"),
                transcript_public_id=self.transcript_public_id(clip_id),
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise UploadError(
                f"Unexpected upload response: {e}", details={"clip_id": clip_id}
            ) from e

        logger.info(f"Uploaded {outcome.public_id}")
        return outcome

    def resource_exists(self, public_id: str, resource_type: str = "raw") -> bool:
        """Admin API lookup. Provider errors other than NotFound propagate."""
        try:
            self._admin_api.resource(
                public_id, resource_type=resource_type, **self.config.credentials()
            )
        except NotFound:
            return False
        return True

    def compose_subtitled_url(self, video_public_id: str, transcript_public_id: str) -> str:
        """Delivery URL for the video with its transcript burned in as subtitles."""
        url, _ = cloudinary_url(
            video_public_id,
            resource_type="video",
            secure=True,
            transformation=[
                {
                    "overlay": {"resource_type": "subtitles", "public_id": transcript_public_id},
                    **SUBTITLE_STYLE,
                }
            ],
            cloud_name=self.config.cloud_name,
        )
        return url

    def transcript_download_url(self, transcript_public_id: str) -> str:
        """Signed attachment URL for the raw transcript file."""
        url, _ = cloudinary_url(
            transcript_public_id,
            resource_type="raw",
            flags="attachment",
            secure=True,
            sign_url=True,
            cloud_name=self.config.cloud_name,
            api_secret=self.config.api_secret,
        )
        return url

    def fetch_transcript_text(self, transcript_public_id: str) -> str:
        response = self.client.get(
            self.transcript_download_url(transcript_public_id), follow_redirects=True
        )
        response.raise_for_status()
        return response.text
