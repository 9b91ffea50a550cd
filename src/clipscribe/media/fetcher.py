"""Streams source clips to the scratch directory."""

import logging

import httpx

from clipscribe.models.clip import DownloadedClip
from clipscribe.models.errors import FetchError
from clipscribe.storage.temp_store import TempFileManager

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class RemoteFetcher:
    """Downloads a clip URL into a file named after the clip identifier.

    No retries: the first network or disk failure raises FetchError. A
    partially written file is removed before raising, so callers only
    own a file once fetch() has returned.
    """

    def __init__(self, client: httpx.Client, temp_store: TempFileManager):
        self.client = client
        self.temp_store = temp_store

    def fetch(self, url: str, clip_id: str) -> DownloadedClip:
        path = self.temp_store.path_for(clip_id)
        logger.info(f"Downloading clip {clip_id} from {url}")

        written = 0
        try:
            with self.client.stream("GET", url, follow_redirects=True) as response:
                response.raise_for_status()
                with open(path, "wb") as f:
                    for chunk in response.iter_bytes(CHUNK_SIZE):
                        f.write(chunk)
                        written += len(chunk)
        except httpx.HTTPStatusError as e:
            self.temp_store.cleanup_file(path)
            raise FetchError(
                f"Download failed with HTTP {e.response.status_code}: {url}",
                details={"clip_id": clip_id, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            self.temp_store.cleanup_file(path)
            raise FetchError(f"Download failed: {e}", details={"clip_id": clip_id}) from e
        except OSError as e:
            self.temp_store.cleanup_file(path)
            raise FetchError(
                f"Could not write clip to {path}: {e}", details={"clip_id": clip_id}
            ) from e

        logger.info(f"Downloaded {clip_id} ({written} bytes)")
        return DownloadedClip(clip_id=clip_id, path=path, size_bytes=written)
