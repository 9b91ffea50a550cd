"""Temporary file lifecycle management."""

import logging
import re
import time
from pathlib import Path

from clipscribe.config import get_settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def safe_filename(clip_id: str) -> str:
    """Map a clip identifier onto a single path component."""
    name = _UNSAFE_CHARS.sub("_", clip_id).strip(".")
    return name or "clip"


class TempFileManager:
    """Owns the scratch directory that downloaded clips are written to."""

    def __init__(self, base_dir: Path | None = None):
        self.base_dir = Path(base_dir or get_settings().temp_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, clip_id: str, suffix: str = ".mp4") -> Path:
        """Local path a clip is downloaded to."""
        return self.base_dir / f"{safe_filename(clip_id)}{suffix}"

    def cleanup_file(self, path: Path) -> bool:
        """Delete a scratch file. Failures are logged, never raised."""
        try:
            if path.exists():
                path.unlink()
                logger.info(f"Cleaned up temp file {path.name}")
                return True
        except OSError as e:
            logger.error(f"Cleanup failed for {path}: {e}")
        return False

    def cleanup_stale(self, ttl_seconds: int | None = None) -> int:
        """Remove files left behind by runs that never reached cleanup."""
        ttl = ttl_seconds if ttl_seconds is not None else get_settings().temp_file_ttl_seconds
        now = time.time()
        cleaned = 0
        for path in self.base_dir.iterdir():
            if not path.is_file():
                continue
            try:
                expired = now - path.stat().st_mtime > ttl
            except OSError:
                continue
            if expired and self.cleanup_file(path):
                cleaned += 1
        if cleaned:
            logger.info(f"Removed {cleaned} stale temp files from {self.base_dir}")
        return cleaned
