"""Shared test fixtures."""

import tempfile
from pathlib import Path

import pytest

from clipscribe.models.clip import ClipRequest
from tests.fakes import FakeCloudinary, build_pipeline, source_url


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def fake_cloud():
    return FakeCloudinary()


@pytest.fixture
def sleeps():
    """Intervals the poller asked to wait, in order."""
    return []


@pytest.fixture
def pipeline(fake_cloud, tmp_dir, sleeps):
    p = build_pipeline(fake_cloud, tmp_dir / "temp_clips", sleeps=sleeps)
    yield p
    p.close()


@pytest.fixture
def clip_request():
    return ClipRequest(
        public_id="source_clip",
        secure_url=source_url("clip1"),
        new_public_id="clip1",
        start_time=0,
        clip_duration=60,
    )
