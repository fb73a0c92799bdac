"""
Tests for the OpenCV duration reader.
"""

import asyncio

from videohub.video.infrastructure.metadata_extractors import OpenCVMetadataExtractor


def test_unreadable_file_yields_no_metadata(tmp_path):
    broken = tmp_path / "broken.mp4"
    broken.write_bytes(b"definitely not a video")

    assert asyncio.run(OpenCVMetadataExtractor().extract(broken)) is None


def test_duration_from_frames_and_rate():
    assert OpenCVMetadataExtractor._duration(300, 30.0) == 10.0
    assert OpenCVMetadataExtractor._duration(100, 3.0) == 33.333
    assert OpenCVMetadataExtractor._duration(300, 0.0) == 0.0
    assert OpenCVMetadataExtractor._duration(-1, 25.0) == 0.0
