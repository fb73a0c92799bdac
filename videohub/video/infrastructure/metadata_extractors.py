"""
Video Metadata Extractors.

OpenCV-based probing of uploaded video files before they leave the host.
"""

import asyncio
import logging
from typing import Optional
from pathlib import Path
import cv2

from ..domain.interfaces import MetadataExtractor
from ..domain.models import VideoMetadata


class OpenCVMetadataExtractor(MetadataExtractor):
    """OpenCV-based duration reader"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    async def extract(self, file_path: Path) -> Optional[VideoMetadata]:
        """Read the duration of a video file"""
        try:
            # Run OpenCV operations in thread pool to avoid blocking
            return await asyncio.get_running_loop().run_in_executor(
                None, self._extract_sync, Path(file_path)
            )
        except Exception as e:
            self.logger.error(f"Error extracting metadata from {file_path}: {e}")
            return None

    def _extract_sync(self, file_path: Path) -> Optional[VideoMetadata]:
        cap = None
        try:
            cap = cv2.VideoCapture(str(file_path))

            if not cap.isOpened():
                self.logger.warning(f"Could not open video file: {file_path}")
                return None

            fps = cap.get(cv2.CAP_PROP_FPS)
            frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))

            return VideoMetadata(duration_seconds=self._duration(frame_count, fps))

        except Exception as e:
            self.logger.error(f"Error in sync metadata extraction: {e}")
            return None

        finally:
            if cap is not None:
                cap.release()

    @staticmethod
    def _duration(frame_count: int, fps: float) -> float:
        """Seconds from frame count and rate; unknown rates give 0"""
        if fps <= 0 or frame_count <= 0:
            return 0.0
        return round(frame_count / fps, 3)
