"""
Video Domain Interfaces.

Abstract interfaces that define contracts for video operations.
These interfaces allow dependency inversion - domain logic doesn't depend on infrastructure.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union
from pathlib import Path

from .models import Video, VideoQuery, VideoPage, UploadedAsset, VideoMetadata


class VideoRepository(ABC):
    """Abstract repository for video documents"""

    @abstractmethod
    async def list_published(self, query: VideoQuery) -> VideoPage:
        """Published videos matching the query, joined to their owners"""
        pass

    @abstractmethod
    async def get_by_id(self, video_id: str) -> Optional[Video]:
        """Get a video without resolving its owner"""
        pass

    @abstractmethod
    async def get_with_owner(self, video_id: str) -> Optional[Video]:
        """Get a video with the owner's public profile attached"""
        pass

    @abstractmethod
    async def create(self, video: Video) -> Video:
        """Insert a new video and return it with id and timestamps set"""
        pass

    @abstractmethod
    async def save(self, video: Video) -> Video:
        """Persist the mutable fields of an existing video"""
        pass

    @abstractmethod
    async def delete(self, video_id: str) -> bool:
        """Hard delete a video"""
        pass


class MediaUploader(ABC):
    """
    Upload proxy for the remote media storage.

    Implementations must remove the local file on every exit path and must
    never raise: a failed upload is reported as ``None``.
    """

    @abstractmethod
    async def upload(self, local_path: Optional[Union[str, Path]]) -> Optional[UploadedAsset]:
        """Upload a local temp file and return its remote descriptor"""
        pass


class MetadataExtractor(ABC):
    """Abstract media metadata extractor"""

    @abstractmethod
    async def extract(self, file_path: Path) -> Optional[VideoMetadata]:
        """Extract metadata from a video file"""
        pass
