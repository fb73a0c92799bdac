"""
Video Module for VideoHub.

The video resource: listing, publishing, reading, updating, deleting and
toggling the publish status of videos, following clean architecture layers.
"""

from .domain.models import Video, VideoQuery, VideoPage, OwnerProfile, UploadedAsset
from .application.video_service import VideoService
from .integration import VideoModule, create_video_module

__all__ = ["Video", "VideoQuery", "VideoPage", "OwnerProfile", "UploadedAsset", "VideoService", "VideoModule", "create_video_module"]
