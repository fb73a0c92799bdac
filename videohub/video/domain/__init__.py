"""
Video Domain Layer.

Contains pure business logic and domain models for video operations.
Depends only on the standard library and bson identifiers.
"""

from .models import Video, VideoMetadata, OwnerProfile, UploadedAsset, VideoQuery, VideoPage, is_valid_identifier
from .interfaces import VideoRepository, MediaUploader, MetadataExtractor

__all__ = [
    "Video",
    "VideoMetadata",
    "OwnerProfile",
    "UploadedAsset",
    "VideoQuery",
    "VideoPage",
    "is_valid_identifier",
    "VideoRepository",
    "MediaUploader",
    "MetadataExtractor",
]
