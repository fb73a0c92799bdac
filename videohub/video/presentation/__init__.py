"""
Video Presentation Layer.

Contains HTTP controllers, request/response models, and API route definitions.
"""

from .controllers import VideoController
from .schemas import VideoResponse, VideoPageResponse, OwnerResponse
from .routes import create_video_routes

__all__ = [
    "VideoController",
    "VideoResponse",
    "VideoPageResponse",
    "OwnerResponse",
    "create_video_routes",
]
