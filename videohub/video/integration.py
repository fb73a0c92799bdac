"""
Video Module Integration.

Composition root for the video resource: wires repository, upload proxy,
service, controller and routes together.
"""

import logging
from typing import Optional

from fastapi import APIRouter

from ..core.config import Config
from ..storage.manager import StorageManager

# Domain interfaces
from .domain.interfaces import VideoRepository, MediaUploader

# Infrastructure implementations
from .infrastructure.repositories import MongoVideoRepository, InMemoryVideoRepository
from .infrastructure.uploaders import S3MediaUploader
from .infrastructure.metadata_extractors import OpenCVMetadataExtractor

# Application services
from .application.video_service import VideoService

# Presentation layer
from .presentation.controllers import VideoController
from .presentation.routes import create_video_routes


class VideoModule:
    """
    Main video module that provides dependency injection and service composition.

    Any collaborator passed in explicitly is used as-is, which is how tests
    swap in the in-memory repository and a fake uploader.
    """

    def __init__(
        self,
        config: Config,
        storage_manager: Optional[StorageManager] = None,
        video_repository: Optional[VideoRepository] = None,
        media_uploader: Optional[MediaUploader] = None
    ):
        self.config = config
        self.storage_manager = storage_manager
        self.logger = logging.getLogger(__name__)

        # Infrastructure layer
        self.video_repository = video_repository or self._create_video_repository()
        self.media_uploader = media_uploader or self._create_media_uploader()

        # Application layer
        self.video_service = VideoService(
            video_repository=self.video_repository,
            media_uploader=self.media_uploader
        )

        # Presentation layer
        self.video_controller = VideoController(self.video_service, temp_dir=config.media.temp_dir)

        self.logger.info("Video module initialized successfully")

    def _create_video_repository(self) -> VideoRepository:
        """Create video repository implementation"""
        if self.config.database.backend == "memory":
            self.logger.warning("Using in-memory video repository; data is lost on restart")
            return InMemoryVideoRepository()

        if self.storage_manager is None:
            raise ValueError("A storage manager is required for the mongodb backend")
        return MongoVideoRepository(config=self.config, storage_manager=self.storage_manager)

    def _create_media_uploader(self) -> MediaUploader:
        """Create media upload proxy implementation"""
        return S3MediaUploader(self.config.media, metadata_extractor=OpenCVMetadataExtractor())

    def get_api_routes(self) -> APIRouter:
        """Get FastAPI routes for video functionality"""
        return create_video_routes(video_controller=self.video_controller)

    def get_module_status(self) -> dict:
        """Get status information about the video module"""
        return {
            "video_repository": type(self.video_repository).__name__,
            "media_uploader": type(self.media_uploader).__name__,
        }


def create_video_module(config: Config, storage_manager: Optional[StorageManager] = None) -> VideoModule:
    """Factory function to create a configured video module"""
    return VideoModule(config=config, storage_manager=storage_manager)
