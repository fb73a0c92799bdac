"""
Video HTTP Controllers.

Handle HTTP requests and responses for video operations.
"""

import logging
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile

from ...api.models import ApiResponse
from ..application.video_service import VideoService
from ..domain.models import Video, VideoPage, VideoQuery
from ..infrastructure.temp_files import spool_upload, remove_temp_file
from .schemas import OwnerResponse, VideoResponse, VideoPageResponse


class VideoController:
    """Controller for video resource operations"""

    def __init__(self, video_service: VideoService, temp_dir: str):
        self.video_service = video_service
        self.temp_dir = temp_dir
        self.logger = logging.getLogger(__name__)

    async def list_videos(self, query: VideoQuery) -> ApiResponse[VideoPageResponse]:
        page = await self.video_service.list_videos(query)
        return ApiResponse.build(200, self._convert_page(page), "Videos fetched successfully")

    async def publish_video(
        self,
        actor_id: str,
        title: Optional[str],
        description: Optional[str],
        video_file: Optional[UploadFile],
        thumbnail: Optional[UploadFile]
    ) -> ApiResponse[VideoResponse]:
        spooled: List[Path] = []
        try:
            video_path = await self._spool(video_file, spooled)
            thumbnail_path = await self._spool(thumbnail, spooled)

            video = await self.video_service.publish_video(
                actor_id=actor_id,
                title=title,
                description=description,
                video_file=video_path,
                thumbnail=thumbnail_path,
            )
        finally:
            self._cleanup(spooled)

        return ApiResponse.build(201, self._convert_to_response(video), "Video published successfully")

    async def get_video(self, video_id: str) -> ApiResponse[VideoResponse]:
        video = await self.video_service.get_video_by_id(video_id)
        return ApiResponse.build(200, self._convert_to_response(video), "Video fetched successfully")

    async def update_video(
        self,
        actor_id: str,
        video_id: str,
        title: Optional[str],
        description: Optional[str],
        thumbnail: Optional[UploadFile]
    ) -> ApiResponse[VideoResponse]:
        spooled: List[Path] = []
        try:
            thumbnail_path = await self._spool(thumbnail, spooled)
            video = await self.video_service.update_video(
                actor_id=actor_id,
                video_id=video_id,
                title=title,
                description=description,
                thumbnail=thumbnail_path,
            )
        finally:
            self._cleanup(spooled)

        return ApiResponse.build(200, self._convert_to_response(video), "Video updated successfully")

    async def delete_video(self, actor_id: str, video_id: str) -> ApiResponse[dict]:
        await self.video_service.delete_video(actor_id, video_id)
        return ApiResponse.build(200, {}, "Video deleted successfully")

    async def toggle_publish_status(self, actor_id: str, video_id: str) -> ApiResponse[VideoResponse]:
        video = await self.video_service.toggle_publish_status(actor_id, video_id)
        state = "published" if video.is_published else "unpublished"
        return ApiResponse.build(200, self._convert_to_response(video), f"Video {state} successfully")

    async def _spool(self, upload: Optional[UploadFile], spooled: List[Path]) -> Optional[Path]:
        path = await spool_upload(upload, self.temp_dir)
        if path is not None:
            spooled.append(path)
        return path

    def _cleanup(self, spooled: List[Path]) -> None:
        """Remove temp files the upload proxy never got to"""
        for path in spooled:
            remove_temp_file(path)

    def _convert_page(self, page: VideoPage) -> VideoPageResponse:
        return VideoPageResponse(
            docs=[self._convert_to_response(video) for video in page.docs],
            total_docs=page.total_docs,
            limit=page.limit,
            page=page.page,
            total_pages=page.total_pages,
            paging_counter=page.paging_counter,
            has_prev_page=page.has_prev_page,
            has_next_page=page.has_next_page,
            prev_page=page.prev_page,
            next_page=page.next_page,
        )

    def _convert_to_response(self, video: Video) -> VideoResponse:
        """Convert domain model to response model"""
        owner = video.owner_id
        if video.owner:
            owner = OwnerResponse(id=video.owner.id, username=video.owner.username, full_name=video.owner.full_name, avatar=video.owner.avatar)

        return VideoResponse(
            id=video.id,
            title=video.title,
            description=video.description,
            video_file=video.video_file,
            thumbnail=video.thumbnail,
            duration=video.duration,
            owner=owner,
            is_published=video.is_published,
            created_at=video.created_at,
            updated_at=video.updated_at,
        )
