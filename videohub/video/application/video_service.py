"""
Video Application Service.

Orchestrates the video resource use cases: list, publish, read, update,
delete and toggle-publish.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ...core.errors import ValidationError, AuthenticationError, AuthorizationError, NotFoundError, DependencyFailure
from ..domain.interfaces import VideoRepository, MediaUploader
from ..domain.models import Video, VideoQuery, VideoPage, is_valid_identifier


LocalFile = Optional[Union[str, Path]]


class VideoService:
    """Application service for video management"""

    def __init__(self, video_repository: VideoRepository, media_uploader: MediaUploader):
        self.video_repository = video_repository
        self.media_uploader = media_uploader
        self.logger = logging.getLogger(__name__)

    async def list_videos(self, query: VideoQuery) -> VideoPage:
        """Search, sort and paginate published videos"""
        if query.user_id and not query.owner_filter:
            self.logger.debug(f"Ignoring malformed userId filter: {query.user_id!r}")
        return await self.video_repository.list_published(query)

    async def publish_video(
        self,
        actor_id: Optional[str],
        title: Optional[str],
        description: Optional[str],
        video_file: LocalFile,
        thumbnail: LocalFile
    ) -> Video:
        """Upload the media pair and persist a new published video"""
        self._require_actor(actor_id)

        if not title or not description:
            raise ValidationError("Title and description are required")

        if not video_file or not thumbnail:
            raise ValidationError("Video file and thumbnail are required")

        # Sequential on purpose; a failure of one does not roll back the other
        video_asset = await self.media_uploader.upload(video_file)
        thumbnail_asset = await self.media_uploader.upload(thumbnail)

        if not video_asset or not thumbnail_asset:
            raise DependencyFailure("Error uploading files to media storage")

        video = Video(
            id=None,
            title=title,
            description=description,
            video_file=video_asset.url,
            thumbnail=thumbnail_asset.url,
            duration=video_asset.duration or 0,
            owner_id=actor_id,
        )
        created = await self.video_repository.create(video)
        self.logger.info(f"Video {created.id} published by {actor_id}")
        return created

    async def get_video_by_id(self, video_id: str) -> Video:
        """Get any video by id with its owner populated"""
        self._validate_id(video_id)

        video = await self.video_repository.get_with_owner(video_id)
        if not video:
            raise NotFoundError("Video not found")
        return video

    async def update_video(
        self,
        actor_id: Optional[str],
        video_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail: LocalFile = None
    ) -> Video:
        """Update title/description and optionally replace the thumbnail"""
        video = await self._get_owned_video(actor_id, video_id, "You are not allowed to update this video")

        if thumbnail:
            asset = await self.media_uploader.upload(thumbnail)
            if not asset:
                raise DependencyFailure("Thumbnail upload failed")
            video.thumbnail = asset.url

        # Falsy values leave the field untouched
        if title:
            video.title = title
        if description:
            video.description = description

        return await self.video_repository.save(video)

    async def delete_video(self, actor_id: Optional[str], video_id: str) -> None:
        """Hard delete a video owned by the actor"""
        video = await self._get_owned_video(actor_id, video_id, "You are not allowed to delete this video")

        await self.video_repository.delete(video.id)
        self.logger.info(f"Video {video_id} deleted by {actor_id}")

    async def toggle_publish_status(self, actor_id: Optional[str], video_id: str) -> Video:
        """Flip the published flag of a video owned by the actor"""
        video = await self._get_owned_video(actor_id, video_id, "You are not allowed to modify this video")

        video.is_published = not video.is_published
        saved = await self.video_repository.save(video)
        self.logger.info(f"Video {video_id} is_published={saved.is_published}")
        return saved

    async def _get_owned_video(self, actor_id: Optional[str], video_id: str, denied_message: str) -> Video:
        """Validate id, fetch, and check ownership in that order"""
        self._require_actor(actor_id)
        self._validate_id(video_id)

        video = await self.video_repository.get_by_id(video_id)
        if not video:
            raise NotFoundError("Video not found")

        if not video.is_owned_by(actor_id):
            self.logger.warning(f"Actor {actor_id} denied on video {video_id} owned by {video.owner_id}")
            raise AuthorizationError(denied_message)

        return video

    @staticmethod
    def _validate_id(video_id: str) -> None:
        if not is_valid_identifier(video_id):
            raise ValidationError("Invalid video ID")

    @staticmethod
    def _require_actor(actor_id: Optional[str]) -> None:
        if not actor_id:
            raise AuthenticationError("Unauthorized request")
