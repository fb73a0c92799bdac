"""
Video API Routes.

FastAPI route definitions for the video resource.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from ...api.models import ApiResponse
from ..domain.models import VideoQuery
from .controllers import VideoController
from .dependencies import require_actor
from .schemas import VideoResponse, VideoPageResponse


def create_video_routes(video_controller: VideoController) -> APIRouter:
    """Create video API routes with dependency injection"""

    router = APIRouter(prefix="/videos", tags=["videos"])

    @router.get("/", response_model=ApiResponse[VideoPageResponse])
    async def list_videos(
        page: int = Query(1, description="Page number, starting at 1"),
        limit: int = Query(10, description="Videos per page"),
        query: Optional[str] = Query(None, description="Case-insensitive title search"),
        sort_by: str = Query("createdAt", alias="sortBy", description="Field to sort on"),
        sort_type: str = Query("desc", alias="sortType", description="asc or desc"),
        user_id: Optional[str] = Query(None, alias="userId", description="Only videos owned by this user")
    ):
        """
        List published videos.

        - **query**: substring matched against the title
        - **userId**: owner filter, ignored when not a valid id
        - **sortBy** / **sortType**: ordering, newest first by default
        - **page** / **limit**: pagination
        """
        video_query = VideoQuery(page=page, limit=limit, query=query, sort_by=sort_by, sort_type=sort_type, user_id=user_id)
        return await video_controller.list_videos(video_query)

    @router.post("/", response_model=ApiResponse[VideoResponse], status_code=201)
    async def publish_video(
        title: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        video_file: Optional[UploadFile] = File(None, alias="videoFile"),
        thumbnail: Optional[UploadFile] = File(None),
        actor_id: str = Depends(require_actor)
    ):
        """
        Publish a new video.

        Multipart body with **title**, **description** and the files
        **videoFile** and **thumbnail**.
        """
        return await video_controller.publish_video(actor_id, title, description, video_file, thumbnail)

    @router.get("/{video_id}", response_model=ApiResponse[VideoResponse])
    async def get_video(video_id: str):
        """Get a video by id with its owner populated"""
        return await video_controller.get_video(video_id)

    @router.patch("/{video_id}", response_model=ApiResponse[VideoResponse])
    async def update_video(
        video_id: str,
        title: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        thumbnail: Optional[UploadFile] = File(None),
        actor_id: str = Depends(require_actor)
    ):
        """
        Update a video owned by the caller.

        Empty **title** or **description** leave the stored value unchanged.
        A **thumbnail** file replaces the current thumbnail.
        """
        return await video_controller.update_video(actor_id, video_id, title, description, thumbnail)

    @router.delete("/{video_id}", response_model=ApiResponse[dict])
    async def delete_video(video_id: str, actor_id: str = Depends(require_actor)):
        """Delete a video owned by the caller"""
        return await video_controller.delete_video(actor_id, video_id)

    @router.patch("/toggle/publish/{video_id}", response_model=ApiResponse[VideoResponse])
    async def toggle_publish_status(video_id: str, actor_id: str = Depends(require_actor)):
        """Publish or unpublish a video owned by the caller"""
        return await video_controller.toggle_publish_status(actor_id, video_id)

    return router
