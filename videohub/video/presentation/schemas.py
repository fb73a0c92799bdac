"""
Video API Request/Response Schemas.

Pydantic models for API serialization and validation. Field names are
serialized in camelCase.
"""

from typing import List, Optional, Union
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OwnerResponse(CamelModel):
    """Public owner projection"""
    id: str = Field(..., alias="_id", description="User identifier")
    username: Optional[str] = Field(None, description="Unique handle")
    full_name: Optional[str] = Field(None, description="Display name")
    avatar: Optional[str] = Field(None, description="Avatar image URL")


class VideoResponse(CamelModel):
    """Video entity response"""
    id: str = Field(..., alias="_id", description="Video identifier")
    title: str = Field(..., description="Video title")
    description: str = Field(..., description="Video description")
    video_file: str = Field(..., description="URL of the stored media asset")
    thumbnail: str = Field(..., description="URL of the thumbnail image")
    duration: float = Field(0, description="Duration in seconds")
    owner: Union[OwnerResponse, str] = Field(..., description="Owner profile, or owner id when not populated")
    is_published: bool = Field(..., description="Whether the video appears in listings")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp (UTC)")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp (UTC)")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": "665f1c2e9b1d4a0012345678",
                "title": "Intro to FastAPI",
                "description": "Building REST services",
                "videoFile": "https://media.example.com/videos/20250804143022_ab12cd34ef56_intro.mp4",
                "thumbnail": "https://media.example.com/images/20250804143023_12ab34cd56ef_intro.png",
                "duration": 120.5,
                "owner": {"_id": "665f1b009b1d4a0012345600", "username": "jdoe", "fullName": "Jane Doe", "avatar": "https://media.example.com/a.png"},
                "isPublished": True,
                "createdAt": "2025-08-04T14:30:22Z",
                "updatedAt": "2025-08-04T14:30:22Z",
            }
        },
    )


class VideoPageResponse(CamelModel):
    """Paginated list of videos"""
    docs: List[VideoResponse] = Field(..., description="Videos on this page")
    total_docs: int = Field(..., description="Total matching videos")
    limit: int = Field(..., description="Page size")
    page: int = Field(..., description="Current page")
    total_pages: int = Field(..., description="Number of pages")
    paging_counter: int = Field(..., description="Position of the first doc on this page")
    has_prev_page: bool
    has_next_page: bool
    prev_page: Optional[int] = None
    next_page: Optional[int] = None
