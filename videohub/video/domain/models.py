"""
Video Domain Models.

Pure business entities and value objects for the video resource.
These models represent core business concepts; the only outside import is
bson, used to validate document identifiers.
"""

import math
import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import List, Optional

from bson import ObjectId


OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def is_valid_identifier(value: Optional[str]) -> bool:
    """Check that a value is a well-formed 24-hex-digit document identifier"""
    if not isinstance(value, str) or not OBJECT_ID_PATTERN.fullmatch(value):
        return False
    # ObjectId alone accepts hex with embedded whitespace
    return ObjectId.is_valid(value)


@dataclass(frozen=True)
class VideoMetadata:
    """Media metadata read from a local file"""
    duration_seconds: float


@dataclass(frozen=True)
class OwnerProfile:
    """Public projection of the user that owns a video"""
    id: str
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar: Optional[str] = None


@dataclass(frozen=True)
class UploadedAsset:
    """Descriptor returned by the media storage after a successful upload"""
    url: str
    public_id: str
    resource_type: str
    bytes: int = 0
    duration: Optional[float] = None
    format: Optional[str] = None


@dataclass
class Video:
    """Video entity"""
    id: Optional[str]
    title: str
    description: str
    video_file: str
    thumbnail: str
    owner_id: str
    duration: float = 0
    is_published: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    owner: Optional[OwnerProfile] = None

    def __post_init__(self):
        """Validate video data"""
        if not self.owner_id:
            raise ValueError("Owner cannot be empty")
        if self.duration is None:
            self.duration = 0

    def is_owned_by(self, actor_id: Optional[str]) -> bool:
        """Exact identity comparison against the stored owner"""
        return actor_id is not None and str(self.owner_id) == str(actor_id)

    def with_owner(self, owner: Optional[OwnerProfile]) -> "Video":
        """Copy of this video with the owner projection attached"""
        return replace(self, owner=owner)


@dataclass(frozen=True)
class VideoQuery:
    """List/search parameters"""
    page: int = 1
    limit: int = 10
    query: Optional[str] = None
    sort_by: str = "createdAt"
    sort_type: str = "desc"
    user_id: Optional[str] = None

    @property
    def ascending(self) -> bool:
        return self.sort_type == "asc"

    @property
    def effective_page(self) -> int:
        """Page used for the skip computation (never below 1)"""
        return self.page if self.page >= 1 else 1

    @property
    def skip(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.effective_page - 1) * self.limit

    @property
    def owner_filter(self) -> Optional[str]:
        """Owner id to filter on; malformed ids are ignored"""
        if self.user_id and is_valid_identifier(self.user_id):
            return self.user_id
        return None


@dataclass
class VideoPage:
    """One page of list results plus paging counters"""
    docs: List[Video]
    total_docs: int
    limit: int
    page: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 1
        return max(1, math.ceil(self.total_docs / self.limit))

    @property
    def paging_counter(self) -> int:
        if self.limit <= 0:
            return 1
        return (self.page - 1) * self.limit + 1

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def prev_page(self) -> Optional[int]:
        return self.page - 1 if self.has_prev_page else None

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next_page else None
