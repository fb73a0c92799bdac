"""
Document mapping between video entities and their stored form.

Stored documents use the camelCase field names exposed by the API, so
``sortBy`` values from the query string can be used as sort keys directly.
"""

from typing import Any, Dict, Optional

from bson import ObjectId

from ...core.timezone_utils import ensure_utc
from ..domain.models import Video, OwnerProfile


OWNER_PROJECTION = {"username": 1, "fullName": 1, "avatar": 1}

# Fields written back by a save; videoFile and owner never change after creation
MUTABLE_FIELDS = ("title", "description", "thumbnail", "duration", "isPublished", "updatedAt")


def to_object_id(value: Any) -> ObjectId:
    return value if isinstance(value, ObjectId) else ObjectId(str(value))


def video_to_document(video: Video) -> Dict[str, Any]:
    """Convert a video entity into a storable document"""
    document = {
        "title": video.title,
        "description": video.description,
        "videoFile": video.video_file,
        "thumbnail": video.thumbnail,
        "duration": video.duration,
        "owner": to_object_id(video.owner_id),
        "isPublished": video.is_published,
        "createdAt": video.created_at,
        "updatedAt": video.updated_at,
    }
    if video.id:
        document["_id"] = to_object_id(video.id)
    return document


def owner_from_document(document: Optional[Dict[str, Any]]) -> Optional[OwnerProfile]:
    """Build the public owner projection from a user document"""
    if not document:
        return None
    return OwnerProfile(
        id=str(document["_id"]),
        username=document.get("username"),
        full_name=document.get("fullName"),
        avatar=document.get("avatar"),
    )


def video_from_document(document: Dict[str, Any]) -> Video:
    """Convert a stored (possibly owner-joined) document into a video entity"""
    owner_value = document.get("owner")
    owner = None
    if isinstance(owner_value, dict):
        owner = owner_from_document(owner_value)
        owner_id = owner.id
    else:
        owner_id = str(owner_value)

    created_at = document.get("createdAt")
    updated_at = document.get("updatedAt")

    return Video(
        id=str(document["_id"]),
        title=document.get("title", ""),
        description=document.get("description", ""),
        video_file=document.get("videoFile", ""),
        thumbnail=document.get("thumbnail", ""),
        owner_id=owner_id,
        duration=document.get("duration") or 0,
        is_published=bool(document.get("isPublished", True)),
        created_at=ensure_utc(created_at) if created_at else None,
        updated_at=ensure_utc(updated_at) if updated_at else None,
        owner=owner,
    )


def mutable_fields(video: Video) -> Dict[str, Any]:
    """The subset of a document a save is allowed to overwrite"""
    document = video_to_document(video)
    return {name: document[name] for name in MUTABLE_FIELDS}
