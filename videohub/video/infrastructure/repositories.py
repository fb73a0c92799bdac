"""
Video Repository Implementations.

MongoDB-backed repository plus an in-memory implementation with the same
query semantics for local development and tests.
"""

import copy
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from ...core.config import Config
from ...core.timezone_utils import utc_now, ensure_utc
from ...storage.manager import StorageManager
from ..domain.interfaces import VideoRepository
from ..domain.models import Video, VideoQuery, VideoPage
from .documents import OWNER_PROJECTION, video_to_document, video_from_document, owner_from_document, mutable_fields, to_object_id
from .pipelines import build_list_pipeline, build_page_facet, build_count_stage


def bson_sort_key(value: Any) -> tuple:
    """
    Sort key following MongoDB's cross-type comparison order.

    Missing and null values sort first, then numbers, strings, embedded
    documents, arrays, binary data, ObjectIds, booleans and dates. Values of
    one type compare naturally, so any mix of stored values can be sorted.
    """
    if value is None:
        return (0,)
    # bool before numbers: it is an int subclass
    if isinstance(value, bool):
        return (7, value)
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    if isinstance(value, dict):
        return (3, tuple((str(key), bson_sort_key(item)) for key, item in value.items()))
    if isinstance(value, (list, tuple)):
        return (4, tuple(bson_sort_key(item) for item in value))
    if isinstance(value, (bytes, bytearray)):
        return (5, bytes(value))
    if isinstance(value, ObjectId):
        return (6, value.binary)
    if isinstance(value, datetime):
        return (8, ensure_utc(value))
    return (9, str(value))


class MongoVideoRepository(VideoRepository):
    """MongoDB implementation of the video repository"""

    def __init__(self, config: Config, storage_manager: StorageManager):
        self.config = config
        self.storage_manager = storage_manager
        self.videos_collection = config.database.videos_collection
        self.users_collection = config.database.users_collection
        self.logger = logging.getLogger(__name__)

    @property
    def videos(self):
        return self.storage_manager.get_collection(self.videos_collection)

    @property
    def users(self):
        return self.storage_manager.get_collection(self.users_collection)

    async def list_published(self, query: VideoQuery) -> VideoPage:
        pipeline = build_list_pipeline(query, self.users_collection)

        try:
            if query.limit > 0:
                cursor = await self.videos.aggregate(pipeline + [build_page_facet(query)])
                result = await cursor.to_list(length=1)
                facet = result[0] if result else {"metadata": [], "docs": []}
                metadata = facet.get("metadata") or [{}]
                total_docs = metadata[0].get("totalDocs", 0)
                documents = facet.get("docs", [])
            else:
                cursor = await self.videos.aggregate(pipeline + [build_count_stage()])
                result = await cursor.to_list(length=1)
                total_docs = result[0]["totalDocs"] if result else 0
                documents = []
        except PyMongoError as e:
            self.logger.error(f"Error listing videos: {e}")
            raise

        return VideoPage(
            docs=[video_from_document(doc) for doc in documents],
            total_docs=total_docs,
            limit=query.limit,
            page=query.effective_page,
        )

    async def get_by_id(self, video_id: str) -> Optional[Video]:
        document = await self.videos.find_one({"_id": to_object_id(video_id)})
        return video_from_document(document) if document else None

    async def get_with_owner(self, video_id: str) -> Optional[Video]:
        video = await self.get_by_id(video_id)
        if not video:
            return None

        user = await self.users.find_one({"_id": to_object_id(video.owner_id)}, projection=OWNER_PROJECTION)
        return video.with_owner(owner_from_document(user))

    async def create(self, video: Video) -> Video:
        now = utc_now()
        video.created_at = now
        video.updated_at = now

        document = video_to_document(video)
        document.pop("_id", None)
        try:
            result = await self.videos.insert_one(document)
        except PyMongoError as e:
            self.logger.error(f"Error creating video: {e}")
            raise

        video.id = str(result.inserted_id)
        return video

    async def save(self, video: Video) -> Video:
        video.updated_at = utc_now()
        try:
            await self.videos.update_one({"_id": to_object_id(video.id)}, {"$set": mutable_fields(video)})
        except PyMongoError as e:
            self.logger.error(f"Error saving video {video.id}: {e}")
            raise
        return video

    async def delete(self, video_id: str) -> bool:
        result = await self.videos.delete_one({"_id": to_object_id(video_id)})
        return result.deleted_count > 0


class InMemoryVideoRepository(VideoRepository):
    """In-memory implementation of the video repository"""

    def __init__(self):
        self.videos: Dict[ObjectId, Dict[str, Any]] = {}
        self.users: Dict[ObjectId, Dict[str, Any]] = {}
        self.logger = logging.getLogger(__name__)

    def add_user(self, username: str, full_name: str = "", avatar: str = "", user_id: Optional[str] = None) -> str:
        """Register a user so videos can be joined to it"""
        object_id = to_object_id(user_id) if user_id else ObjectId()
        self.users[object_id] = {"_id": object_id, "username": username, "fullName": full_name, "avatar": avatar}
        return str(object_id)

    def remove_user(self, user_id: str) -> None:
        self.users.pop(to_object_id(user_id), None)

    async def list_published(self, query: VideoQuery) -> VideoPage:
        matched = [doc for doc in self.videos.values() if self._matches(doc, query)]

        joined = []
        for doc in matched:
            owner = self._project_owner(doc["owner"])
            if owner is None:
                continue
            joined.append({**doc, "owner": owner})

        joined.sort(key=lambda doc: self._sort_key(doc, query.sort_by), reverse=not query.ascending)

        total_docs = len(joined)
        page_docs = joined[query.skip:query.skip + query.limit] if query.limit > 0 else []

        return VideoPage(
            docs=[video_from_document(copy.deepcopy(doc)) for doc in page_docs],
            total_docs=total_docs,
            limit=query.limit,
            page=query.effective_page,
        )

    async def get_by_id(self, video_id: str) -> Optional[Video]:
        document = self.videos.get(to_object_id(video_id))
        return video_from_document(copy.deepcopy(document)) if document else None

    async def get_with_owner(self, video_id: str) -> Optional[Video]:
        video = await self.get_by_id(video_id)
        if not video:
            return None
        return video.with_owner(owner_from_document(self._project_owner(to_object_id(video.owner_id))))

    async def create(self, video: Video) -> Video:
        now = utc_now()
        video.created_at = now
        video.updated_at = now
        video.id = str(ObjectId())

        document = video_to_document(video)
        self.videos[document["_id"]] = document
        return video

    async def save(self, video: Video) -> Video:
        video.updated_at = utc_now()
        document = self.videos.get(to_object_id(video.id))
        if document is not None:
            document.update(mutable_fields(video))
        return video

    async def delete(self, video_id: str) -> bool:
        return self.videos.pop(to_object_id(video_id), None) is not None

    def _matches(self, document: Dict[str, Any], query: VideoQuery) -> bool:
        if document.get("isPublished") is not True:
            return False

        if query.query and not re.search(re.escape(query.query), document.get("title") or "", re.IGNORECASE):
            return False

        owner_id = query.owner_filter
        if owner_id and document.get("owner") != ObjectId(owner_id):
            return False

        return True

    def _project_owner(self, owner_id: ObjectId) -> Optional[Dict[str, Any]]:
        user = self.users.get(owner_id)
        if user is None:
            return None
        return {"_id": user["_id"], **{name: user.get(name) for name in OWNER_PROJECTION}}

    @staticmethod
    def _sort_key(document: Dict[str, Any], field_path: str) -> tuple:
        value: Any = document
        for part in field_path.split("."):
            value = value.get(part) if isinstance(value, dict) else None
        return bson_sort_key(value)
