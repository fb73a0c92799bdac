"""
Aggregation pipeline builders for the video list query.
"""

import re
from typing import Any, Dict, List

from bson import ObjectId

from ..domain.models import VideoQuery
from .documents import OWNER_PROJECTION


def build_match_stage(query: VideoQuery) -> Dict[str, Any]:
    """Filter: published only, optional title search, optional owner"""
    match: Dict[str, Any] = {"isPublished": True}

    if query.query:
        match["title"] = {"$regex": re.escape(query.query), "$options": "i"}

    owner_id = query.owner_filter
    if owner_id:
        match["owner"] = ObjectId(owner_id)

    return {"$match": match}


def build_owner_lookup(users_collection: str) -> List[Dict[str, Any]]:
    """Join each video to its owner's public profile (inner join)"""
    return [
        {
            "$lookup": {
                "from": users_collection,
                "localField": "owner",
                "foreignField": "_id",
                "as": "owner",
                "pipeline": [{"$project": dict(OWNER_PROJECTION)}],
            }
        },
        # Videos whose owner is gone drop out here
        {"$unwind": "$owner"},
    ]


def build_sort_stage(query: VideoQuery) -> Dict[str, Any]:
    return {"$sort": {query.sort_by: 1 if query.ascending else -1}}


def build_list_pipeline(query: VideoQuery, users_collection: str) -> List[Dict[str, Any]]:
    """Match, join and sort; paging is appended separately"""
    return [build_match_stage(query), *build_owner_lookup(users_collection), build_sort_stage(query)]


def build_page_facet(query: VideoQuery) -> Dict[str, Any]:
    """Total count and one page of docs in a single round trip"""
    return {
        "$facet": {
            "metadata": [{"$count": "totalDocs"}],
            "docs": [{"$skip": query.skip}, {"$limit": query.limit}],
        }
    }


def build_count_stage() -> Dict[str, Any]:
    return {"$count": "totalDocs"}
