"""
Tests for the MongoDB list pipeline builders and document mapping.
"""

from datetime import datetime, timezone

from bson import ObjectId

from videohub.video.domain.models import Video, VideoQuery, is_valid_identifier
from videohub.video.infrastructure.documents import video_from_document, video_to_document, mutable_fields
from videohub.video.infrastructure.pipelines import build_match_stage, build_list_pipeline, build_page_facet, build_sort_stage


def test_match_always_requires_published():
    assert build_match_stage(VideoQuery()) == {"$match": {"isPublished": True}}


def test_match_escapes_search_text():
    match = build_match_stage(VideoQuery(query="c++ (intro)"))["$match"]

    assert match["title"] == {"$regex": r"c\+\+\ \(intro\)", "$options": "i"}
    assert match["isPublished"] is True


def test_match_owner_only_for_valid_ids():
    owner = ObjectId()

    assert build_match_stage(VideoQuery(user_id=str(owner)))["$match"]["owner"] == owner
    assert "owner" not in build_match_stage(VideoQuery(user_id="xyz"))["$match"]


def test_sort_direction():
    assert build_sort_stage(VideoQuery()) == {"$sort": {"createdAt": -1}}
    assert build_sort_stage(VideoQuery(sort_by="title", sort_type="asc")) == {"$sort": {"title": 1}}
    assert build_sort_stage(VideoQuery(sort_type="ASC")) == {"$sort": {"createdAt": -1}}


def test_list_pipeline_inner_joins_owner_before_sort():
    pipeline = build_list_pipeline(VideoQuery(), "users")

    assert [next(iter(stage)) for stage in pipeline] == ["$match", "$lookup", "$unwind", "$sort"]
    lookup = pipeline[1]["$lookup"]
    assert lookup["from"] == "users"
    assert lookup["localField"] == "owner" and lookup["foreignField"] == "_id"
    assert lookup["pipeline"] == [{"$project": {"username": 1, "fullName": 1, "avatar": 1}}]
    assert pipeline[2] == {"$unwind": "$owner"}


def test_page_facet_skip_and_limit():
    facet = build_page_facet(VideoQuery(page=3, limit=20))["$facet"]

    assert facet["docs"] == [{"$skip": 40}, {"$limit": 20}]
    assert facet["metadata"] == [{"$count": "totalDocs"}]


def test_joined_document_maps_owner_profile():
    owner_id = ObjectId()
    created = datetime(2025, 1, 2, 3, 4, 5)
    document = {
        "_id": ObjectId(),
        "title": "T",
        "description": "D",
        "videoFile": "https://media.test/v.mp4",
        "thumbnail": "https://media.test/t.png",
        "duration": None,
        "owner": {"_id": owner_id, "username": "alice", "fullName": "Alice", "avatar": "a.png"},
        "isPublished": True,
        "createdAt": created,
        "updatedAt": created,
    }

    video = video_from_document(document)

    assert video.owner_id == str(owner_id)
    assert video.owner.username == "alice"
    assert video.duration == 0
    assert video.created_at.tzinfo is not None
    assert video.created_at.replace(tzinfo=None) == created


def test_mutable_fields_exclude_media_and_owner():
    video = Video(id=str(ObjectId()), title="T", description="D", video_file="v", thumbnail="t",
                  owner_id=str(ObjectId()), updated_at=datetime.now(timezone.utc))

    fields = mutable_fields(video)

    assert set(fields) == {"title", "description", "thumbnail", "duration", "isPublished", "updatedAt"}
    assert isinstance(video_to_document(video)["owner"], ObjectId)


def test_owner_id_with_trailing_newline_is_ignored():
    owner = str(ObjectId())

    assert "owner" not in build_match_stage(VideoQuery(user_id=owner + "\n"))["$match"]


def test_identifier_validation_is_strict():
    valid = "a" * 24

    assert is_valid_identifier(valid)
    assert is_valid_identifier(valid.upper())
    assert not is_valid_identifier(valid + "\n")
    assert not is_valid_identifier("a" * 22 + "  ")
    assert not is_valid_identifier(" " + valid[1:])
    assert not is_valid_identifier("g" * 24)
    assert not is_valid_identifier(None)
    assert not is_valid_identifier(ObjectId())
