"""
Tests for the video application service.
"""

import asyncio

import pytest
from bson import ObjectId

from videohub.core.errors import ValidationError, AuthenticationError, AuthorizationError, NotFoundError, DependencyFailure
from videohub.video.application.video_service import VideoService
from videohub.video.domain.models import VideoQuery


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def service(repository, uploader):
    return VideoService(repository, uploader)


@pytest.fixture
def published(service, users, tmp_media):
    """A video published by u1"""
    return run(service.publish_video(users["u1"], "A", "B", tmp_media("clip.mp4"), tmp_media("thumb.png")))


class TestPublish:
    def test_publish_persists_video_owned_by_actor(self, service, repository, uploader, users, tmp_media):
        video_path = tmp_media("clip.mp4")
        thumb_path = tmp_media("thumb.png")

        video = run(service.publish_video(users["u1"], "A", "B", video_path, thumb_path))

        assert video.id in {str(key) for key in repository.videos}
        assert video.owner_id == users["u1"]
        assert video.is_published is True
        assert video.video_file == "https://media.test/clip.mp4"
        assert video.thumbnail == "https://media.test/thumb.png"
        assert video.duration == 42.5
        assert video.created_at is not None
        assert uploader.calls == [video_path, thumb_path]
        assert not video_path.exists() and not thumb_path.exists()

    def test_missing_duration_defaults_to_zero(self, repository, users, tmp_media, make_uploader):
        service = VideoService(repository, make_uploader(duration=None))
        video = run(service.publish_video(users["u1"], "A", "B", tmp_media("clip.mp4"), tmp_media("thumb.png")))

        assert video.duration == 0

    @pytest.mark.parametrize("title, description", [(None, "B"), ("A", None), ("", "B"), ("A", "")])
    def test_missing_text_fails_before_upload(self, service, uploader, users, tmp_media, title, description):
        with pytest.raises(ValidationError) as exc_info:
            run(service.publish_video(users["u1"], title, description, tmp_media("clip.mp4"), tmp_media("thumb.png")))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Title and description are required"
        assert uploader.calls == []

    def test_missing_file_fails_before_upload(self, service, uploader, users, tmp_media):
        with pytest.raises(ValidationError) as exc_info:
            run(service.publish_video(users["u1"], "A", "B", tmp_media("clip.mp4"), None))

        assert exc_info.value.message == "Video file and thumbnail are required"
        assert uploader.calls == []

    def test_one_failed_upload_persists_nothing(self, service, repository, uploader, users, tmp_media):
        uploader.fail_for("thumb")
        video_path = tmp_media("clip.mp4")
        thumb_path = tmp_media("thumb.png")

        with pytest.raises(DependencyFailure) as exc_info:
            run(service.publish_video(users["u1"], "A", "B", video_path, thumb_path))

        assert exc_info.value.status_code == 500
        assert repository.videos == {}
        # Both uploads attempted, both temp files gone
        assert len(uploader.calls) == 2
        assert not video_path.exists() and not thumb_path.exists()

    def test_anonymous_actor_rejected(self, service, uploader, tmp_media):
        with pytest.raises(AuthenticationError):
            run(service.publish_video(None, "A", "B", tmp_media("clip.mp4"), tmp_media("thumb.png")))
        assert uploader.calls == []


class TestRead:
    def test_get_populates_owner(self, service, published, users):
        video = run(service.get_video_by_id(published.id))

        assert video.owner.id == users["u1"]
        assert video.owner.username == "alice"
        assert video.owner.full_name == "Alice Liddell"

    def test_unpublished_video_still_readable(self, service, published, users):
        run(service.toggle_publish_status(users["u1"], published.id))

        video = run(service.get_video_by_id(published.id))
        assert video.is_published is False

    def test_missing_owner_falls_back_to_id(self, service, repository, published, users):
        repository.remove_user(users["u1"])

        video = run(service.get_video_by_id(published.id))
        assert video.owner is None
        assert video.owner_id == users["u1"]

    def test_malformed_id_is_validation_error(self, service):
        with pytest.raises(ValidationError):
            run(service.get_video_by_id("not-an-id"))

    def test_unknown_id_is_not_found(self, service):
        with pytest.raises(NotFoundError):
            run(service.get_video_by_id(str(ObjectId())))


class TestUpdate:
    def test_title_only_update_leaves_other_fields(self, service, published, users):
        updated = run(service.update_video(users["u1"], published.id, title="A2"))

        assert updated.title == "A2"
        stored = run(service.get_video_by_id(published.id))
        assert stored.title == "A2"
        assert stored.description == "B"
        assert stored.thumbnail == published.thumbnail
        assert stored.owner_id == users["u1"]
        assert stored.is_published is True

    def test_empty_values_are_no_ops(self, service, published, users):
        run(service.update_video(users["u1"], published.id, title="", description=""))

        stored = run(service.get_video_by_id(published.id))
        assert (stored.title, stored.description) == ("A", "B")

    def test_new_thumbnail_replaces_url(self, service, published, users, tmp_media):
        updated = run(service.update_video(users["u1"], published.id, thumbnail=tmp_media("new-thumb.jpg")))

        assert updated.thumbnail == "https://media.test/new-thumb.jpg"

    def test_failed_thumbnail_upload_mutates_nothing(self, service, uploader, published, users, tmp_media):
        uploader.fail_for("bad")

        with pytest.raises(DependencyFailure) as exc_info:
            run(service.update_video(users["u1"], published.id, title="A2", thumbnail=tmp_media("bad.jpg")))

        assert exc_info.value.message == "Thumbnail upload failed"
        stored = run(service.get_video_by_id(published.id))
        assert stored.title == "A"
        assert stored.thumbnail == published.thumbnail

    def test_non_owner_forbidden(self, service, published, users):
        with pytest.raises(AuthorizationError) as exc_info:
            run(service.update_video(users["u2"], published.id, title="hijacked"))

        assert exc_info.value.status_code == 403
        assert run(service.get_video_by_id(published.id)).title == "A"

    def test_non_owner_never_triggers_upload(self, service, uploader, published, users, tmp_media):
        calls_before = len(uploader.calls)

        with pytest.raises(AuthorizationError):
            run(service.update_video(users["u2"], published.id, thumbnail=tmp_media("x.jpg")))
        assert len(uploader.calls) == calls_before

    def test_malformed_id_checked_before_lookup(self, service, users):
        with pytest.raises(ValidationError):
            run(service.update_video(users["u1"], "123", title="x"))

    def test_unknown_id_not_found(self, service, users):
        with pytest.raises(NotFoundError):
            run(service.update_video(users["u1"], str(ObjectId()), title="x"))


class TestDelete:
    def test_owner_deletes(self, service, repository, published, users):
        run(service.delete_video(users["u1"], published.id))

        assert repository.videos == {}
        with pytest.raises(NotFoundError):
            run(service.get_video_by_id(published.id))

    def test_non_owner_forbidden(self, service, repository, published, users):
        with pytest.raises(AuthorizationError):
            run(service.delete_video(users["u2"], published.id))
        assert len(repository.videos) == 1


class TestTogglePublish:
    def test_toggle_twice_restores_state(self, service, published, users):
        first = run(service.toggle_publish_status(users["u1"], published.id))
        assert first.is_published is False

        second = run(service.toggle_publish_status(users["u1"], published.id))
        assert second.is_published is True

    def test_unpublished_video_leaves_listing(self, service, published, users):
        run(service.toggle_publish_status(users["u1"], published.id))
        assert run(service.list_videos(VideoQuery())).total_docs == 0

        run(service.toggle_publish_status(users["u1"], published.id))
        page = run(service.list_videos(VideoQuery()))
        assert [video.id for video in page.docs] == [published.id]

    def test_non_owner_forbidden(self, service, published, users):
        with pytest.raises(AuthorizationError):
            run(service.toggle_publish_status(users["u2"], published.id))
        assert run(service.get_video_by_id(published.id)).is_published is True
