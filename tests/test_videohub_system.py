"""
Tests for the application coordinator wiring.
"""

from fastapi.testclient import TestClient

from videohub.main import VideoHubSystem
from videohub.video.infrastructure.repositories import InMemoryVideoRepository
from videohub.video.infrastructure.uploaders import S3MediaUploader


def test_memory_backend_wiring(config):
    system = VideoHubSystem(config=config, configure_logging=False)

    assert system.storage_manager is None
    assert isinstance(system.video_module.video_repository, InMemoryVideoRepository)
    assert isinstance(system.video_module.media_uploader, S3MediaUploader)

    with TestClient(system.app) as client:
        assert client.get("/health").json()["status"] == "healthy"
        assert client.get("/api/v1/videos/").json()["data"]["totalDocs"] == 0


def test_mongodb_backend_gets_storage_manager(config):
    config.database.backend = "mongodb"

    system = VideoHubSystem(config=config, configure_logging=False)

    assert system.storage_manager is not None
    assert system.api_server.storage_manager is system.storage_manager
    assert system.video_module.get_module_status()["video_repository"] == "MongoVideoRepository"
