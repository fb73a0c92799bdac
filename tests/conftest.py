"""
Shared fixtures for the VideoHub test suite.
"""

import sys
import os
from pathlib import Path
from typing import List, Optional, Union

import pytest
from fastapi.testclient import TestClient

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from videohub.core.config import Config
from videohub.api.server import APIServer
from videohub.video.domain.interfaces import MediaUploader
from videohub.video.domain.models import UploadedAsset
from videohub.video.infrastructure.repositories import InMemoryVideoRepository
from videohub.video.infrastructure.temp_files import remove_temp_file
from videohub.video.integration import VideoModule


class FakeMediaUploader(MediaUploader):
    """Upload proxy double that honors the temp-file cleanup contract"""

    def __init__(self, duration: Optional[float] = 42.5):
        self.duration = duration
        self.calls: List[Path] = []
        self.fail_names: List[str] = []
        self.existed_at_upload: List[bool] = []

    def fail_for(self, fragment: str) -> None:
        self.fail_names.append(fragment)

    async def upload(self, local_path: Optional[Union[str, Path]]) -> Optional[UploadedAsset]:
        if not local_path:
            return None

        path = Path(local_path)
        self.calls.append(path)
        self.existed_at_upload.append(path.exists())
        try:
            if any(fragment in path.name for fragment in self.fail_names):
                return None
            is_video = path.suffix.lower() in (".mp4", ".mov", ".webm")
            return UploadedAsset(
                url=f"https://media.test/{path.name}",
                public_id=path.name,
                resource_type="video" if is_video else "image",
                bytes=path.stat().st_size if path.exists() else 0,
                duration=self.duration if is_video else None,
            )
        finally:
            remove_temp_file(path)


@pytest.fixture
def config(tmp_path):
    cfg = Config(str(tmp_path / "config.json"), apply_env=False)
    cfg.database.backend = "memory"
    cfg.media.temp_dir = str(tmp_path / "spool")
    cfg.system.log_file = None
    cfg.system.trust_user_header = True
    return cfg


@pytest.fixture
def repository():
    return InMemoryVideoRepository()


@pytest.fixture
def users(repository):
    return {
        "u1": repository.add_user("alice", "Alice Liddell", "https://media.test/alice.png"),
        "u2": repository.add_user("bob", "Bob Builder", "https://media.test/bob.png"),
    }


@pytest.fixture
def uploader():
    return FakeMediaUploader()


@pytest.fixture
def make_uploader():
    return FakeMediaUploader


@pytest.fixture
def tmp_media(tmp_path):
    """Factory for local files standing in for spooled uploads"""

    def _make(name: str, content: bytes = b"media-bytes") -> Path:
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def video_module(config, repository, uploader):
    return VideoModule(config, video_repository=repository, media_uploader=uploader)


@pytest.fixture
def client(config, video_module):
    server = APIServer(config, video_module)
    with TestClient(server.app) as test_client:
        yield test_client
