"""
Media upload proxy.

Pushes local temp files to an S3-compatible bucket and reports a durable
public URL. The local file is always removed, and failures are logged and
reported as ``None`` instead of raising.
"""

import asyncio
import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Optional, Union

import boto3
from botocore.client import Config as BotoConfig

from ...core.config import MediaStorageConfig
from ...core.logging_config import get_performance_logger
from ...core.timezone_utils import format_filename_timestamp
from ..domain.interfaces import MediaUploader, MetadataExtractor
from ..domain.models import UploadedAsset
from .temp_files import remove_temp_file


def detect_resource_type(file_path: Path) -> str:
    """Classify a file as video, image or raw from its name"""
    content_type, _ = mimetypes.guess_type(file_path.name)
    if content_type:
        major = content_type.split("/", 1)[0]
        if major in ("video", "image"):
            return major
    return "raw"


def original_filename(file_path: Path) -> str:
    """Recover the client filename from a spooled ``upload_<hex>_<name>`` path"""
    parts = file_path.name.split("_", 2)
    if len(parts) == 3 and parts[0] == "upload":
        return parts[2]
    return file_path.name


class S3MediaUploader(MediaUploader):
    """S3-compatible implementation of the media upload proxy"""

    def __init__(self, media_config: MediaStorageConfig, metadata_extractor: Optional[MetadataExtractor] = None, s3_client=None):
        self.media_config = media_config
        self.metadata_extractor = metadata_extractor
        self.logger = logging.getLogger(__name__)
        self.performance_logger = get_performance_logger("media_upload")

        self.s3_client = s3_client or boto3.client(
            "s3",
            endpoint_url=media_config.endpoint_url,
            aws_access_key_id=media_config.access_key_id,
            aws_secret_access_key=media_config.secret_access_key,
            region_name=media_config.region,
            config=BotoConfig(signature_version="s3v4"),
        )

    async def upload(self, local_path: Optional[Union[str, Path]]) -> Optional[UploadedAsset]:
        if not local_path:
            return None

        file_path = Path(local_path)
        try:
            resource_type = detect_resource_type(file_path)
            content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
            size = file_path.stat().st_size

            duration = None
            if resource_type == "video" and self.metadata_extractor:
                metadata = await self.metadata_extractor.extract(file_path)
                duration = metadata.duration_seconds if metadata else None

            key = self._build_key(file_path, resource_type)
            self.logger.info(f"Uploading {file_path.name} to bucket {self.media_config.bucket} as {key}")

            with self.performance_logger.measure("upload", key=key, bytes=size):
                await asyncio.get_running_loop().run_in_executor(
                    None, self._upload_sync, file_path, key, content_type
                )

            return UploadedAsset(
                url=self._public_url(key),
                public_id=key,
                resource_type=resource_type,
                bytes=size,
                duration=duration,
                format=file_path.suffix.lstrip(".").lower() or None,
            )

        except Exception as e:
            self.logger.error(f"Media upload failed for {file_path.name}: {e}")
            return None

        finally:
            remove_temp_file(file_path)

    def _upload_sync(self, file_path: Path, key: str, content_type: str) -> None:
        self.s3_client.upload_file(
            Filename=str(file_path),
            Bucket=self.media_config.bucket,
            Key=key,
            ExtraArgs={"ContentType": content_type},
        )

    def _build_key(self, file_path: Path, resource_type: str) -> str:
        timestamp = format_filename_timestamp()
        return f"{resource_type}s/{timestamp}_{uuid.uuid4().hex[:12]}_{original_filename(file_path)}"

    def _public_url(self, key: str) -> str:
        base = self.media_config.public_url.rstrip("/")
        if base:
            return f"{base}/{key}"
        endpoint = (self.media_config.endpoint_url or "").rstrip("/")
        return f"{endpoint}/{self.media_config.bucket}/{key}"
