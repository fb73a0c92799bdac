"""
Video Infrastructure Layer.

Contains implementations of domain interfaces using external dependencies
like MongoDB, S3-compatible object storage and OpenCV.
"""

from .repositories import MongoVideoRepository, InMemoryVideoRepository
from .uploaders import S3MediaUploader
from .metadata_extractors import OpenCVMetadataExtractor

__all__ = [
    "MongoVideoRepository",
    "InMemoryVideoRepository",
    "S3MediaUploader",
    "OpenCVMetadataExtractor",
]
