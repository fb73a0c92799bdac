"""
VideoHub

Video publishing backend: search and paginate published videos, publish new
videos to remote media storage, and let owners update, delete and
publish/unpublish them.
"""

__version__ = "1.0.0"
__author__ = "VideoHub Team"

from .main import VideoHubSystem, create_app

__all__ = ["VideoHubSystem", "create_app"]
