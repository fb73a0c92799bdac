"""
VideoHub - Core Module

Configuration management, logging, the error taxonomy and time helpers shared
by every layer of the service.
"""

__version__ = "1.0.0"
__author__ = "VideoHub Team"

from .config import Config
from .errors import ApiError, ValidationError, AuthenticationError, AuthorizationError, NotFoundError, DependencyFailure

__all__ = ["Config", "ApiError", "ValidationError", "AuthenticationError", "AuthorizationError", "NotFoundError", "DependencyFailure"]
