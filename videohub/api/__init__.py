"""
API module for the VideoHub service.

This module provides the FastAPI application, response envelopes and the
authentication hand-off middleware.
"""

from .models import ApiResponse, ErrorResponse
from .server import APIServer

__all__ = ["APIServer", "ApiResponse", "ErrorResponse"]
