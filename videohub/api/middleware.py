"""
Authentication hand-off middleware.

Authentication happens upstream (API gateway or auth proxy). This middleware
trusts the user id forwarded in a header and exposes it as
``request.state.user`` for the route dependencies.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..video.domain.models import is_valid_identifier


USER_ID_HEADER = "X-User-Id"


class TrustedHeaderAuthMiddleware(BaseHTTPMiddleware):
    """Populate request.state.user from a trusted upstream header"""

    def __init__(self, app, header_name: str = USER_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name
        self.logger = logging.getLogger(__name__)

    async def dispatch(self, request: Request, call_next):
        user_id = (request.headers.get(self.header_name) or "").strip()
        if user_id:
            if is_valid_identifier(user_id):
                request.state.user = {"_id": user_id}
            else:
                self.logger.debug(f"Ignoring malformed {self.header_name} header: {user_id!r}")
        return await call_next(request)
