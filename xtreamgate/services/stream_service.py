#!/usr/bin/env python3
"""
Stream Service Module

This module resolves gateway stream requests. It turns a session token back
into provider credentials, rebuilds the provider stream url, and forwards
the provider's answer to the client unmodified.

@package XtreamGate
"""

# setup the imports
import logging
from fastapi.responses import Response

from xtreamgate.exceptions import BadRequestError, UnauthorizedError, UpstreamError
from xtreamgate.models import ProviderCredentials, STREAM_TYPES
from xtreamgate.services.session_store import SessionStore
from xtreamgate.sources.base import UpstreamClient

# setup the logger
logger = logging.getLogger(__name__)

# the media type every proxied stream is served as
M3U8_MEDIA_TYPE = "application/vnd.apple.mpegurl"

"""
Handles stream resolution and delivery

Validates the token, rebuilds the upstream url, fetches it once, and
responds with the upstream status and body.
"""
class StreamResolver:

    """
    Initialize the StreamResolver

    @param session_store: SessionStore Token to credential mapping
    @param client: UpstreamClient Client used for the provider request
    """
    def __init__(self, session_store: SessionStore, client: UpstreamClient):

        # setup the internals
        self.session_store = session_store
        self.client = client

    """
    Build the provider stream url

    @param credentials: ProviderCredentials Resolved provider credentials
    @param stream_id: str Numeric provider stream id
    @param stream_type: str Either 'live' or 'movie'
    @return str: Provider stream url
    @throws BadRequestError: When the stream type is not recognized
    """
    def build_upstream_url(self, credentials: ProviderCredentials, stream_id: str, stream_type: str) -> str:

        # the type names the url segment, anything else is refused
        if stream_type not in STREAM_TYPES:
            raise BadRequestError("Invalid stream type")

        # return the formatted url
        return f"{credentials.server_url}/{stream_type}/{credentials.username}/{credentials.password}/{stream_id}.m3u8"

    """
    Resolve and proxy a stream request

    @param stream_id: str Numeric provider stream id
    @param token: str Session token from the query string
    @param stream_type: str Stream type from the query string
    @return Response: Upstream status and body as an M3U8 response
    @throws UnauthorizedError: 401 on a missing, unknown or expired token
    @throws BadRequestError: 400 on an invalid stream type
    @throws UpstreamError: 500 when the provider cannot be reached
    """
    async def resolve(self, stream_id: str, token: str, stream_type: str = "live") -> Response:

        # look up the session
        session = await self.session_store.resolve(token)
        if session is None:
            raise UnauthorizedError()

        # build the provider url
        credentials = session.credentials
        upstream_url = self.build_upstream_url(credentials, stream_id, stream_type)

        # fetch it once
        try:
            resp = await self.client.get(upstream_url)

        # whoopsie... the provider is unreachable
        except Exception as e:
            reason = str(e) or type(e).__name__
            logger.error(f"Stream {stream_type}/{stream_id} from {credentials.server_url} failed: {reason}")
            raise UpstreamError(f"Failed to fetch stream: {reason}")

        # upstream errors are forwarded as-is, but note them
        if not resp.ok:
            logger.warning(f"Stream {stream_type}/{stream_id} from {credentials.server_url} returned HTTP {resp.status}")

        # return the upstream answer with our media type
        return Response(content=resp.body, status_code=resp.status, media_type=M3U8_MEDIA_TYPE)
