#!/usr/bin/env python3
"""
Xtream Gateway Core Module

This module contains the main XtreamGateway class that orchestrates the
gateway. It owns the HTTP session and the session store, runs the generate
flow, and hands stream requests to the resolver.

@package XtreamGate
"""

# setup the imports
import asyncio, logging, aiohttp
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from xtreamgate import __version__
from xtreamgate.exceptions import BadRequestError
from xtreamgate.models import AppConfig, ProviderCredentials, CONTENT_SCOPES
from xtreamgate.services import SessionStore, PlaylistGenerator, StreamResolver
from xtreamgate.sources import UpstreamClient, XtreamSource

# setup the logger
logger = logging.getLogger(__name__)

# the fields a generate request must carry
REQUIRED_FIELDS = ("server_url", "username", "password", "content_type")

"""
Format an epoch timestamp the way the generate response reports it

@param timestamp: float Epoch seconds
@return str: ISO-8601 UTC with milliseconds and a Z suffix
"""
def format_expiry(timestamp: float) -> str:
    stamp = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return stamp.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

"""
Main application orchestrator class

Coordinates the upstream client, session store, playlist generator and
stream resolver.
"""
class XtreamGateway:
    """Main application class"""

    """
    Initialize the XtreamGateway
    Sets up the session store. When a client is injected the services are
    built right away, otherwise initialize() builds them on its own session.

    @param config: AppConfig Application configuration object
    @param client: UpstreamClient Optional pre-built upstream client
    @param session_store: SessionStore Optional pre-built session store
    """
    def __init__(self, config: AppConfig, client: Optional[UpstreamClient] = None,
                 session_store: Optional[SessionStore] = None):

        # hold our class options
        self.config = config
        self.http_session = None
        self.session_store = session_store if session_store is not None else SessionStore(ttl=config.session_ttl)
        self.playlist = PlaylistGenerator(config.preview_limit)
        self.sweep_task = None
        self.client = None
        self.source = None
        self.resolver = None

        # wire the services if we were handed a client
        if client is not None:
            self._build_services(client)

    """
    Wire the services that talk to the provider

    @param client: UpstreamClient Client for every provider request
    @return None
    """
    def _build_services(self, client: UpstreamClient):
        self.client = client
        self.source = XtreamSource(client)
        self.resolver = StreamResolver(self.session_store, client)

    """
    Initialize the application
    Creates the HTTP session if needed and starts the background sweep task.

    @return None
    """
    async def initialize(self):

        # setup the session if nobody handed us a client
        if self.client is None:

            # setup out TCP connector and its option
            connector = aiohttp.TCPConnector(
                limit=100,
                limit_per_host=20,
                enable_cleanup_closed=True
            )

            # setup the session and the client on it
            self.http_session = aiohttp.ClientSession(
                connector=connector,
                headers={'User-Agent': self.config.user_agent}
            )
            self._build_services(UpstreamClient(self.http_session, self.config.upstream_timeout))

        # create the async sweeper loop
        self.sweep_task = asyncio.create_task(self._sweep_loop())
        logger.info(f"Gateway initialized, sessions expire after {self.config.session_ttl}s")

    """
    Cleanup resources
    Cancels background tasks and closes the HTTP session.

    @return None
    """
    async def cleanup(self):

        # if this is a sweeper task
        if self.sweep_task:

            # cancel it and wait for it to wind down
            self.sweep_task.cancel()
            try:
                await self.sweep_task
            except asyncio.CancelledError:
                pass

        # if we have a session... close it
        if self.http_session:
            await self.http_session.close()

    """
    Background task to sweep expired sessions

    @return None
    """
    async def _sweep_loop(self):

        # while we're still looping...
        while True:

            # try to sweep after the interval
            try:
                await asyncio.sleep(self.config.sweep_interval)
                await self.session_store.sweep_expired()

            # whoops, we are in a cancelation...
            except asyncio.CancelledError:
                break

            # whoopsie... there's an error in the loop
            except Exception as e:
                logger.error(f"Error in sweep loop: {e}")

    """
    Validate a generate request body

    @param payload: dict Parsed JSON body
    @return tuple: (ProviderCredentials, content scope)
    @throws BadRequestError: On missing fields or an unknown content type
    """
    def _parse_generate_request(self, payload: Any):

        # we need every field, as non-empty strings
        if not isinstance(payload, dict):
            raise BadRequestError("Missing required fields")
        for name in REQUIRED_FIELDS:
            value = payload.get(name)
            if not isinstance(value, str) or not value.strip():
                raise BadRequestError("Missing required fields")

        # make sure we know the scope
        scope = payload['content_type']
        if scope not in CONTENT_SCOPES:
            raise BadRequestError("Invalid content type")

        # return the credentials and scope
        credentials = ProviderCredentials.from_input(
            payload['server_url'], payload['username'], payload['password'])
        return credentials, scope

    """
    Generate a session and playlist for provider credentials

    Validates the credentials, fetches the listings, and only then issues a
    session token, so failed requests never leave a session behind.

    @param payload: dict Parsed JSON body with server_url, username, password, content_type
    @param gateway_base: str Public base url of this gateway
    @return dict: Token, preview channels, playlist and expiry
    @throws BadRequestError: 400 on bad input
    @throws InvalidCredentialsError: 401 when the provider rejects the credentials
    @throws NoChannelsFoundError: 404 when nothing was listed
    """
    async def generate(self, payload: Any, gateway_base: str) -> Dict[str, Any]:

        # parse and validate the request
        credentials, scope = self._parse_generate_request(payload)

        # check the credentials, then get the listings
        await self.source.validate_credentials(credentials)
        entries = await self.source.fetch_channels(credentials, scope)

        # now mint the session
        session = await self.session_store.create(credentials)

        # return the generated response
        return {
            "success": True,
            "sessionToken": session.token,
            "channelCount": len(entries),
            "channels": self.playlist.preview(entries, session.token, gateway_base),
            "m3uPlaylist": self.playlist.build_playlist(entries, session.token, gateway_base),
            "expiresAt": format_expiry(session.expires_at)
        }

    """
    Stream content
    Delivers the provider stream for a gateway stream request.

    @param stream_id: str Numeric provider stream id
    @param token: str Session token
    @param stream_type: str Stream type, 'live' or 'movie'
    @return Response: Upstream status and body
    """
    async def stream(self, stream_id: str, token: Optional[str], stream_type: Optional[str]):
        return await self.resolver.resolve(stream_id, token, stream_type or "live")

    """
    Get service status

    @return dict: Running state, live session count and version
    """
    def status(self) -> Dict[str, Any]:
        return {
            "status": "running",
            "active_sessions": len(self.session_store),
            "version": __version__
        }
