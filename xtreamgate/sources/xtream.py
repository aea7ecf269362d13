#!/usr/bin/env python3
"""
Xtream Codes API Source Module

This module implements Xtream Codes API integration for validating provider
credentials and fetching live stream and VOD listings from Xtream-compatible
providers.

@package XtreamGate
"""

# setup the imports
import asyncio, logging
from typing import Any, List
from xtreamgate.exceptions import InvalidCredentialsError, NoChannelsFoundError
from xtreamgate.models import ChannelEntry, ProviderCredentials
from xtreamgate.sources.base import UpstreamClient

# setup the logger
logger = logging.getLogger(__name__)

"""
Xtream Codes API source

Validates credentials and fetches listings through player_api.php.
"""
class XtreamSource:

    """
    Initialize the XtreamSource

    @param client: UpstreamClient Client used for every provider request
    """
    def __init__(self, client: UpstreamClient):

        # setup the internals
        self.client = client

    """
    Build the player api url and parameters for an action

    @param credentials: ProviderCredentials Provider credentials
    @param action: str Xtream API action name
    @return tuple: (api_url, params)
    """
    def _api_request(self, credentials: ProviderCredentials, action: str):

        # setup the url and the parameters
        api_url = f"{credentials.server_url}/player_api.php"
        params = {
            'username': credentials.username,
            'password': credentials.password,
            'action': action
        }

        # return them
        return api_url, params

    """
    Query the player api and decode the JSON response

    @param credentials: ProviderCredentials Provider credentials
    @param action: str Xtream API action name
    @return Any: Parsed response body
    @throws ValueError: On a non-2xx status or a body that is not JSON
    """
    async def _query(self, credentials: ProviderCredentials, action: str) -> Any:

        # fire off the request
        api_url, params = self._api_request(credentials, action)
        resp = await self.client.get(api_url, params=params)

        # make sure we have a valid response
        if not resp.ok:
            raise ValueError(f"{action} returned HTTP {resp.status}")

        # return the parsed data
        return resp.json()

    """
    Validate credentials against the provider

    Asks for the user info document; success requires a 2xx status and both
    a user_info and a server_info section. Every other outcome, network
    errors included, is reported as invalid credentials.

    @param credentials: ProviderCredentials Provider credentials
    @return dict: The provider's user info document
    @throws InvalidCredentialsError: When validation fails for any reason
    """
    async def validate_credentials(self, credentials: ProviderCredentials) -> dict:

        # try to fetch the user info
        try:
            data = await self._query(credentials, 'get_user_info')

        # whoopsie... log the cause, but don't tell the caller which it was
        except Exception as e:
            logger.warning(f"Credential check against {credentials.server_url} failed: {e}")
            raise InvalidCredentialsError()

        # make sure what we need is in the response
        if (not isinstance(data, dict)
                or data.get('user_info') is None
                or data.get('server_info') is None):
            logger.warning(f"Credential check against {credentials.server_url} returned no user/server info")
            raise InvalidCredentialsError()

        # return the user info document
        return data

    """
    Fetch one listing from the provider

    A failing or malformed query contributes no entries instead of aborting.

    @param credentials: ProviderCredentials Provider credentials
    @param action: str Either get_live_streams or get_vod_streams
    @param stream_type: str Either 'live' or 'movie'
    @return list: List of ChannelEntry objects
    """
    async def _fetch_listing(self, credentials: ProviderCredentials, action: str, stream_type: str) -> List[ChannelEntry]:

        # try to get the listing
        try:
            data = await self._query(credentials, action)

        # whoopsie.. log the error
        except Exception as e:
            logger.error(f"Failed to fetch {stream_type} streams: {e}")
            return []

        # a non-array response counts as empty
        if not isinstance(data, list):
            logger.warning(f"{action} did not return a list, treating as empty")
            return []

        # map each record, skipping ones we cannot address
        entries = []
        for record in data:
            entry = ChannelEntry.from_provider(record, stream_type)
            if entry is not None:
                entries.append(entry)

        # return the entries
        return entries

    """
    Fetch live streams from Xtream API

    @param credentials: ProviderCredentials Provider credentials
    @return list: List of ChannelEntry objects for live streams
    """
    async def fetch_live_streams(self, credentials: ProviderCredentials) -> List[ChannelEntry]:
        return await self._fetch_listing(credentials, 'get_live_streams', 'live')

    """
    Fetch VOD (Video on Demand) streams from Xtream API

    @param credentials: ProviderCredentials Provider credentials
    @return list: List of ChannelEntry objects for VOD content
    """
    async def fetch_vod_streams(self, credentials: ProviderCredentials) -> List[ChannelEntry]:
        return await self._fetch_listing(credentials, 'get_vod_streams', 'movie')

    """
    Fetch every listing the content scope asks for

    Live and VOD queries run concurrently; the result is always all live
    entries followed by all movie entries.

    @param credentials: ProviderCredentials Provider credentials
    @param scope: str One of 'live', 'movie' or 'both'
    @return list: Combined list of ChannelEntry objects
    @throws NoChannelsFoundError: When the combined result is empty
    """
    async def fetch_channels(self, credentials: ProviderCredentials, scope: str) -> List[ChannelEntry]:

        # setup the tasks for the requested scope
        tasks = []
        if scope in ('live', 'both'):
            tasks.append(self.fetch_live_streams(credentials))
        if scope in ('movie', 'both'):
            tasks.append(self.fetch_vod_streams(credentials))

        # gather them up in order
        results = await asyncio.gather(*tasks)

        # hold the streams
        entries = []
        for result in results:
            entries.extend(result)

        # nothing at all is an error
        if not entries:
            raise NoChannelsFoundError()

        # log it and return them
        logger.info(f"Fetched {len(entries)} entries ({scope}) from {credentials.server_url}")
        return entries
