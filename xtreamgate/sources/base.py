#!/usr/bin/env python3
"""
Base Upstream Client Module

This module defines the HTTP client used for every provider request,
both API queries and raw stream fetches. A request is a single attempt
bounded by a fixed timeout; there is no retry.

@package XtreamGate
"""

# setup the imports
import json, logging, aiohttp
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# setup the logger
logger = logging.getLogger(__name__)

"""
A fully read upstream response

Holds the status code, headers, and raw body of a provider response.
"""
@dataclass
class UpstreamResponse:
    """A fully read upstream response"""
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    """
    Decode the body as JSON

    Providers are sloppy about content types, so the header is not checked.

    @return Any: Parsed JSON document
    @throws ValueError: When the body is not valid JSON
    """
    def json(self) -> Any:
        return json.loads(self.body.decode('utf-8', errors='replace'))

"""
HTTP client for provider requests

Wraps a shared aiohttp session and reads each response fully before returning it.
"""
class UpstreamClient:

    """
    Initialize the UpstreamClient

    @param session: aiohttp.ClientSession Shared HTTP session
    @param timeout: int Total seconds allowed for a single request
    """
    def __init__(self, session: aiohttp.ClientSession, timeout: int = 30):

        # setup the internals
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    """
    Issue a single GET request

    Transport failures and timeouts propagate as aiohttp.ClientError or
    asyncio.TimeoutError for the caller to classify.

    @param url: str Absolute url to fetch
    @param params: dict Optional query parameters
    @return UpstreamResponse: Status, headers and body
    """
    async def get(self, url: str, params: Optional[Dict[str, str]] = None) -> UpstreamResponse:

        # fetch it and read the whole body while the connection is open
        async with self.session.get(url, params=params, timeout=self.timeout) as resp:
            body = await resp.read()
            return UpstreamResponse(
                status=resp.status,
                body=body,
                headers=dict(resp.headers)
            )
