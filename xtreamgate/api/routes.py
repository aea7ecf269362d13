#!/usr/bin/env python3
"""
API Routes Module

This module defines all the HTTP endpoints for the XtreamGate application.
It includes the form UI, session generation, tokenized stream proxying,
status, and CORS preflight handling.

@package XtreamGate
"""

# imports
import logging, re
from functools import lru_cache
from pathlib import Path
from typing import Optional
from fastapi import APIRouter, Request, Query
from fastapi.responses import HTMLResponse, Response

from xtreamgate.exceptions import BadRequestError, NotFoundError

# setup the logger
logger = logging.getLogger(__name__)

# setup the api router
router = APIRouter()

# the headers every answer carries, preflight included
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# provider stream ids are plain ascii digits
NUMERIC_ID = re.compile(r"[0-9]+")

# where the form UI lives
INDEX_TEMPLATE = Path(__file__).resolve().parent.parent / "templates" / "index.html"

"""
Get gateway instance from application state

@param request: Request FastAPI request object
@return XtreamGateway: Gateway instance from app state
"""
def get_gateway(request: Request):
    """Get gateway instance from app state"""
    return request.app.state.gateway

"""
Get the public base url stream urls are built on

Uses the configured public url, falling back to the url the client reached us on.

@param request: Request FastAPI request object
@return str: Base url without a trailing slash
"""
def get_gateway_base(request: Request) -> str:
    gateway = get_gateway(request)
    if gateway.config.public_url:
        return gateway.config.public_url.rstrip('/')
    return str(request.base_url).rstrip('/')

"""
Read the form UI page
The page is static, so it is read from disk once.

@return str: HTML of the form page
"""
@lru_cache(maxsize=1)
def load_index() -> str:
    return INDEX_TEMPLATE.read_text(encoding='utf-8')

"""
Answer CORS preflight for any path

@return Response: Empty 200 with the CORS headers
"""
@router.options("/{path:path}")
async def preflight(path: str):
    return Response(status_code=200, headers=CORS_HEADERS)

"""
Form UI for generating a session

@return HTMLResponse: The static form page
"""
@router.get("/", response_class=HTMLResponse)
async def root():
    return HTMLResponse(content=load_index())

"""
Get service status information

Reports running state and the number of sessions held. Never exposes
tokens or credentials.

@param request: Request FastAPI request object
@return dict: Service status
"""
@router.get("/api/status")
async def get_status(request: Request):
    """Get service status"""
    return get_gateway(request).status()

"""
Generate a session token and playlist

Validates the provider credentials, fetches the requested listings, and
returns a token with gateway urls that hide the credentials.

@param request: Request FastAPI request object
@return dict: Token, channel preview, playlist and expiry
@throws BadRequestError: 400 on a missing field, bad body, or unknown content type
@throws InvalidCredentialsError: 401 when the provider rejects the credentials
@throws NoChannelsFoundError: 404 when no channels were found
"""
@router.post("/api/generate")
async def generate(request: Request):
    """Generate a session token and playlist"""

    # pull the body, anything that isn't JSON is missing its fields
    try:
        payload = await request.json()
    except ValueError:
        raise BadRequestError("Missing required fields")

    # run the generate flow
    return await get_gateway(request).generate(payload, get_gateway_base(request))

"""
Stream a channel by query parameters

Same semantics as /{stream_id}.m3u8, with the id in the query string.

@param request: Request FastAPI request object
@param id: str Numeric provider stream id
@param token: str Session token
@param type: str Stream type, defaults to live
@return Response: Upstream status and body
@throws NotFoundError: 404 when the id is missing or not numeric
"""
@router.get("/playlist.m3u8")
async def stream_by_query(
    request: Request,
    id: Optional[str] = Query(None),
    token: Optional[str] = Query(None),
    type: Optional[str] = Query(None)
):
    """Stream a channel by query parameters"""
    if not id or not NUMERIC_ID.fullmatch(id):
        raise NotFoundError()

    return await get_gateway(request).stream(id, token, type)

"""
Stream a channel by path

@param stream_id: str Numeric provider stream id
@param request: Request FastAPI request object
@param token: str Session token
@param type: str Stream type, defaults to live
@return Response: Upstream status and body
@throws NotFoundError: 404 when the id is not numeric
"""
@router.get("/{stream_id}.m3u8")
async def stream_by_path(
    stream_id: str,
    request: Request,
    token: Optional[str] = Query(None),
    type: Optional[str] = Query(None)
):
    """Stream a channel by path"""
    if not NUMERIC_ID.fullmatch(stream_id):
        raise NotFoundError()

    return await get_gateway(request).stream(stream_id, token, type)
