#!/usr/bin/env python3
"""
Stream Data Models Module

This module defines all data models and configuration classes for XtreamGate.
It includes models for provider credentials, sessions, channel entries, and
application configuration.

@package XtreamGate
"""

# add our imports
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

# the stream types a gateway url may carry, and the scopes a generate request may ask for
STREAM_TYPES = ("live", "movie")
CONTENT_SCOPES = ("live", "movie", "both")

"""
Provider connection details

The credential bundle a session token maps to. The server url is normalized
so it never carries trailing slashes.
"""
@dataclass(frozen=True)
class ProviderCredentials:
    """Provider connection details"""
    server_url: str
    username: str
    password: str

    """
    Build a credential bundle from raw user input

    @param server_url: str Provider base url as typed by the user
    @param username: str Provider username
    @param password: str Provider password
    @return ProviderCredentials: Credentials with a normalized server url
    """
    @classmethod
    def from_input(cls, server_url: str, username: str, password: str) -> "ProviderCredentials":
        return cls(server_url=server_url.strip().rstrip('/'), username=username, password=password)

    def __repr__(self) -> str:
        # keep the secrets out of logs and tracebacks
        return f"ProviderCredentials(server_url={self.server_url!r}, username=***, password=***)"

"""
A live gateway session

Binds an opaque token to one immutable credential bundle until it expires.
"""
@dataclass(frozen=True)
class Session:
    """A live gateway session"""
    token: str
    credentials: ProviderCredentials
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

"""
Information about a single provider listing item

Built once from a provider record and mapped into gateway urls and playlist lines.
"""
@dataclass(frozen=True)
class ChannelEntry:
    """Information about a single provider listing item"""
    name: str
    stream_id: Union[int, str]
    type: str
    epg_channel_id: str = ""
    category_name: str = ""
    stream_icon: str = ""

    """
    Build a channel entry from a raw provider record

    Missing or null fields fall back to empty strings. Records without a
    stream id cannot be addressed through the gateway, so None is returned.

    @param record: dict Raw record from get_live_streams / get_vod_streams
    @param stream_type: str Either 'live' or 'movie'
    @return ChannelEntry or None: The entry, or None when it has no stream id
    """
    @classmethod
    def from_provider(cls, record: Dict[str, Any], stream_type: str) -> Optional["ChannelEntry"]:

        # we need a dict to work with
        if not isinstance(record, dict):
            return None

        # no stream id, no gateway url
        stream_id = record.get('stream_id')
        if stream_id is None or stream_id == '':
            return None

        # keep numeric ids as the provider sent them
        if isinstance(stream_id, bool) or not isinstance(stream_id, int):
            stream_id = str(stream_id)

        # return the entry with fallbacks applied
        return cls(
            name=_text(record.get('name')),
            stream_id=stream_id,
            type=stream_type,
            epg_channel_id=_text(record.get('epg_channel_id')),
            category_name=_text(record.get('category_name')),
            stream_icon=_text(record.get('stream_icon')),
        )

def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)

"""
Main application configuration

Top-level configuration containing server binding, session and upstream settings.
"""
@dataclass
class AppConfig:
    """Main application configuration"""
    bind_host: str = "0.0.0.0"
    bind_port: int = 8080
    public_url: str = ""  # empty means derive from the incoming request
    log_level: str = "INFO"
    session_ttl: int = 86400  # seconds
    sweep_interval: int = 300  # seconds
    upstream_timeout: int = 30  # seconds
    preview_limit: int = 50
    user_agent: str = "XtreamGate/1.0"
