#!/usr/bin/env python3
"""
Playlist Generator Module

This module rewrites provider listing entries into gateway-hosted stream
urls. It produces a bounded preview list for display and a full extended
M3U playlist covering every entry.

@package XtreamGate
"""

# setup the imports
import re
from typing import Any, Dict, List, Union
from urllib.parse import quote
from xtreamgate.models import ChannelEntry

# characters that would break an EXTINF attribute or the trailing display name
_UNSAFE_CHARS = re.compile(r'[",\r\n]')

"""
Strip characters that would make an EXTINF line malformed

@param value: str Raw value from the provider
@return str: Value with quotes, commas and line breaks removed
"""
def sanitize(value: str) -> str:
    return _UNSAFE_CHARS.sub('', value or '')

"""
Builds gateway urls and playlists for a session token

Both outputs preserve the input order, which callers keep as all live
entries followed by all movie entries.
"""
class PlaylistGenerator:

    """
    Initialize the PlaylistGenerator

    @param preview_limit: int Maximum entries in the preview list
    """
    def __init__(self, preview_limit: int = 50):

        # setup the internals
        self.preview_limit = preview_limit

    """
    Build the gateway url for one stream

    @param gateway_base: str Public base url of this gateway, no trailing slash
    @param stream_id: str Provider stream id
    @param token: str Session token
    @param stream_type: str Either 'live' or 'movie'
    @return str: Gateway stream url
    """
    def stream_url(self, gateway_base: str, stream_id: Union[int, str], token: str, stream_type: str) -> str:
        return f"{gateway_base}/{stream_id}.m3u8?token={quote(token, safe='')}&type={stream_type}"

    """
    Build the preview list

    Only bounds the response size for display; the full playlist is
    unaffected by the limit.

    @param entries: list ChannelEntry objects in output order
    @param token: str Session token
    @param gateway_base: str Public base url of this gateway
    @return list: Dicts with name, stream_id, type and url
    """
    def preview(self, entries: List[ChannelEntry], token: str, gateway_base: str) -> List[Dict[str, Any]]:
        return [
            {
                "name": entry.name,
                "stream_id": entry.stream_id,
                "type": entry.type,
                "url": self.stream_url(gateway_base, entry.stream_id, token, entry.type)
            }
            for entry in entries[:self.preview_limit]
        ]

    """
    Build the EXTINF line for one entry

    @param entry: ChannelEntry Entry to describe
    @return str: The #EXTINF metadata line
    """
    def _extinf(self, entry: ChannelEntry) -> str:

        # setup the shared attributes
        logo = sanitize(entry.stream_icon)

        # live channels carry guide attributes
        if entry.type == 'live':
            name = sanitize(entry.name) or "Unknown Channel"
            tvg_id = sanitize(entry.epg_channel_id or str(entry.stream_id))
            group = sanitize(entry.category_name) or "Uncategorized"
            return f'#EXTINF:-1 tvg-id="{tvg_id}" tvg-name="{name}" tvg-logo="{logo}" group-title="{group}",{name}'

        # movies only carry a logo and a group
        name = sanitize(entry.name) or "Unknown Movie"
        group = sanitize(entry.category_name) or "Movies"
        return f'#EXTINF:-1 tvg-logo="{logo}" group-title="{group}",{name}'

    """
    Build the full extended M3U playlist

    @param entries: list ChannelEntry objects in output order
    @param token: str Session token
    @param gateway_base: str Public base url of this gateway
    @return str: Playlist with a header line and two lines per entry
    """
    def build_playlist(self, entries: List[ChannelEntry], token: str, gateway_base: str) -> str:

        # set the first line that we need to output
        lines = ['#EXTM3U']

        # metadata line then url line for every entry
        for entry in entries:
            lines.append(self._extinf(entry))
            lines.append(self.stream_url(gateway_base, entry.stream_id, token, entry.type))

        # return all lines
        return '\n'.join(lines)
