"""
Playlist generator tests.
Covers gateway url building, the preview bound, and EXTINF formatting.
"""

from xtreamgate.models import ChannelEntry
from xtreamgate.services import PlaylistGenerator
from xtreamgate.services.playlist import sanitize

BASE = "https://gw.example"
TOKEN = "tok"


def live(n, **extra):
    return ChannelEntry(name=f"Live {n}", stream_id=n, type="live", **extra)


def movie(n, **extra):
    return ChannelEntry(name=f"Movie {n}", stream_id=n, type="movie", **extra)


class TestStreamUrl:
    """Test gateway stream urls"""

    def test_url_format(self):
        """Url should carry id, token and type"""
        url = PlaylistGenerator().stream_url(BASE, 10, TOKEN, "live")
        assert url == "https://gw.example/10.m3u8?token=tok&type=live"


class TestPreview:
    """Test the bounded preview list"""

    def test_preview_is_capped_at_fifty(self):
        """Preview should hold at most fifty entries"""
        entries = [live(i) for i in range(120)]
        preview = PlaylistGenerator().preview(entries, TOKEN, BASE)

        assert len(preview) == 50
        assert preview[0]["stream_id"] == 0
        assert preview[-1]["stream_id"] == 49

    def test_preview_shorter_than_limit(self):
        """Preview length should be the entry count when below the limit"""
        preview = PlaylistGenerator().preview([live(1), movie(2)], TOKEN, BASE)
        assert len(preview) == 2

    def test_preview_keeps_live_before_movies(self):
        """Concatenation order is preserved"""
        entries = [live(1), live(2), movie(3)]
        preview = PlaylistGenerator(preview_limit=2).preview(entries, TOKEN, BASE)

        assert [p["type"] for p in preview] == ["live", "live"]

    def test_preview_entry_shape(self):
        """Each preview item has name, stream_id, type and url"""
        preview = PlaylistGenerator().preview([movie(7)], TOKEN, BASE)

        assert preview == [{
            "name": "Movie 7",
            "stream_id": 7,
            "type": "movie",
            "url": "https://gw.example/7.m3u8?token=tok&type=movie",
        }]


class TestBuildPlaylist:
    """Test full playlist generation"""

    def test_line_count_ignores_preview_limit(self):
        """Playlist has a header plus two lines for every entry"""
        entries = [live(i) for i in range(80)] + [movie(i) for i in range(80, 100)]
        playlist = PlaylistGenerator().build_playlist(entries, TOKEN, BASE)
        lines = playlist.split("\n")

        assert lines[0] == "#EXTM3U"
        assert len(lines) == 1 + 2 * 100
        assert lines[-1] == "https://gw.example/99.m3u8?token=tok&type=movie"

    def test_live_line_attributes(self):
        """Live entries carry guide id, name, logo and group"""
        entry = live(5, epg_channel_id="cnn.us", category_name="News", stream_icon="http://logo/cnn.png")
        lines = PlaylistGenerator().build_playlist([entry], TOKEN, BASE).split("\n")

        assert lines[1] == ('#EXTINF:-1 tvg-id="cnn.us" tvg-name="Live 5" '
                            'tvg-logo="http://logo/cnn.png" group-title="News",Live 5')
        assert lines[2] == "https://gw.example/5.m3u8?token=tok&type=live"

    def test_live_fallbacks(self):
        """Missing live fields fall back to stream id, Unknown Channel and Uncategorized"""
        entry = ChannelEntry(name="", stream_id=42, type="live")
        lines = PlaylistGenerator().build_playlist([entry], TOKEN, BASE).split("\n")

        assert lines[1] == ('#EXTINF:-1 tvg-id="42" tvg-name="Unknown Channel" '
                            'tvg-logo="" group-title="Uncategorized",Unknown Channel')

    def test_movie_line_and_fallbacks(self):
        """Movies skip guide attributes and fall back to Unknown Movie and Movies"""
        entry = ChannelEntry(name="", stream_id=9, type="movie")
        lines = PlaylistGenerator().build_playlist([entry], TOKEN, BASE).split("\n")

        assert lines[1] == '#EXTINF:-1 tvg-logo="" group-title="Movies",Unknown Movie'
        assert lines[2] == "https://gw.example/9.m3u8?token=tok&type=movie"

    def test_quotes_and_commas_are_stripped(self):
        """Names with quotes and commas must not break the EXTINF line"""
        entry = ChannelEntry(name='CNN, HD "Live"', stream_id=1, type="live",
                             category_name='Sports, "Premium"')
        line = PlaylistGenerator().build_playlist([entry], TOKEN, BASE).split("\n")[1]

        assert 'tvg-name="CNN HD Live"' in line
        assert 'group-title="Sports Premium"' in line
        assert line.endswith(",CNN HD Live")

    def test_empty_playlist(self):
        """No entries gives just the header"""
        assert PlaylistGenerator().build_playlist([], TOKEN, BASE) == "#EXTM3U"


def test_sanitize_strips_line_breaks():
    """Line breaks would split an entry across lines"""
    assert sanitize('a\r\nb') == "ab"
    assert sanitize(None) == ""
