"""测试播放列表改写：只改写 segment*.ts 行，其余行原样保留。"""
import tempfile
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from video_backend.errors import StorageFailure
from video_backend.services.hls.playlist import (
    read_playlist,
    rewrite_playlist,
    segment_base_url,
)

BASE = "/api/videos/x/segment/"


def test_rewrite_round_trip():
    content = "#EXTM3U\nsegment000.ts\n#EXT-X-ENDLIST"
    assert rewrite_playlist(content, BASE) == (
        "#EXTM3U\n/api/videos/x/segment/segment000.ts\n#EXT-X-ENDLIST"
    )


def test_rewrite_full_ffmpeg_playlist():
    content = (
        "#EXTM3U\n"
        "#EXT-X-VERSION:3\n"
        "#EXT-X-TARGETDURATION:6\n"
        "#EXT-X-MEDIA-SEQUENCE:0\n"
        "#EXTINF:6.006000,\n"
        "segment000.ts\n"
        "#EXTINF:4.170833,\n"
        "segment001.ts\n"
        "#EXT-X-ENDLIST\n"
    )
    out = rewrite_playlist(content, BASE).split("\n")
    assert out[5] == BASE + "segment000.ts"
    assert out[7] == BASE + "segment001.ts"
    assert out[:5] == content.split("\n")[:5]
    assert out[-1] == ""


def test_whitespace_dropped_only_on_rewritten_lines():
    content = "  segment000.ts\r\n  #EXTINF:6.0,  \n\t\n"
    lines = rewrite_playlist(content, BASE).split("\n")
    assert lines[0] == BASE + "segment000.ts"
    assert lines[1] == "  #EXTINF:6.0,  "
    assert lines[2] == "\t"


@pytest.mark.parametrize(
    "line",
    [
        "#EXTM3U",
        "#EXT-X-KEY:METHOD=NONE",
        "chunk000.ts",
        "segment000.mp4",
        "other/segment000.ts",
        "",
        "garbage \x01 line",
    ],
)
def test_non_segment_lines_untouched_and_idempotent(line):
    once = rewrite_playlist(line, BASE)
    assert once == line
    assert rewrite_playlist(once, BASE) == once


def test_segment_base_url_quotes_name():
    assert segment_base_url("/api", "videos", "x") == "/api/videos/x/segment/"
    assert segment_base_url("/api", "live", "my stream") == "/api/live/my%20stream/segment/"


def test_read_playlist_missing_is_storage_failure():
    with tempfile.TemporaryDirectory() as d:
        with pytest.raises(StorageFailure):
            read_playlist(Path(d) / "gone" / "index.m3u8")


def test_read_playlist_replaces_undecodable_bytes():
    with tempfile.TemporaryDirectory() as d:
        path = Path(d) / "index.m3u8"
        path.write_bytes(b"#EXTM3U\n\xff\nsegment000.ts")
        text = read_playlist(path)
        assert text.startswith("#EXTM3U\n")
        assert text.endswith("segment000.ts")
