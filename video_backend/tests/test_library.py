"""测试 MediaLibrary：由 Config 构造两类资产，播放列表读取后即改写。"""
import tempfile
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from video_backend.config import LIVE_SEGMENT_MAX_AGE, VOD_SEGMENT_MAX_AGE, Config
from video_backend.errors import NotFound
from video_backend.services.library import MediaLibrary


@pytest.fixture
def library():
    with tempfile.TemporaryDirectory() as d:
        base = Path(d)
        yield MediaLibrary(Config(vod_root=base / "vod", live_root=base / "live"))


def test_kinds_follow_config(library):
    assert library.vod.segment_max_age == VOD_SEGMENT_MAX_AGE == 3600
    assert library.live.segment_max_age == LIVE_SEGMENT_MAX_AGE == 15
    assert library.live.root_optional
    assert not library.vod.root_optional
    assert library.kind("videos") is library.vod
    with pytest.raises(NotFound):
        library.kind("archive")


def test_ensure_roots_only_creates_vod(library):
    library.ensure_roots()
    assert library.vod.root.is_dir()
    assert not library.live.root.exists()


def test_playlist_uses_sanitized_name(library):
    asset = library.vod.root / "movie"
    asset.mkdir(parents=True)
    (asset / "index.m3u8").write_text("#EXTM3U\n segment000.ts \n", encoding="utf-8")
    text = library.playlist(library.vod, "../movie")
    assert text == "#EXTM3U\n/api/videos/movie/segment/segment000.ts\n"


def test_default_live_root_is_inside_vod_root():
    cfg = Config(vod_root="/srv/videos")
    assert cfg.live_root == Path("/srv/videos/live")
