"""测试名称清洗：路径穿越字符被去除，上传名称只保留安全字符。"""
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from video_backend.services.hls.naming import (
    fallback_name,
    sanitize_component,
    sanitize_upload_name,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("movie", "movie"),
        ("../../etc/passwd", "passwd"),
        ("..\\..\\windows\\win.ini", "win.ini"),
        ("/absolute/path/segment001.ts", "segment001.ts"),
        ("  spaced  ", "spaced"),
        ("..", ""),
        (".", ""),
        ("a/..", ""),
        ("dir/", ""),
        ("", ""),
        (None, ""),
        ("bad\x00name", ""),
    ],
)
def test_sanitize_component(raw, expected):
    assert sanitize_component(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("My Holiday Video", "My-Holiday-Video"),
        ("clip_01-final", "clip_01-final"),
        ("***weird***name!!", "weird-name"),
        ("../uploads/evil name", "evil-name"),
        ("视频", ""),
        ("---", ""),
    ],
)
def test_sanitize_upload_name(raw, expected):
    assert sanitize_upload_name(raw) == expected


def test_fallback_name_uses_unix_seconds():
    assert fallback_name(1700000000.7) == "upload-1700000000"
    assert fallback_name().startswith("upload-")
