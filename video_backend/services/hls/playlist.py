"""播放列表改写：把存储的 index.m3u8 中的裸分片文件名改写为 API 分片地址。

编码器产出的播放列表以文件名引用分片（segment000.ts），客户端需要可直接请求的 API 路径。
匹配是纯文本的：去掉首尾空白后以 "segment" 开头、以 ".ts" 结尾的行才会被改写，
其余行（#EXT 指令、空行、无法识别的内容）原样保留。
"""
from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote

from ...errors import StorageFailure
from .resolver import SEGMENT_EXT, SEGMENT_PREFIX

logger = logging.getLogger(__name__)


def is_segment_reference(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(SEGMENT_PREFIX) and stripped.endswith(SEGMENT_EXT)


def rewrite_playlist(content: str, base_segment_url: str) -> str:
    """逐行改写播放列表，结果以 "\\n" 连接。

    被改写的行替换为 base_segment_url + 去空白后的文件名（原有空白不保留）；
    未命中的行保持原样，包括其空白。纯函数，不会抛出异常。
    """
    lines = []
    for line in content.split("\n"):
        if is_segment_reference(line):
            lines.append(base_segment_url + line.strip())
        else:
            lines.append(line)
    return "\n".join(lines)


def segment_base_url(api_prefix: str, kind_route: str, asset_name: str) -> str:
    """<api 前缀>/<资产类别>/<资产名>/segment/"""
    return f"{api_prefix}/{kind_route}/{quote(asset_name, safe='')}/segment/"


def read_playlist(path: Path) -> str:
    """读取存储的播放列表文本；检查后文件消失或读取失败均视为 StorageFailure。"""
    try:
        return path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        logger.error("读取播放列表失败: %s (%s)", path, exc)
        raise StorageFailure("读取播放列表失败") from exc
