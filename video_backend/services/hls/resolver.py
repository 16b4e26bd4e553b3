"""资产路径解析：<root>/<资产名>/<文件名>，两个名称分别清洗后再拼接并检查存在性。

存在性检查与随后的打开不要求原子：检查后文件被删除时，由读取/推流阶段报告 StorageFailure。
"""
from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from ...errors import NotFound, StorageFailure
from .naming import sanitize_component

logger = logging.getLogger(__name__)

PLAYLIST_NAME = "index.m3u8"
SEGMENT_PREFIX = "segment"
SEGMENT_EXT = ".ts"


@dataclass(frozen=True)
class AssetKind:
    """资产类别（点播 / 直播）：决定根目录、URL 段与分片缓存策略，数据形态相同。"""

    route: str               # URL 中的类别段：videos / live
    root: Path
    segment_max_age: int     # 分片 Cache-Control max-age（秒）
    list_key: str            # 列表接口 JSON 的键名
    root_optional: bool = False  # 根目录不存在时列表返回空而非报错


def resolve_asset_file(
    root: Path,
    asset_name: str,
    file_name: str,
    *,
    segment: bool = False,
) -> Path:
    """计算 root/asset_name/file_name 并校验其为已存在的普通文件。

    不存在或不是普通文件 -> NotFound；其它 I/O 错误（如权限不足）-> StorageFailure。
    segment=True 时若文件名缺少 .ts 扩展名则自动补上。
    """
    asset = sanitize_component(asset_name)
    name = sanitize_component(file_name)
    if not asset or not name:
        raise NotFound()
    if segment and not name.endswith(SEGMENT_EXT):
        name += SEGMENT_EXT

    path = Path(root) / asset / name
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        logger.debug("文件不存在: %s", path)
        raise NotFound() from None
    except OSError as exc:
        logger.error("检查文件失败: %s (%s)", path, exc)
        raise StorageFailure("读取文件失败") from exc
    if not stat.S_ISREG(st.st_mode):
        logger.debug("不是普通文件: %s", path)
        raise NotFound()
    return path


def resolve_playlist(kind: AssetKind, asset_name: str) -> Path:
    try:
        return resolve_asset_file(kind.root, asset_name, PLAYLIST_NAME)
    except NotFound:
        raise NotFound("播放列表不存在") from None


def resolve_segment(kind: AssetKind, asset_name: str, segment_name: str) -> Path:
    try:
        return resolve_asset_file(kind.root, asset_name, segment_name, segment=True)
    except NotFound:
        raise NotFound("分片不存在") from None
