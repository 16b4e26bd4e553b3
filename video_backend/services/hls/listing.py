"""资产列表：根目录下包含 index.m3u8 的直接子目录即为可播放资产。"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from ...errors import StorageFailure
from .resolver import PLAYLIST_NAME

logger = logging.getLogger(__name__)


def list_assets(root: Path, *, missing_ok: bool = False) -> list[str]:
    """返回按名称排序的资产名列表。

    - 根目录不存在：missing_ok 为 True 时返回空列表，否则 StorageFailure
    - 根目录存在但不可读（权限、非目录、其它 I/O 错误）：StorageFailure
    - 扫描过程中消失或无法 stat 的条目直接跳过
    """
    names: list[str] = []
    try:
        with os.scandir(root) as entries:
            for entry in entries:
                try:
                    if not entry.is_dir():
                        continue
                except OSError:
                    continue
                if os.path.isfile(os.path.join(entry.path, PLAYLIST_NAME)):
                    names.append(entry.name)
    except FileNotFoundError as exc:
        if missing_ok:
            logger.debug("根目录不存在，返回空列表: %s", root)
            return []
        logger.error("根目录不存在: %s", root)
        raise StorageFailure("读取资产目录失败") from exc
    except OSError as exc:
        logger.error("读取根目录失败: %s (%s)", root, exc)
        raise StorageFailure("读取资产目录失败") from exc
    return sorted(names)
