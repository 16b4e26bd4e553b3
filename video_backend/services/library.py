"""媒体库门面：由 Config 构造点播与直播两类资产，路由层只通过它访问磁盘。

实例只持有不可变配置，可被所有请求线程共享。
"""
from __future__ import annotations

import logging
from pathlib import Path

from ..config import Config
from ..errors import NotFound, StorageFailure
from .hls import (
    AssetKind,
    list_assets,
    read_playlist,
    resolve_playlist,
    resolve_segment,
    rewrite_playlist,
    segment_base_url,
)

logger = logging.getLogger(__name__)

VOD_ROUTE = "videos"
LIVE_ROUTE = "live"


class MediaLibrary:
    """点播 + 直播资产的统一访问入口。"""

    def __init__(self, config: Config) -> None:
        self.api_prefix = config.api_prefix
        self.vod = AssetKind(
            route=VOD_ROUTE,
            root=Path(config.vod_root),
            segment_max_age=config.vod_segment_max_age,
            list_key="assets",
        )
        self.live = AssetKind(
            route=LIVE_ROUTE,
            root=Path(config.live_root),
            segment_max_age=config.live_segment_max_age,
            list_key="live",
            root_optional=True,
        )
        self._kinds = {self.vod.route: self.vod, self.live.route: self.live}

    def kind(self, route: str) -> AssetKind:
        try:
            return self._kinds[route]
        except KeyError:
            raise NotFound() from None

    def ensure_roots(self) -> None:
        """创建点播根目录；直播根目录由外部填充，不在此创建。"""
        try:
            self.vod.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("创建点播根目录失败: %s (%s)", self.vod.root, exc)
            raise StorageFailure("创建点播根目录失败") from exc

    def playlist(self, kind: AssetKind, name: str) -> str:
        """读取资产的 index.m3u8，并把分片引用改写为 API 地址。"""
        path = resolve_playlist(kind, name)
        base_url = segment_base_url(self.api_prefix, kind.route, path.parent.name)
        return rewrite_playlist(read_playlist(path), base_url)

    def segment_path(self, kind: AssetKind, name: str, segment: str) -> Path:
        return resolve_segment(kind, name, segment)

    def names(self, kind: AssetKind) -> list[str]:
        return list_assets(kind.root, missing_ok=kind.root_optional)
