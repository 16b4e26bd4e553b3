"""HLS 服务：名称清洗、资产路径解析、播放列表改写、资产列表与分片推流。"""
from .listing import list_assets
from .naming import fallback_name, sanitize_component, sanitize_upload_name
from .playlist import read_playlist, rewrite_playlist, segment_base_url
from .resolver import (
    PLAYLIST_NAME,
    SEGMENT_EXT,
    AssetKind,
    resolve_asset_file,
    resolve_playlist,
    resolve_segment,
)
from .serve import playlist_response, stream_segment

__all__ = [
    "list_assets",
    "fallback_name",
    "sanitize_component",
    "sanitize_upload_name",
    "read_playlist",
    "rewrite_playlist",
    "segment_base_url",
    "PLAYLIST_NAME",
    "SEGMENT_EXT",
    "AssetKind",
    "resolve_asset_file",
    "resolve_playlist",
    "resolve_segment",
    "playlist_response",
    "stream_segment",
]
