"""点播 / 直播 HLS 接口。

- GET /api/videos：点播资产列表
- GET /api/videos/<name>/stream：改写后的点播播放列表
- GET /api/videos/<name>/segment/<segment>：点播分片（长缓存）
- POST /api/videos/upload：上传并转码为 HLS
- GET /api/live、/api/live/<name>/stream、/api/live/<name>/segment/<segment>：直播，分片短缓存
"""
from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, jsonify, request

from ..services.hls import playlist_response, stream_segment
from ..services.library import LIVE_ROUTE, VOD_ROUTE, MediaLibrary
from ..services.upload_service import ingest_upload


api_bp = Blueprint("api", __name__)

logger = logging.getLogger(__name__)


def _library() -> MediaLibrary:
    return current_app.extensions["media_library"]


def _serve_playlist(route: str, name: str) -> Response:
    library = _library()
    return playlist_response(library.playlist(library.kind(route), name))


def _serve_segment(route: str, name: str, segment: str) -> Response:
    library = _library()
    kind = library.kind(route)
    path = library.segment_path(kind, name, segment)
    return stream_segment(path, kind.segment_max_age)


def _list(route: str) -> Response:
    library = _library()
    kind = library.kind(route)
    return jsonify({kind.list_key: library.names(kind)})


@api_bp.route("/videos", methods=["GET"])
def list_videos():
    """返回点播根目录下包含 index.m3u8 的资产名。"""
    return _list(VOD_ROUTE)


@api_bp.route("/videos/<string:name>/stream", methods=["GET"])
def stream_video(name: str) -> Response:
    return _serve_playlist(VOD_ROUTE, name)


@api_bp.route("/videos/<string:name>/segment/<string:segment>", methods=["GET"])
def serve_segment(name: str, segment: str) -> Response:
    return _serve_segment(VOD_ROUTE, name, segment)


@api_bp.route("/videos/upload", methods=["POST"])
def upload_video():
    """multipart 上传：字段 file（必填）与 name（可选），转码成功返回 201。"""
    result = ingest_upload(
        request.files.get("file"),
        request.form.get("name"),
        current_app.config["VIDEO_BACKEND"],
    )
    logger.info("上传转码完成: %s", result.asset)
    return jsonify(result.to_dict()), 201


@api_bp.route("/live", methods=["GET"])
def list_live():
    """直播根目录不存在时返回空列表。"""
    return _list(LIVE_ROUTE)


@api_bp.route("/live/<string:name>/stream", methods=["GET"])
def stream_live(name: str) -> Response:
    return _serve_playlist(LIVE_ROUTE, name)


@api_bp.route("/live/<string:name>/segment/<string:segment>", methods=["GET"])
def serve_live_segment(name: str, segment: str) -> Response:
    return _serve_segment(LIVE_ROUTE, name, segment)
