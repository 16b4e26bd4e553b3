"""分片推流与播放列表响应：Content-Type、跨域与缓存策略按点播/直播区分。"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Response, send_file

from ...errors import StorageFailure

logger = logging.getLogger(__name__)

PLAYLIST_MIMETYPE = "application/vnd.apple.mpegurl"
SEGMENT_MIMETYPE = "video/mp2t"  # MPEG-TS


def stream_segment(path: Path, max_age: int) -> Response:
    """打开分片并流式返回整个文件。

    打开失败（包括存在性检查之后文件被删除）属于服务端错误，抛出 StorageFailure；
    不存在的情况应在解析阶段已返回 404。
    """
    try:
        fh = open(path, "rb")
    except OSError as exc:
        logger.error("打开分片失败: %s (%s)", path, exc)
        raise StorageFailure("分片读取失败") from exc

    try:
        size = os.fstat(fh.fileno()).st_size
        response = send_file(
            fh,
            mimetype=SEGMENT_MIMETYPE,
            conditional=False,
            etag=False,
            max_age=max_age,
        )
    except Exception:
        fh.close()
        raise
    response.content_length = size
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


def playlist_response(body: str) -> Response:
    """返回改写后的播放列表；no-cache 使点播与直播客户端都拉取最新列表。"""
    return Response(
        body,
        mimetype=PLAYLIST_MIMETYPE,
        headers={
            "Cache-Control": "no-cache",
            "Access-Control-Allow-Origin": "*",
        },
    )
