"""HLS 视频后端应用入口。

- 由显式的 Config 创建 Flask 应用，注册 CORS、错误处理与 API 蓝本
- 确保点播根目录存在；直播根目录由外部填充，可不存在
- 启动时自检 ffmpeg 是否可用（仅记录日志，不影响播放接口）
- 直接运行时绑定 0.0.0.0:PORT（默认 8080），支持局域网访问
"""
from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import Config, config as default_config
from .errors import BadInput, NotFound, VideoBackendError
from .ffmpeg_util import check_ffmpeg_available
from .routes.api import api_bp
from .services.library import MediaLibrary

logger = logging.getLogger(__name__)


def create_app(cfg: Optional[Config] = None) -> Flask:
    """创建并配置 Flask 应用实例；cfg 为空时使用模块级默认配置。"""
    cfg = cfg or default_config
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config["VIDEO_BACKEND"] = cfg
    app.config["MAX_CONTENT_LENGTH"] = cfg.max_upload_bytes

    # 所有响应允许任意来源跨域访问，OPTIONS 预检由 flask-cors 应答
    CORS(
        app,
        send_wildcard=True,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    library = MediaLibrary(cfg)
    library.ensure_roots()
    app.extensions["media_library"] = library

    app.register_blueprint(api_bp, url_prefix=cfg.api_prefix)
    _register_error_handlers(app)

    @app.route("/health", methods=["GET"])
    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    if not check_ffmpeg_available(cfg.ffmpeg_path):
        logger.warning("ffmpeg 不可用（%s），上传接口将返回 500", cfg.ffmpeg_path)

    logger.info("点播目录: %s，直播目录: %s", cfg.vod_root, cfg.live_root)
    return app


def _register_error_handlers(app: Flask) -> None:
    """把错误分类映射为 JSON 响应；对外消息不含内部路径。"""

    @app.errorhandler(VideoBackendError)
    def handle_backend_error(exc: VideoBackendError):
        if isinstance(exc, NotFound):
            logger.debug("404 %s %s", request.method, request.path)
        elif isinstance(exc, BadInput):
            logger.info("400 %s %s: %s", request.method, request.path, exc.message)
        else:
            logger.error("%s %s %s: %s", exc.status_code, request.method, request.path, exc.message)
        return jsonify({"error": exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code


if __name__ == "__main__":
    app = create_app()
    # 绑定 0.0.0.0 以便局域网访问；threaded 使每个请求独立处理
    app.run(host="0.0.0.0", port=default_config.port, threaded=True)
