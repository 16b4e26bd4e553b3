"""应用配置：点播根目录、直播根目录、ffmpeg 路径与转码参数。

- 默认值来自环境变量；若存在 config 文件（JSON），其中的键覆盖环境变量
- 点播根目录：VOD_ROOT，默认 ./videos
- 直播根目录：LIVE_ROOT，默认 <点播根目录>/live，由外部填充，允许不存在
- ffmpeg_path：可选，未配置时使用环境变量 FFMPEG_PATH，否则使用 "ffmpeg"
- 各组件在构造时显式接收 Config 实例，服务路径上不读取模块级目录常量
"""
from __future__ import annotations

import json
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
CONFIG_FILE = Path(os.getenv("CONFIG_FILE", str(BASE_DIR / "config.json")))

_TRUE_VALUES = {"1", "true", "yes", "on"}

# 分片缓存时间（秒）：点播分片不可变，可长期缓存；直播分片会被上游轮换覆盖，只能短暂缓存
VOD_SEGMENT_MAX_AGE = 3600
LIVE_SEGMENT_MAX_AGE = 15


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


class Config:
    """应用配置。可直接构造（测试中传入临时目录），也可由 load_from_file 从 config 文件补充。"""

    def __init__(
        self,
        vod_root: str | Path | None = None,
        live_root: str | Path | None = None,
        *,
        ffmpeg_path: str | None = None,
        encode_timeout: float | None = None,
        keep_source: bool | None = None,
    ) -> None:
        self._vod_root = Path(vod_root or os.getenv("VOD_ROOT", "./videos"))
        self._live_root: Path | None = None
        if live_root is not None:
            self._live_root = Path(live_root)
        elif os.getenv("LIVE_ROOT"):
            self._live_root = Path(os.environ["LIVE_ROOT"])
        self._ffmpeg_path = ffmpeg_path
        self.encode_timeout: float = (
            encode_timeout
            if encode_timeout is not None
            else float(os.getenv("ENCODE_TIMEOUT", "3600"))
        )
        self.keep_source: bool = (
            keep_source if keep_source is not None else _env_bool("KEEP_SOURCE", True)
        )

        prefix = os.getenv("API_PREFIX", "/api").strip("/")
        self.api_prefix: str = f"/{prefix}" if prefix else ""
        self.max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(1 << 30)))
        self.vod_segment_max_age: int = int(os.getenv("VOD_SEGMENT_MAX_AGE", str(VOD_SEGMENT_MAX_AGE)))
        self.live_segment_max_age: int = int(os.getenv("LIVE_SEGMENT_MAX_AGE", str(LIVE_SEGMENT_MAX_AGE)))
        # 日志级别：环境变量 LOG_LEVEL，可选 DEBUG / INFO / WARNING / ERROR，默认 INFO
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.port: int = int(os.getenv("PORT", "8080"))

    @property
    def vod_root(self) -> Path:
        return self._vod_root

    @property
    def live_root(self) -> Path:
        """直播根目录；未配置时位于点播根目录下的 live 子目录。"""
        if self._live_root is not None:
            return self._live_root
        return self._vod_root / "live"

    @property
    def ffmpeg_path(self) -> str:
        """ffmpeg 可执行路径；未配置时用环境变量 FFMPEG_PATH，否则 "ffmpeg"。"""
        if self._ffmpeg_path is not None and self._ffmpeg_path.strip():
            return self._ffmpeg_path.strip()
        return os.environ.get("FFMPEG_PATH", "ffmpeg")

    def load_from_file(self, path: Path | None = None) -> None:
        """从 config 文件加载 vod_root / live_root / ffmpeg_path / encode_timeout / keep_source。"""
        path = path or CONFIG_FILE
        if not path.exists():
            return
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return
        if not isinstance(data, dict):
            return
        if data.get("vod_root"):
            self._vod_root = Path(str(data["vod_root"]).strip())
        if data.get("live_root"):
            self._live_root = Path(str(data["live_root"]).strip())
        if data.get("ffmpeg_path") is not None:
            self._ffmpeg_path = str(data["ffmpeg_path"]).strip() or None
        if data.get("encode_timeout") is not None:
            try:
                self.encode_timeout = float(data["encode_timeout"])
            except (TypeError, ValueError):
                pass
        if isinstance(data.get("keep_source"), bool):
            self.keep_source = data["keep_source"]


config = Config()
config.load_from_file()
