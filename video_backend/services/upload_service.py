"""上传入库：保存上传文件为资产目录下的 source.<ext>，调用 ffmpeg 转码为 HLS。

- 资产名优先取表单 name，否则取上传文件名（去扩展名），清洗后为空则使用 upload-<时间戳>
- 同名资产目录已存在时覆盖其中的 HLS 文件
- 源文件保留策略由 config.keep_source 决定（默认保留）
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..config import Config
from ..errors import BadInput, StorageFailure
from ..ffmpeg_util import encode_hls
from .hls import fallback_name, sanitize_upload_name
from .library import VOD_ROUTE

logger = logging.getLogger(__name__)

SOURCE_STEM = "source"


@dataclass
class UploadResult:
    """上传结果：资产名与可直接播放的播放列表地址。"""
    asset: str
    playlist: str

    def to_dict(self) -> dict:
        return {"asset": self.asset, "playlist": self.playlist}


def derive_asset_name(requested_name: Optional[str], filename: Optional[str]) -> str:
    """表单 name 优先，其次上传文件名去扩展名；清洗后为空时生成后备名。"""
    name = (requested_name or "").strip()
    if not name:
        name = Path(filename or "").stem
    return sanitize_upload_name(name) or fallback_name()


def _source_suffix(filename: Optional[str]) -> str:
    return Path(secure_filename(filename or "")).suffix.lower()


def _overlaps_live_root(target_dir: Path, config: Config) -> bool:
    """直播根目录默认位于点播根目录下（<vod_root>/live），同名上传会写进直播目录。"""
    target = target_dir.resolve()
    live = Path(config.live_root).resolve()
    return live == target or target in live.parents


def save_upload(file: FileStorage, target: Path) -> None:
    """先写入 .part 临时文件再 os.replace，避免留下半截的源文件。"""
    partial = target.with_name(target.name + ".part")
    try:
        file.save(str(partial))
        os.replace(partial, target)
    except OSError as exc:
        logger.error("保存上传文件失败: %s (%s)", target, exc)
        try:
            partial.unlink()
        except OSError:
            pass
        raise StorageFailure("保存上传文件失败") from exc


def ingest_upload(
    file: Optional[FileStorage],
    requested_name: Optional[str],
    config: Config,
) -> UploadResult:
    """保存上传文件并转码为 HLS，返回 UploadResult。

    缺少文件或资产名与直播根目录冲突 -> BadInput；目录/文件写入失败 -> StorageFailure；
    ffmpeg 不存在或转码失败 -> DependencyUnavailable / EncodeFailure（由 encode_hls 抛出）。
    """
    if file is None or not file.filename:
        raise BadInput("缺少视频文件")

    asset = derive_asset_name(requested_name, file.filename)
    target_dir = Path(config.vod_root) / asset
    if _overlaps_live_root(target_dir, config):
        raise BadInput("资产名与直播目录冲突，请更换名称")
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("创建资产目录失败: %s (%s)", target_dir, exc)
        raise StorageFailure("创建资产目录失败") from exc

    source = target_dir / f"{SOURCE_STEM}{_source_suffix(file.filename)}"
    save_upload(file, source)
    logger.info("已保存上传文件: asset=%s, path=%s", asset, source)

    encode_hls(
        source,
        target_dir,
        ffmpeg_path=config.ffmpeg_path,
        timeout_sec=config.encode_timeout,
    )

    if not config.keep_source:
        try:
            source.unlink()
        except OSError as exc:
            logger.warning("删除源文件失败: %s (%s)", source, exc)

    return UploadResult(
        asset=asset,
        playlist=f"{config.api_prefix}/{VOD_ROUTE}/{asset}/stream",
    )
