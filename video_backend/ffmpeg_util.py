"""通过 ffmpeg 把上传的源文件转码为 HLS（index.m3u8 + segmentNNN.ts）。

启动时自检 ffmpeg 是否可用；转码有超时上限，超时或进程被中断（KeyboardInterrupt）时子进程会被杀掉，
stdout/stderr 合并捕获，失败时写入日志便于诊断。
"""
from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from pathlib import Path

from .errors import DependencyUnavailable, EncodeFailure
from .services.hls.resolver import PLAYLIST_NAME, SEGMENT_EXT, SEGMENT_PREFIX

logger = logging.getLogger(__name__)

_IS_WIN = sys.platform == "win32"

# 自检超时（秒），仅验证 ffmpeg 可执行
CHECK_TIMEOUT_SEC = 2.0
# 单个分片目标时长（秒）
HLS_TIME_SEC = 6


def _run_kwargs(timeout_sec: float) -> dict:
    kwargs: dict = {"stdout": subprocess.PIPE, "stderr": subprocess.STDOUT, "timeout": timeout_sec}
    if _IS_WIN:
        kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW
    return kwargs


def ffmpeg_version(ffmpeg_path: str, timeout_sec: float = CHECK_TIMEOUT_SEC) -> str | None:
    """返回 `ffmpeg -version` 的首行（如 "ffmpeg version 6.1 ..."）；不可用时返回 None。

    转码固定使用 libx264，编译配置中缺少 --enable-libx264 时记录警告。
    """
    executable = shutil.which(ffmpeg_path)
    if executable is None:
        logger.info("ffmpeg 未找到: %s，上传转码将不可用", ffmpeg_path)
        return None
    try:
        result = subprocess.run([executable, "-version"], **_run_kwargs(timeout_sec))
    except subprocess.TimeoutExpired:
        logger.warning("ffmpeg 自检超时 (%ss): %s", timeout_sec, executable)
        return None
    except OSError as e:
        logger.info("ffmpeg 自检异常: %s (%s)", executable, e)
        return None

    output = _decode(result.stdout)
    if result.returncode != 0:
        logger.info("ffmpeg 自检失败: returncode=%s, path=%s", result.returncode, executable)
        return None
    if "--enable-libx264" not in output:
        logger.warning("ffmpeg 未启用 libx264，上传转码可能失败: %s", executable)
    banner = output.strip().splitlines()[0] if output.strip() else executable
    logger.info("ffmpeg 可用: %s", banner)
    return banner


def check_ffmpeg_available(ffmpeg_path: str, timeout_sec: float = CHECK_TIMEOUT_SEC) -> bool:
    """启动自检：ffmpeg 可执行且 -version 正常退出。"""
    return ffmpeg_version(ffmpeg_path, timeout_sec) is not None


def build_hls_command(ffmpeg_path: str, source: Path, target_dir: Path, hls_time: int = HLS_TIME_SEC) -> list[str]:
    return [
        ffmpeg_path,
        "-y",
        "-i", str(source),
        "-c:v", "libx264",
        "-c:a", "aac",
        "-hls_time", str(hls_time),
        "-hls_list_size", "0",
        "-hls_segment_filename", str(target_dir / f"{SEGMENT_PREFIX}%03d{SEGMENT_EXT}"),
        str(target_dir / PLAYLIST_NAME),
    ]


def encode_hls(
    source: Path,
    target_dir: Path,
    *,
    ffmpeg_path: str,
    timeout_sec: float,
    hls_time: int = HLS_TIME_SEC,
) -> Path:
    """把 source 转码为 target_dir 下的 HLS，返回 index.m3u8 路径。

    ffmpeg 不存在 -> DependencyUnavailable；非零退出或超时 -> EncodeFailure。
    subprocess.run 在超时及任何异常（包括 KeyboardInterrupt）时都会先杀掉子进程再向上抛出。
    """
    executable = shutil.which(ffmpeg_path)
    if executable is None:
        logger.error("ffmpeg 未安装或不可执行: %s", ffmpeg_path)
        raise DependencyUnavailable("ffmpeg 未安装")

    cmd = build_hls_command(executable, source, target_dir, hls_time)

    logger.info("开始转码: %s -> %s", source, target_dir)
    try:
        result = subprocess.run(cmd, **_run_kwargs(timeout_sec))
    except FileNotFoundError as exc:
        logger.error("ffmpeg 无法启动: %s (%s)", executable, exc)
        raise DependencyUnavailable("ffmpeg 未安装") from exc
    except subprocess.TimeoutExpired as exc:
        output = _decode(exc.output)
        logger.error("ffmpeg 转码超时 (%ss): %s, output: %s", timeout_sec, source, output)
        raise EncodeFailure(output=output) from exc

    output = _decode(result.stdout)
    if result.returncode != 0:
        logger.error("ffmpeg 转码失败: returncode=%s, source=%s, output: %s", result.returncode, source, output)
        raise EncodeFailure(output=output)

    logger.info("转码完成: %s", target_dir)
    return target_dir / PLAYLIST_NAME


def _decode(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")
